"""Rich console output: status lines, event and plan tables."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .timeutil import format_duration

if TYPE_CHECKING:
    from .events import Event
    from .planner import CutWindow

console = Console()
err_console = Console(stderr=True)


def print_event_table(events: list[Event]) -> None:
    """Print the events resolved for this run."""
    table = Table(title="Events")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Start", style="cyan")
    table.add_column("End", style="cyan")
    table.add_column("Title", style="green")
    table.add_column("Series")

    for event in events:
        table.add_row(
            str(event.event_id),
            event.start_datetime,
            event.end_datetime,
            event.full_title or "—",
            event.series_name or "—",
        )

    console.print(table)


def show_cut_plan(event: Event, files: list[Path], cut: CutWindow) -> None:
    """Show which captures feed an event and where they get trimmed."""
    table = Table(title=f"Cut Plan: {escape(event.full_title or str(event.event_id))}")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Capture File", style="cyan")

    for i, path in enumerate(files, 1):
        table.add_row(str(i), path.name)

    console.print(table)
    console.print(
        f"  Cut: {format_duration(cut.start_offset_seconds)} → "
        f"{format_duration(cut.end_offset_seconds)} "
        f"({format_duration(cut.duration_seconds)})"
    )


def print_success(message: str) -> None:
    console.print(f"[green]✓[/green] {escape(message)}")


def print_warning(message: str) -> None:
    console.print(f"[yellow]⚠[/yellow] {escape(message)}")


def print_error(message: str) -> None:
    err_console.print(f"[red]✗[/red] {escape(message)}")


def print_info(message: str) -> None:
    console.print(f"[blue]ℹ[/blue] {escape(message)}")


def print_header(message: str) -> None:
    console.print(Panel(escape(message), style="bold cyan"))
