"""CLI entry point for radioarchive."""

from __future__ import annotations

import re
from pathlib import Path

import click
import requests

from . import ui
from .config import Config, load_config
from .errors import ArchiveError, FormatError
from .events import Event, EventClient
from .pipeline import EventStatus, plan_event, process_events
from .runner import SubprocessRunner

DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def resolve_events(client: EventClient, target: str) -> list[Event]:
    """Look up events for a YYYY-MM-DD date or a numeric event id."""
    if DATE_RE.match(target):
        return client.events_for_date(target)
    if target.isdigit():
        return client.event_by_id(int(target))
    raise FormatError(
        f"DATE|EVENT_ID must be a YYYY-MM-DD date or a numeric event id, got {target!r}"
    )


def show_plans(events: list[Event], config: Config) -> None:
    for event in events:
        ui.print_header(f"Plan: {event.summary}")
        files, cut = plan_event(event, config)
        ui.show_cut_plan(event, files, cut)


@click.command()
@click.option(
    "--config", "-c", "config_path", required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="YAML configuration file.",
)
@click.option("--force", "-f", is_flag=True, help="Regenerate outputs that already exist.")
@click.option("--dry-run", "-n", is_flag=True, help="Show cut plans without running any tools.")
@click.argument("target", metavar="DATE|EVENT_ID")
def main(config_path: Path, force: bool, dry_run: bool, target: str) -> None:
    """Archive recorded broadcasts for a date or a single event as tagged MP3s."""
    try:
        config = load_config(config_path)
        session = requests.Session()
        client = EventClient(
            config.api_url,
            session=session,
            timeout=config.request_timeout,
            phase=config.phase,
        )
        events = resolve_events(client, target)
        if not events:
            ui.print_warning(f"No events found for {target}.")
            return

        ui.print_info(f"Found {len(events)} event(s).")
        ui.print_event_table(events)

        if dry_run:
            show_plans(events, config)
            return

        results = process_events(
            events, config, SubprocessRunner(), session=session, force=force,
        )
    except ArchiveError as e:
        ui.print_error(str(e))
        raise SystemExit(1)

    done = sum(1 for status in results.values() if status == EventStatus.DONE)
    ui.print_success(f"{done} archived, {len(results) - done} skipped.")
