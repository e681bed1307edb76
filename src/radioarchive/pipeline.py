"""Per-event archiving: locate, merge and trim, encode, tag, normalize."""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Iterable

import requests

from . import ui
from .config import Config
from .convert import (
    build_tags, get_wav_duration, merge_and_trim, normalize_loudness, tag_mp3, wav_to_mp3,
)
from .errors import NotFoundError, StorageError
from .events import Event
from .images import fetch_image
from .locator import find_capture_files
from .naming import (
    build_output_filename, build_source_filename, encoded_filename, partial_filename,
)
from .planner import CutWindow, plan_cut, prepare_cut
from .runner import ProcessRunner
from .timeutil import format_duration


class EventStatus(str, Enum):
    SKIPPED = "skipped"
    DONE = "done"


def promote(partial: Path, final: Path) -> None:
    """Give a finished stage output its final name."""
    try:
        os.replace(partial, final)
    except OSError as e:
        raise StorageError(f"Cannot move {partial} to {final}: {e}") from e


def locate_captures(event: Event, config: Config) -> list[Path]:
    """Find captures for an event, logging their lengths. Raises if none."""
    files = find_capture_files(event, config)
    if not files:
        raise NotFoundError(
            f"No capture files found for event {event.event_id} "
            f"({event.start_datetime} → {event.end_datetime})"
        )
    for path in files:
        duration = get_wav_duration(path)
        length = format_duration(duration) if duration is not None else "unknown length"
        ui.print_info(f"Capture: {path.name} ({length})")
    return files


def plan_event(event: Event, config: Config) -> tuple[list[Path], CutWindow]:
    """Resolve captures and cut window without touching any output."""
    return locate_captures(event, config), plan_cut(event, config)


def process_event(
    event: Event,
    config: Config,
    runner: ProcessRunner,
    session: requests.Session | None = None,
    force: bool = False,
) -> EventStatus:
    """Archive one event; existing outputs are skipped unless forced."""
    source = build_source_filename(event, config)
    output = build_output_filename(event, source, config)
    mp3_path = encoded_filename(output)

    ui.print_header(f"Processing: {event.summary}")

    if mp3_path.exists() and not force:
        ui.print_info(f"Already archived: {mp3_path}, skipped.")
        return EventStatus.SKIPPED

    # Stage: captures → merged WAV
    if force or not source.exists():
        files = locate_captures(event, config)
        cut = prepare_cut(event, config, source, force=force)
        if cut is not None:
            ui.print_info(
                f"Merging {len(files)} capture(s), cut at "
                f"{format_duration(cut.start_offset_seconds)} for "
                f"{format_duration(cut.duration_seconds)}"
            )
            merged = partial_filename(source)
            merge_and_trim(runner, files, merged, cut, ffmpeg=config.ffmpeg)
            promote(merged, source)
    else:
        ui.print_info(f"Merged capture already exists: {source.name}, skipped.")

    # Stage: merged WAV → tagged, normalized MP3
    ui.print_info(f"Encoding {mp3_path.name}...")
    encoded = partial_filename(mp3_path)
    wav_to_mp3(runner, source, encoded, bitrate=config.bitrate, ffmpeg=config.ffmpeg)

    cover = fetch_image(event.image, config, session=session)
    tag_mp3(encoded, build_tags(event, config), cover=cover)

    normalize_loudness(runner, encoded, config.normalize_command)
    promote(encoded, mp3_path)

    ui.print_success(f"Archived: {mp3_path}")
    return EventStatus.DONE


def process_events(
    events: Iterable[Event],
    config: Config,
    runner: ProcessRunner,
    session: requests.Session | None = None,
    force: bool = False,
) -> dict[int, EventStatus]:
    """Process events one after another; the first error aborts the run."""
    results: dict[int, EventStatus] = {}
    for event in events:
        results[event.event_id] = process_event(
            event, config, runner, session=session, force=force,
        )
    return results
