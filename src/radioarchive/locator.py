"""Find the capture files that cover an event's time window."""

from __future__ import annotations

import re
from datetime import timedelta
from pathlib import Path

from .config import Config
from .errors import StorageError
from .events import Event
from .timeutil import parse_local_datetime

CAPTURE_NAME_RE = re.compile(
    r"(\d{4}-\d{2}-\d{2})[ T_-]?(\d{2})[:_-]?(\d{2})[:_-]?(\d{2})"
)


def parse_capture_name(name: str) -> tuple[str, str] | None:
    """Extract ('YYYY-MM-DD', 'HH:MM:SS') from a capture file name.

    Returns None for names that do not embed a date and time.
    """
    match = CAPTURE_NAME_RE.search(name)
    if not match:
        return None
    date, hour, minute, second = match.groups()
    return date, f"{hour}:{minute}:{second}"


def get_capture_files(day_dir: Path) -> list[Path]:
    """Get WAV files in a date directory; a missing directory has none."""
    if not day_dir.is_dir():
        return []
    try:
        return [p for p in day_dir.glob("*.wav") if p.is_file()]
    except OSError as e:
        raise StorageError(f"Cannot list captures in {day_dir}: {e}") from e


def find_capture_files(event: Event, config: Config) -> list[Path]:
    """Select the ordered captures overlapping the event's offset window.

    The last file starting at or before the window start becomes the first
    segment (earlier files are dropped); every later file starting before
    the window end is appended. Zero-padded names sort chronologically.
    """
    shift = timedelta(seconds=config.offset)
    search_start = parse_local_datetime(event.start_datetime, config.tz) + shift
    search_end = parse_local_datetime(event.end_datetime, config.tz) + shift

    start_date = f"{search_start:%Y-%m-%d}"
    start_time = f"{search_start:%H:%M:%S}"
    end_date = f"{search_end:%Y-%m-%d}"
    end_time = f"{search_end:%H:%M:%S}"

    candidates = get_capture_files(config.source_dir / start_date)
    if end_date != start_date:
        candidates += get_capture_files(config.source_dir / end_date)
    candidates.sort(key=lambda p: p.name)

    selected: list[Path] = []
    for path in candidates:
        stamp = parse_capture_name(path.name)
        if stamp is None:
            continue
        file_date, file_time = stamp

        # Reset first: a file may open the window and also fall inside it.
        if file_date <= start_date and file_time <= start_time:
            selected = [path]
        if file_date >= start_date and file_time < end_time and path not in selected:
            selected.append(path)

    return selected
