"""Cut-window arithmetic for trimming merged captures to an event."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path

from .config import Config
from .errors import StorageError
from .events import Event
from .timeutil import parse_local_datetime


@dataclass(frozen=True)
class CutWindow:
    """Where to trim within the concatenated captures, in seconds."""
    start_offset_seconds: float
    duration_seconds: float

    @property
    def end_offset_seconds(self) -> float:
        return self.start_offset_seconds + self.duration_seconds


def plan_cut(event: Event, config: Config) -> CutWindow:
    """Compute the cut window for an event.

    Captures are assumed to begin on the hour, so the start offset is the
    shifted start's position within its hour. The duration is taken before
    the offset is applied; the offset moves the window, never resizes it.
    """
    start = parse_local_datetime(event.start_datetime, config.tz)
    end = parse_local_datetime(event.end_datetime, config.tz)

    duration = end.timestamp() - start.timestamp()

    if config.offset:
        start += timedelta(seconds=config.offset)

    start_cut = start.minute * 60 + start.second + start.microsecond / 1_000_000
    return CutWindow(start_offset_seconds=start_cut, duration_seconds=duration)


def prepare_cut(
    event: Event,
    config: Config,
    target: Path,
    force: bool = False,
) -> CutWindow | None:
    """Plan the cut unless the merged target already exists.

    Returns None when target exists and force is off. With force, an
    existing target is deleted before planning.
    """
    if target.exists():
        if not force:
            return None
        try:
            target.unlink()
        except OSError as e:
            raise StorageError(f"Cannot remove {target}: {e}") from e
    return plan_cut(event, config)
