"""Deterministic file names derived from event metadata."""

from __future__ import annotations

import re
from pathlib import Path

from .config import Config
from .events import Event
from .timeutil import parse_local_datetime

FORBIDDEN_CHARS_RE = re.compile(r"[/<>$|'\"*]")
WHITESPACE_RE = re.compile(r"\s+")


def escape_filename(name: str) -> str:
    """Strip characters unsafe for file names and collapse whitespace runs."""
    name = FORBIDDEN_CHARS_RE.sub("", name)
    return WHITESPACE_RE.sub(" ", name)


def build_source_filename(event: Event, config: Config) -> Path:
    """Path of the merged WAV: '{target}/{YYYY-MM-DD} {HH_MM}-{title}.wav'."""
    start = parse_local_datetime(event.start_datetime, config.tz)
    title = escape_filename(event.full_title)
    return config.target_dir / f"{start:%Y-%m-%d} {start:%H_%M}-{title}.wav"


def build_output_filename(event: Event, source_filename: Path, config: Config) -> Path:
    """Marker path for the encoded archive in the event's date bucket.

    Keeps the '.wav' root of the merged file; the encoder writes the real
    artifact next to it (see encoded_filename).
    """
    return config.target_dir / event.start_date / f"{source_filename.stem}.wav"


def encoded_filename(output_filename: Path) -> Path:
    return output_filename.with_suffix(".mp3")


def partial_filename(path: Path) -> Path:
    """Sibling a stage writes to before it is promoted to path."""
    return path.with_name(f"{path.stem}.part{path.suffix}")
