"""Date-time parsing and duration formatting."""

from __future__ import annotations

import re
from datetime import datetime, tzinfo

from .errors import FormatError

LOCAL_DATETIME_RE = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})[ T](\d{2})[:_-](\d{2})(?:[:_-](\d{2}))?$"
)


def parse_local_datetime(value: str, tz: tzinfo) -> datetime:
    """Parse a wall-clock 'YYYY-MM-DD HH:MM[:SS]' string in the given zone.

    Hours, minutes and seconds may be separated by ':', '_' or '-', and the
    date by a space or 'T'. Raises FormatError when the string does not match.
    """
    match = LOCAL_DATETIME_RE.match(value.strip()) if value else None
    if not match:
        raise FormatError(f"Unrecognised date-time: {value!r}")

    year, month, day, hour, minute, second = match.groups()
    try:
        return datetime(
            int(year), int(month), int(day),
            int(hour), int(minute), int(second or 0),
            tzinfo=tz,
        )
    except ValueError as e:
        raise FormatError(f"Invalid date-time {value!r}: {e}") from e


def format_duration(total_seconds: float) -> str:
    """Format seconds as '[Dd ]HH:MM:SS[.mmm]'. Negative input counts as zero."""
    if total_seconds <= 0:
        return "00:00:00"

    millis = int(round(total_seconds * 1000))
    whole, millis = divmod(millis, 1000)
    days, whole = divmod(whole, 86400)
    hours, whole = divmod(whole, 3600)
    minutes, seconds = divmod(whole, 60)

    text = f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    if days:
        text = f"{days}d {text}"
    if millis:
        text = f"{text}.{millis:03d}"
    return text
