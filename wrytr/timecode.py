from __future__ import annotations

import re
from typing import Tuple

from wrytr.errors import InvalidTimeFormat

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 3600

_TIME_PATTERN = re.compile(r"^(\d+):(\d+):(\d+)$")


def seconds_to_time(total_seconds: int) -> str:
    total = _coerce_seconds(total_seconds)
    hours, remainder = divmod(total, SECONDS_PER_HOUR)
    minutes, seconds = divmod(remainder, SECONDS_PER_MINUTE)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def time_to_seconds(value: str) -> int:
    hours, minutes, seconds = split_time(value)
    return hours * SECONDS_PER_HOUR + minutes * SECONDS_PER_MINUTE + seconds


def time_to_short_form(value: str) -> str:
    """Render ``HH:MM:SS`` as ``MM:SS``, folding whole hours into minutes."""
    minutes, seconds = divmod(time_to_seconds(value), SECONDS_PER_MINUTE)
    return f"{minutes:02d}:{seconds:02d}"


def split_time(value: str) -> Tuple[int, int, int]:
    text = value.strip() if isinstance(value, str) else ""
    match = _TIME_PATTERN.match(text)
    if not match:
        raise InvalidTimeFormat(f"Invalid time format: {value!r}. Expected HH:MM:SS.")
    hours, minutes, seconds = (int(part) for part in match.groups())
    if minutes >= 60 or seconds >= 60:
        raise InvalidTimeFormat(f"Invalid time values in {value!r}: minutes and seconds must be < 60")
    return hours, minutes, seconds


def join_time(hours: int, minutes: int, seconds: int) -> str:
    if hours < 0 or not (0 <= minutes < 60) or not (0 <= seconds < 60):
        raise InvalidTimeFormat(f"Invalid time fields: {hours}, {minutes}, {seconds}")
    return f"{int(hours):02d}:{int(minutes):02d}:{int(seconds):02d}"


def _coerce_seconds(value: int) -> int:
    if isinstance(value, (bool, str)):
        raise InvalidTimeFormat(f"Invalid duration: {value!r}")
    try:
        negative = value < 0
        total = int(value)
    except (TypeError, ValueError):
        raise InvalidTimeFormat(f"Invalid duration: {value!r}") from None
    if negative:
        raise InvalidTimeFormat(f"Duration must not be negative: {value!r}")
    return total
