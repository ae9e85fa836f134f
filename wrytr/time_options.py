from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from wrytr.timecode import SECONDS_PER_HOUR, SECONDS_PER_MINUTE

FIELD_HOURS = "hours"
FIELD_MINUTES = "minutes"
FIELD_SECONDS = "seconds"
FIELDS = (FIELD_HOURS, FIELD_MINUTES, FIELD_SECONDS)

_FULL_RANGE = list(range(60))


@dataclass(frozen=True)
class TimeOption:
    value: int
    label: str


@dataclass(frozen=True)
class TimeOptionSets:
    hours: List[int]
    minutes: List[int]
    seconds: List[int]

    def values(self, field: str) -> List[int]:
        if field not in FIELDS:
            raise KeyError(field)
        return list(getattr(self, field))

    def options(self, field: str) -> List[TimeOption]:
        return [to_option(value) for value in self.values(field)]


def to_option(value: int) -> TimeOption:
    return TimeOption(value=int(value), label=f"{int(value):02d}")


def field_maxima(upper_bound: Optional[int]) -> Tuple[int, int, int]:
    # An unknown bound yields zero maxima; callers decide whether to cascade.
    bound = 0 if upper_bound is None else max(0, int(upper_bound))
    max_hours = bound // SECONDS_PER_HOUR
    max_minutes = (bound % SECONDS_PER_HOUR) // SECONDS_PER_MINUTE
    max_seconds = bound % SECONDS_PER_MINUTE
    return max_hours, max_minutes, max_seconds


def build_option_sets(upper_bound: Optional[int], current_hours: int, current_minutes: int) -> TimeOptionSets:
    """Return the legal hours, minutes and seconds for one time selector.

    Hours always span ``0..max_hours``. Minutes narrow only while the hours
    field sits on ``max_hours``; seconds narrow only while both hours and
    minutes sit on their maxima. Without a bound, hours offer just ``0`` and
    minutes and seconds are never narrowed.
    """
    max_hours, max_minutes, max_seconds = field_maxima(upper_bound)
    hours = list(range(max_hours + 1))
    if upper_bound is None:
        return TimeOptionSets(hours=hours, minutes=list(_FULL_RANGE), seconds=list(_FULL_RANGE))

    minutes = list(_FULL_RANGE)
    seconds = list(_FULL_RANGE)
    if int(current_hours) == max_hours:
        minutes = list(range(max_minutes + 1))
        if int(current_minutes) == max_minutes:
            seconds = list(range(max_seconds + 1))
    return TimeOptionSets(hours=hours, minutes=minutes, seconds=seconds)


def clamp_to_options(upper_bound: Optional[int], hours: int, minutes: int, seconds: int) -> Tuple[int, int, int]:
    """Pull a possibly stale selection back inside the cascade for ``upper_bound``."""
    hours = max(0, int(hours))
    minutes = max(0, int(minutes))
    seconds = max(0, int(seconds))
    if upper_bound is None:
        return hours, min(minutes, 59), min(seconds, 59)

    sets = build_option_sets(upper_bound, hours, minutes)
    hours = min(hours, sets.hours[-1])
    sets = build_option_sets(upper_bound, hours, minutes)
    minutes = min(minutes, sets.minutes[-1])
    sets = build_option_sets(upper_bound, hours, minutes)
    seconds = min(seconds, sets.seconds[-1])
    return hours, minutes, seconds
