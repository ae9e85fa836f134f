from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

from wrytr.errors import InvalidRange
from wrytr.timecode import seconds_to_time, time_to_seconds

logger = logging.getLogger(__name__)

DEFAULT_START_TIME = "00:00:00"
DEFAULT_END_TIME = "00:10:00"
LOOKAHEAD_SECONDS = 600

TimeValue = Union[int, str]


@dataclass(frozen=True)
class SelectionRange:
    start: int
    end: int

    @property
    def start_time(self) -> str:
        return seconds_to_time(self.start)

    @property
    def end_time(self) -> str:
        return seconds_to_time(self.end)

    @property
    def duration(self) -> int:
        return self.end - self.start


class RangeConstraintEngine:
    """Owns the selected start/end pair and the media duration bound.

    Every update keeps ``0 <= start < end`` and, once a duration is known,
    ``end <= duration``. Moving the start onto or past the end pushes the end
    forward by ``LOOKAHEAD_SECONDS``; moving the end never moves the start.
    """

    def __init__(
        self,
        start: TimeValue = DEFAULT_START_TIME,
        end: TimeValue = DEFAULT_END_TIME,
        media_duration: Optional[int] = None,
    ) -> None:
        start_s = _to_seconds(start)
        end_s = _to_seconds(end)
        if start_s >= end_s:
            raise InvalidRange(f"Start {seconds_to_time(start_s)} must be before end {seconds_to_time(end_s)}")
        self._range = SelectionRange(start_s, end_s)
        self._media_duration: Optional[int] = None
        if media_duration is not None:
            self.set_media_duration(media_duration)

    @property
    def selection(self) -> SelectionRange:
        return self._range

    @property
    def start_time(self) -> str:
        return self._range.start_time

    @property
    def end_time(self) -> str:
        return self._range.end_time

    @property
    def media_duration(self) -> Optional[int]:
        return self._media_duration

    def set_media_duration(self, duration: Optional[float]) -> SelectionRange:
        # A zero or missing duration means the media length is unknown.
        if duration is None or duration <= 0:
            self._media_duration = None
            return self._range
        bound = int(duration)
        if bound <= 0:
            self._media_duration = None
            return self._range
        self._media_duration = bound
        end = min(self._range.end, bound)
        start = self._range.start
        if start >= end:
            start = max(0, end - 1)
        self._commit(start, end)
        return self._range

    def set_start(self, value: TimeValue) -> SelectionRange:
        start = _to_seconds(value)
        end = self._range.end
        if start >= end:
            end = start + LOOKAHEAD_SECONDS
            if self._media_duration is not None:
                end = min(end, self._media_duration)
        if start >= end:
            # Only reachable when the start sits on the media duration itself.
            start = max(0, end - 1)
        self._commit(start, end)
        return self._range

    def set_end(self, value: TimeValue) -> SelectionRange:
        end = _to_seconds(value)
        if self._media_duration is not None:
            end = min(end, self._media_duration)
        if end <= self._range.start:
            raise InvalidRange(
                f"End {seconds_to_time(end)} must be after start {self._range.start_time}"
            )
        self._commit(self._range.start, end)
        return self._range

    def reset(self) -> SelectionRange:
        self._commit(_to_seconds(DEFAULT_START_TIME), _to_seconds(DEFAULT_END_TIME))
        if self._media_duration is not None:
            self.set_media_duration(self._media_duration)
        return self._range

    def _commit(self, start: int, end: int) -> None:
        updated = SelectionRange(start, end)
        if updated != self._range:
            logger.debug("Selection %s-%s -> %s-%s", self.start_time, self.end_time, updated.start_time, updated.end_time)
        self._range = updated


def _to_seconds(value: TimeValue) -> int:
    if isinstance(value, str):
        return time_to_seconds(value)
    if isinstance(value, bool) or value < 0:
        raise InvalidRange(f"Invalid time value: {value!r}")
    return int(value)
