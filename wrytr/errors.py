"""Exceptions shared by the time-range engine and its collaborators."""

from __future__ import annotations

from typing import Optional


class InvalidTimeFormat(ValueError):
    """Raised when a time string or duration cannot be converted."""


class InvalidRange(ValueError):
    """Raised when a range update would leave start at or after end."""


class FileRejected(Exception):
    """Raised when a dropped file fails the media type or size check."""

    def __init__(self, reason: str, path: str = "") -> None:
        super().__init__(reason)
        self.reason = reason
        self.path = path


class UploadFailed(Exception):
    """Raised when the transcription request fails or returns garbage."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
