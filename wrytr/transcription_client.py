"""HTTP client for the remote transcription endpoint.

The endpoint takes a multipart form with the audio ``file`` and the selected
range as ``startTime`` / ``endTime`` in ``MM:SS`` form, and answers with a
JSON object carrying a ``transcription`` string.
"""
from __future__ import annotations

import logging
from contextlib import ExitStack
from typing import Dict, List, Optional, Tuple

import requests

from wrytr.errors import UploadFailed
from wrytr.file_intake import AudioFile
from wrytr.timecode import time_to_short_form

logger = logging.getLogger(__name__)

TRANSCRIBE_PATH = "/api/transcribe"
DEFAULT_SERVER_URL = "http://localhost:3001"
DEFAULT_TIMEOUT_SEC = 600.0


def build_form_fields(start_time: str, end_time: str) -> Dict[str, str]:
    return {
        "startTime": time_to_short_form(start_time),
        "endTime": time_to_short_form(end_time),
    }


class TranscriptionClient:
    def __init__(
        self,
        server_url: str = DEFAULT_SERVER_URL,
        timeout: float = DEFAULT_TIMEOUT_SEC,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.server_url = str(server_url or DEFAULT_SERVER_URL).rstrip("/")
        self.timeout = float(timeout)
        self._session = session or requests.Session()

    @property
    def endpoint(self) -> str:
        return self.server_url + TRANSCRIBE_PATH

    def transcribe(self, audio_file: Optional[AudioFile], start_time: str, end_time: str) -> str:
        """Upload ``audio_file`` with the selected range and return the transcription text.

        Raises ``UploadFailed`` on transport errors, non-2xx responses and
        bodies that are not a JSON object with a string ``transcription``.
        """
        data = build_form_fields(start_time, end_time)
        logger.info("Posting %s (%s-%s) to %s", audio_file.name if audio_file else "<no file>", data["startTime"], data["endTime"], self.endpoint)
        try:
            with ExitStack() as stack:
                parts: List[Tuple[str, tuple]] = []
                if audio_file is not None:
                    fh = stack.enter_context(open(audio_file.path, "rb"))
                    parts.append(("file", (audio_file.name, fh, audio_file.media_type or "application/octet-stream")))
                # Plain fields ride as filename-less parts so the body stays multipart.
                parts.extend((name, (None, value)) for name, value in data.items())
                response = self._session.post(self.endpoint, files=parts, timeout=self.timeout)
        except (requests.RequestException, OSError) as exc:
            logger.error("Transcription request to %s failed: %s", self.endpoint, exc)
            raise UploadFailed(str(exc)) from exc

        if not 200 <= response.status_code < 300:
            logger.error("Transcription endpoint answered HTTP %s", response.status_code)
            raise UploadFailed(f"HTTP {response.status_code}", status_code=response.status_code)
        try:
            payload = response.json()
        except ValueError as exc:
            raise UploadFailed("Response is not JSON", status_code=response.status_code) from exc
        text = payload.get("transcription") if isinstance(payload, dict) else None
        if not isinstance(text, str):
            raise UploadFailed("Response has no transcription", status_code=response.status_code)
        logger.debug("Received %d characters of transcription", len(text))
        return text
