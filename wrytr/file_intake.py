from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import List, Optional

from PyQt5.QtCore import QMimeDatabase

from wrytr.errors import FileRejected

logger = logging.getLogger(__name__)

MAX_UPLOAD_BYTES = 400 * 1024 * 1024
AUDIO_TYPE_PREFIX = "audio/"
AUDIO_FILE_FILTER = "Audio Files (*.mp3 *.wav *.m4a *.aac *.ogg *.oga *.opus *.flac *.wma *.webm);;All Files (*)"


@dataclass(frozen=True)
class AudioFile:
    path: str
    name: str
    size: int
    media_type: str


def guess_media_type(file_path: str) -> str:
    # Declared type comes from the file name, the way a browser fills File.type.
    mime = QMimeDatabase().mimeTypeForFile(str(file_path), QMimeDatabase.MatchExtension)
    if not mime.isValid() or mime.isDefault():
        return ""
    return str(mime.name())


def inspect_file(file_path: str) -> AudioFile:
    path = os.path.abspath(str(file_path))
    if not os.path.isfile(path):
        raise FileRejected("Not a file", path)
    return AudioFile(
        path=path,
        name=os.path.basename(path),
        size=int(os.path.getsize(path)),
        media_type=guess_media_type(path),
    )


def validate_audio_file(candidate: AudioFile, max_bytes: int = MAX_UPLOAD_BYTES) -> AudioFile:
    if not str(candidate.media_type or "").startswith(AUDIO_TYPE_PREFIX):
        raise FileRejected(f"Unsupported media type: {candidate.media_type or 'unknown'}", candidate.path)
    if candidate.size > max_bytes:
        raise FileRejected(f"File too large: {candidate.size} bytes (limit {max_bytes})", candidate.path)
    return candidate


def accept_dropped_files(file_paths: List[str], max_bytes: int = MAX_UPLOAD_BYTES) -> Optional[AudioFile]:
    """Inspect the first dropped path and return it if it is an acceptable audio file.

    Returns ``None`` for an empty drop. Raises ``FileRejected`` when the file
    fails the type or size check; extra paths beyond the first are ignored.
    """
    paths = [str(p) for p in file_paths if str(p or "").strip()]
    if not paths:
        return None
    if len(paths) > 1:
        logger.debug("Ignoring %d extra dropped file(s)", len(paths) - 1)
    return validate_audio_file(inspect_file(paths[0]), max_bytes=max_bytes)
