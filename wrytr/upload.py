from __future__ import annotations

import atexit
import logging
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Optional

from PyQt5.QtCore import QObject, pyqtSignal, pyqtSlot

from wrytr.errors import UploadFailed
from wrytr.file_intake import AudioFile
from wrytr.transcription_client import TranscriptionClient

logger = logging.getLogger(__name__)

_UPLOAD_EXECUTOR = ThreadPoolExecutor(max_workers=1, thread_name_prefix="wrytr-upload")


def _shutdown_upload_executor() -> None:
    _UPLOAD_EXECUTOR.shutdown(wait=False, cancel_futures=True)


atexit.register(_shutdown_upload_executor)


class UploadOrchestrator(QObject):
    uploadingChanged = pyqtSignal(bool)
    transcriptionReady = pyqtSignal(str)
    transcriptionFailed = pyqtSignal(str)
    _uploadFinished = pyqtSignal(object, object)

    def __init__(
        self,
        client: TranscriptionClient,
        executor: Optional[Executor] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._client = client
        self._executor = executor or _UPLOAD_EXECUTOR
        self._uploading = False
        self._uploadFinished.connect(self._on_upload_finished)

    @property
    def client(self) -> TranscriptionClient:
        return self._client

    @property
    def is_uploading(self) -> bool:
        return self._uploading

    def can_submit(self, audio_file: Optional[AudioFile]) -> bool:
        return (not self._uploading) and audio_file is not None

    def submit(self, audio_file: Optional[AudioFile], start_time: str, end_time: str) -> bool:
        if self._uploading:
            logger.debug("Ignoring submit while an upload is running")
            return False
        self._set_uploading(True)
        try:
            self._executor.submit(self._run_upload, audio_file, start_time, end_time)
        except RuntimeError as exc:
            # Raised by an executor that has already been shut down.
            logger.error("Could not start transcription upload: %s", exc)
            self._set_uploading(False)
            self.transcriptionFailed.emit(str(exc))
            return False
        return True

    def _run_upload(self, audio_file: Optional[AudioFile], start_time: str, end_time: str) -> None:
        try:
            text = self._client.transcribe(audio_file, start_time, end_time)
        except UploadFailed as exc:
            self._uploadFinished.emit(None, exc)
            return
        except Exception as exc:
            logger.exception("Unexpected error during transcription upload")
            self._uploadFinished.emit(None, UploadFailed(str(exc)))
            return
        self._uploadFinished.emit(text, None)

    @pyqtSlot(object, object)
    def _on_upload_finished(self, text: object, error: object) -> None:
        self._set_uploading(False)
        if error is not None:
            logger.warning("Transcription failed: %s", error)
            self.transcriptionFailed.emit(str(error))
            return
        self.transcriptionReady.emit(str(text))

    def _set_uploading(self, uploading: bool) -> None:
        if uploading == self._uploading:
            return
        self._uploading = bool(uploading)
        self.uploadingChanged.emit(self._uploading)
