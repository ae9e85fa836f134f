from __future__ import annotations

import logging
import os
from typing import List, Optional

from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtWidgets import (
    QFileDialog,
    QLabel,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from wrytr.errors import FileRejected
from wrytr.file_intake import AUDIO_FILE_FILTER, AudioFile, accept_dropped_files
from wrytr.i18n import localize_widget_tree, tr
from wrytr.media_probe import DurationProbe
from wrytr.settings_store import AppSettings, save_settings
from wrytr.timecode import seconds_to_time
from wrytr.transcription_client import TranscriptionClient
from wrytr.ui.drop_zone import DropZone
from wrytr.ui.time_range_selector import TimeRangeSelector
from wrytr.ui.toast import ToastNotifier
from wrytr.upload import UploadOrchestrator
from wrytr.version import get_app_title_base

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Transcription successful."
FAILURE_MESSAGE = "An error occurred during transcription."


class MainWindow(QMainWindow):
    """Single page: drop an audio file, choose a range, send it for transcription."""

    fileRejected = pyqtSignal(str, str)

    def __init__(
        self,
        settings: Optional[AppSettings] = None,
        client: Optional[TranscriptionClient] = None,
        probe: Optional[DurationProbe] = None,
        orchestrator: Optional[UploadOrchestrator] = None,
        persist_settings: bool = True,
    ) -> None:
        super().__init__()
        self.settings = settings or AppSettings()
        self._persist_settings = persist_settings
        self._audio_file: Optional[AudioFile] = None
        self._transcription = ""

        if orchestrator is None:
            client = client or TranscriptionClient(self.settings.server_url, self.settings.request_timeout_sec)
            orchestrator = UploadOrchestrator(client, parent=self)
        self.orchestrator = orchestrator
        self.probe = probe or DurationProbe(parent=self)

        self.setWindowTitle(get_app_title_base())
        self.resize(760, 560)
        self._build_ui()
        self.toasts = ToastNotifier(self.centralWidget(), self.settings.toast_duration_ms)

        self.drop_zone.filesDropped.connect(self.load_files)
        self.drop_zone.browseRequested.connect(self._browse_for_file)
        self.probe.durationResolved.connect(self._on_duration_resolved)
        self.probe.durationFailed.connect(self._on_duration_failed)
        self.orchestrator.uploadingChanged.connect(self._on_uploading_changed)
        self.orchestrator.transcriptionReady.connect(self._on_transcription_ready)
        self.orchestrator.transcriptionFailed.connect(self._on_transcription_failed)
        self.transcribe_button.clicked.connect(self.transcribe)

        self._refresh_controls()
        localize_widget_tree(self)

    def _build_ui(self) -> None:
        root = QWidget()
        layout = QVBoxLayout(root)
        layout.setContentsMargins(24, 20, 24, 20)
        layout.setSpacing(14)

        self.title_label = QLabel("Wrytr")
        self.title_label.setAlignment(Qt.AlignCenter)
        self.title_label.setStyleSheet("font-size:24px;font-weight:700;")
        layout.addWidget(self.title_label)

        self.drop_zone = DropZone()
        layout.addWidget(self.drop_zone)

        self.duration_label = QLabel("")
        self.duration_label.setAlignment(Qt.AlignCenter)
        self.duration_label.setStyleSheet("color:#6B7280;")
        layout.addWidget(self.duration_label)

        self.selector = TimeRangeSelector()
        layout.addWidget(self.selector)

        self.uploading_label = QLabel("Uploading and transcribing...")
        self.uploading_label.setAlignment(Qt.AlignCenter)
        self.uploading_label.setVisible(False)
        layout.addWidget(self.uploading_label)

        self.transcription_header = QLabel("Transcription:")
        self.transcription_header.setStyleSheet("font-weight:700;")
        self.transcription_header.setVisible(False)
        layout.addWidget(self.transcription_header)

        self.transcription_label = QLabel("")
        self.transcription_label.setObjectName("transcription-text")
        self.transcription_label.setWordWrap(True)
        self.transcription_label.setTextInteractionFlags(Qt.TextSelectableByMouse)
        self.transcription_label.setVisible(False)
        layout.addWidget(self.transcription_label, 1)
        layout.addStretch(1)

        self.transcribe_button = QPushButton("Transcribe")
        self.transcribe_button.setMinimumHeight(36)
        layout.addWidget(self.transcribe_button)

        self.setCentralWidget(root)

    @property
    def audio_file(self) -> Optional[AudioFile]:
        return self._audio_file

    @property
    def transcription(self) -> str:
        return self._transcription

    def load_files(self, file_paths: List[str]) -> bool:
        try:
            accepted = accept_dropped_files(file_paths)
        except FileRejected as exc:
            logger.warning("Rejected %s: %s", exc.path or "file", exc.reason)
            self.fileRejected.emit(exc.path, exc.reason)
            return False
        if accepted is None:
            return False
        self._audio_file = accepted
        self.drop_zone.set_selected_file(accepted.name)
        self.duration_label.setText(tr("Reading audio length..."))
        # The previous file's bound no longer applies until the new one resolves.
        self.selector.set_media_duration(None)
        self.probe.request(accepted.path)
        self._refresh_controls()
        return True

    def transcribe(self) -> bool:
        if not self.orchestrator.can_submit(self._audio_file):
            return False
        return self.orchestrator.submit(
            self._audio_file, self.selector.start_time(), self.selector.end_time()
        )

    def resizeEvent(self, event) -> None:
        super().resizeEvent(event)
        self.toasts.reposition()

    def closeEvent(self, event) -> None:
        self.probe.cancel()
        super().closeEvent(event)

    def _browse_for_file(self) -> None:
        start_dir = self.settings.last_open_dir or os.path.expanduser("~")
        file_path, _ = QFileDialog.getOpenFileName(
            self,
            tr("Select Audio File"),
            start_dir,
            AUDIO_FILE_FILTER,
        )
        if not file_path:
            return
        self.settings.last_open_dir = os.path.dirname(file_path)
        if self._persist_settings:
            save_settings(self.settings)
        self.load_files([file_path])

    def _on_duration_resolved(self, seconds: int) -> None:
        self.selector.set_media_duration(seconds)
        if seconds > 0:
            self.duration_label.setText(tr(f"Audio length: {seconds_to_time(seconds)}"))
        else:
            self.duration_label.setText(tr("Audio length unknown"))

    def _on_duration_failed(self, _error: str) -> None:
        self.selector.set_media_duration(None)
        self.duration_label.setText(tr("Audio length unknown"))

    def _on_uploading_changed(self, uploading: bool) -> None:
        self.uploading_label.setVisible(bool(uploading))
        self._refresh_controls()

    def _on_transcription_ready(self, text: str) -> None:
        self._transcription = str(text)
        self.transcription_label.setText(self._transcription)
        self.transcription_header.setVisible(True)
        self.transcription_label.setVisible(True)
        self.toasts.success(tr(SUCCESS_MESSAGE))

    def _on_transcription_failed(self, _message: str) -> None:
        self.toasts.error(tr(FAILURE_MESSAGE))

    def _refresh_controls(self) -> None:
        self.transcribe_button.setEnabled(self.orchestrator.can_submit(self._audio_file))
