from __future__ import annotations

from typing import List, Optional

from PyQt5.QtCore import QMimeData, Qt, pyqtSignal
from PyQt5.QtWidgets import QFrame, QLabel, QVBoxLayout, QWidget

from wrytr.file_intake import AUDIO_TYPE_PREFIX, guess_media_type
from wrytr.i18n import tr

_BORDER_COLORS = {
    "idle": "#D1D5DB",
    "active": "#22C55E",
    "reject": "#EF4444",
}


def local_paths_from_mime(mime: Optional[QMimeData]) -> List[str]:
    if mime is None or not mime.hasUrls():
        return []
    return [url.toLocalFile() for url in mime.urls() if url.isLocalFile()]


class DropZone(QFrame):
    filesDropped = pyqtSignal(list)
    browseRequested = pyqtSignal()

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setAcceptDrops(True)
        self.setCursor(Qt.PointingHandCursor)
        self.setMinimumHeight(96)
        self._drag_state = "idle"
        self._selected_name = ""

        root = QVBoxLayout(self)
        root.setContentsMargins(24, 24, 24, 24)
        self.message_label = QLabel()
        self.message_label.setAlignment(Qt.AlignCenter)
        self.message_label.setWordWrap(True)
        root.addWidget(self.message_label)
        self._refresh()

    @property
    def drag_state(self) -> str:
        return self._drag_state

    def set_selected_file(self, name: str) -> None:
        self._selected_name = str(name or "")
        self._refresh()

    def dragEnterEvent(self, event) -> None:
        paths = local_paths_from_mime(event.mimeData())
        if not paths:
            event.ignore()
            return
        audio = guess_media_type(paths[0]).startswith(AUDIO_TYPE_PREFIX)
        self._set_drag_state("active" if audio else "reject")
        event.acceptProposedAction()

    def dragLeaveEvent(self, event) -> None:
        self._set_drag_state("idle")
        super().dragLeaveEvent(event)

    def dropEvent(self, event) -> None:
        paths = local_paths_from_mime(event.mimeData())
        self._set_drag_state("idle")
        if not paths:
            event.ignore()
            return
        event.acceptProposedAction()
        self.filesDropped.emit(paths)

    def mouseReleaseEvent(self, event) -> None:
        if event.button() == Qt.LeftButton and self.rect().contains(event.pos()):
            self.browseRequested.emit()
        super().mouseReleaseEvent(event)

    def _set_drag_state(self, state: str) -> None:
        self._drag_state = state
        self._refresh()

    def _refresh(self) -> None:
        if self._drag_state != "idle":
            text = tr("Drop the audio file here...")
        elif self._selected_name:
            text = tr(f"Selected file: {self._selected_name}")
        else:
            text = tr("Drag and drop an audio file here, or click to select a file")
        self.message_label.setText(text)
        color = _BORDER_COLORS.get(self._drag_state, _BORDER_COLORS["idle"])
        self.setStyleSheet(f"DropZone{{border:2px dashed {color};border-radius:6px;}}")
