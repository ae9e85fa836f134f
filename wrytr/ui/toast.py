from __future__ import annotations

from typing import List

from PyQt5.QtCore import QObject, Qt, QTimer
from PyQt5.QtWidgets import QLabel, QWidget

TOAST_SUCCESS = "success"
TOAST_ERROR = "error"

_TOAST_STYLES = {
    TOAST_SUCCESS: "background:#2E7D32;color:#FFFFFF;",
    TOAST_ERROR: "background:#C13F29;color:#FFFFFF;",
}
_MARGIN = 12
_SPACING = 6


class Toast(QLabel):
    def __init__(self, text: str, kind: str, parent: QWidget) -> None:
        super().__init__(text, parent)
        self.kind = kind
        self.setObjectName(f"toast-{kind}")
        self.setWordWrap(True)
        self.setAlignment(Qt.AlignVCenter | Qt.AlignLeft)
        self.setStyleSheet(
            _TOAST_STYLES.get(kind, _TOAST_STYLES[TOAST_SUCCESS])
            + "border-radius:6px;padding:10px 14px;font-weight:600;"
        )
        self.setFixedWidth(300)
        self.adjustSize()

    def mousePressEvent(self, event) -> None:
        self.hide()
        super().mousePressEvent(event)


class ToastNotifier(QObject):
    """Stacks transient messages in the top-right corner of ``host``."""

    def __init__(self, host: QWidget, duration_ms: int = 5000) -> None:
        super().__init__(host)
        self._host = host
        self._duration_ms = max(0, int(duration_ms))
        self._toasts: List[Toast] = []

    def active_toasts(self) -> List[Toast]:
        return [toast for toast in self._toasts if not toast.isHidden()]

    def success(self, text: str) -> Toast:
        return self.show_message(text, TOAST_SUCCESS)

    def error(self, text: str) -> Toast:
        return self.show_message(text, TOAST_ERROR)

    def show_message(self, text: str, kind: str) -> Toast:
        toast = Toast(text, kind, self._host)
        self._toasts.append(toast)
        toast.show()
        toast.raise_()
        if self._duration_ms > 0:
            timer = QTimer(toast)
            timer.setSingleShot(True)
            timer.timeout.connect(lambda t=toast: self._dismiss(t))
            timer.start(self._duration_ms)
        self.reposition()
        return toast

    def reposition(self) -> None:
        self._toasts = [toast for toast in self._toasts if not toast.isHidden()]
        y = _MARGIN
        for toast in self._toasts:
            x = max(_MARGIN, self._host.width() - toast.width() - _MARGIN)
            toast.move(x, y)
            y += toast.height() + _SPACING

    def _dismiss(self, toast: Toast) -> None:
        if toast in self._toasts:
            self._toasts.remove(toast)
        toast.hide()
        toast.deleteLater()
        self.reposition()

