from __future__ import annotations

import logging
from typing import Optional

from PyQt5.QtCore import pyqtSignal
from PyQt5.QtWidgets import QHBoxLayout, QWidget

from wrytr.errors import InvalidRange
from wrytr.time_range import RangeConstraintEngine, SelectionRange
from wrytr.ui.time_picker import TimePicker

logger = logging.getLogger(__name__)


class TimeRangeSelector(QWidget):
    rangeChanged = pyqtSignal(str, str)

    def __init__(self, engine: Optional[RangeConstraintEngine] = None, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._engine = engine or RangeConstraintEngine()

        root = QHBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        root.setSpacing(32)
        root.addStretch(1)
        self.start_picker = TimePicker(
            "start-time", "Start Time:", self._engine.start_time, self._engine.media_duration
        )
        self.end_picker = TimePicker(
            "end-time", "End Time:", self._engine.end_time, self._engine.media_duration
        )
        root.addWidget(self.start_picker)
        root.addWidget(self.end_picker)
        root.addStretch(1)

        self.start_picker.valueChanged.connect(self._on_start_changed)
        self.end_picker.valueChanged.connect(self._on_end_changed)

    @property
    def engine(self) -> RangeConstraintEngine:
        return self._engine

    def selection(self) -> SelectionRange:
        return self._engine.selection

    def start_time(self) -> str:
        return self._engine.start_time

    def end_time(self) -> str:
        return self._engine.end_time

    def set_media_duration(self, duration: Optional[int]) -> None:
        before = self._engine.selection
        self._engine.set_media_duration(duration)
        bound = self._engine.media_duration
        self.start_picker.set_max_duration(bound)
        self.end_picker.set_max_duration(bound)
        self._sync_pickers(before)

    def reset(self) -> None:
        before = self._engine.selection
        self._engine.reset()
        self._sync_pickers(before)

    def _on_start_changed(self, value: str) -> None:
        before = self._engine.selection
        self._engine.set_start(value)
        self._sync_pickers(before)

    def _on_end_changed(self, value: str) -> None:
        before = self._engine.selection
        try:
            self._engine.set_end(value)
        except InvalidRange as exc:
            logger.debug("End time rejected: %s", exc)
        self._sync_pickers(before)

    def _sync_pickers(self, before: SelectionRange) -> None:
        self.start_picker.set_value(self._engine.start_time)
        self.end_picker.set_value(self._engine.end_time)
        if self._engine.selection != before:
            self.rangeChanged.emit(self._engine.start_time, self._engine.end_time)
