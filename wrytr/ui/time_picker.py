from __future__ import annotations

from typing import List, Optional

from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtWidgets import QComboBox, QGridLayout, QHBoxLayout, QLabel, QWidget

from wrytr.time_options import TimeOptionSets, build_option_sets, clamp_to_options, to_option
from wrytr.timecode import join_time, split_time


class TimePicker(QWidget):
    """Hours / minutes / seconds selector whose choices follow a duration bound."""

    valueChanged = pyqtSignal(str)

    def __init__(
        self,
        picker_id: str,
        label: str,
        value: str = "00:00:00",
        max_duration: Optional[int] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.setObjectName(picker_id)
        self._hours, self._minutes, self._seconds = split_time(value)
        self._max_duration = max_duration
        self._option_sets = build_option_sets(max_duration, self._hours, self._minutes)

        root = QHBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        root.setSpacing(8)
        self.label = QLabel(label)
        root.addWidget(self.label, 0, Qt.AlignVCenter)

        fields = QGridLayout()
        fields.setContentsMargins(0, 0, 0, 0)
        fields.setHorizontalSpacing(4)
        fields.setVerticalSpacing(2)
        self.hours_combo = self._make_combo(f"{picker_id}-hours")
        self.minutes_combo = self._make_combo(f"{picker_id}-minutes")
        self.seconds_combo = self._make_combo(f"{picker_id}-seconds")
        for column, (caption, combo) in enumerate(
            [("Hours", self.hours_combo), ("Minutes", self.minutes_combo), ("Seconds", self.seconds_combo)]
        ):
            caption_label = QLabel(caption)
            caption_label.setAlignment(Qt.AlignCenter)
            caption_label.setStyleSheet("font-size:10px;")
            fields.addWidget(caption_label, 0, column * 2)
            fields.addWidget(combo, 1, column * 2)
            if column < 2:
                fields.addWidget(QLabel(":"), 1, column * 2 + 1)
        root.addLayout(fields)
        root.addStretch(1)

        self.hours_combo.currentIndexChanged.connect(self._on_hours_changed)
        self.minutes_combo.currentIndexChanged.connect(self._on_minutes_changed)
        self.seconds_combo.currentIndexChanged.connect(self._on_seconds_changed)
        self._refresh_combos()

    def value(self) -> str:
        return join_time(self._hours, self._minutes, self._seconds)

    def fields(self) -> tuple[int, int, int]:
        return self._hours, self._minutes, self._seconds

    def max_duration(self) -> Optional[int]:
        return self._max_duration

    def option_sets(self) -> TimeOptionSets:
        return self._option_sets

    def set_value(self, value: str) -> None:
        self._hours, self._minutes, self._seconds = split_time(value)
        self._refresh_combos()

    def set_max_duration(self, max_duration: Optional[int]) -> None:
        # Callers re-clamp the value; a stale field stays visible until they do.
        self._max_duration = max_duration
        self._refresh_combos()

    def _make_combo(self, name: str) -> QComboBox:
        combo = QComboBox()
        combo.setObjectName(name)
        combo.setMinimumContentsLength(2)
        combo.setMaxVisibleItems(12)
        return combo

    def _on_hours_changed(self, index: int) -> None:
        if index < 0:
            return
        self._apply_fields(int(self.hours_combo.itemData(index)), self._minutes, self._seconds)

    def _on_minutes_changed(self, index: int) -> None:
        if index < 0:
            return
        self._apply_fields(self._hours, int(self.minutes_combo.itemData(index)), self._seconds)

    def _on_seconds_changed(self, index: int) -> None:
        if index < 0:
            return
        self._apply_fields(self._hours, self._minutes, int(self.seconds_combo.itemData(index)))

    def _apply_fields(self, hours: int, minutes: int, seconds: int) -> None:
        hours, minutes, seconds = clamp_to_options(self._max_duration, hours, minutes, seconds)
        self._hours, self._minutes, self._seconds = hours, minutes, seconds
        self.valueChanged.emit(self.value())
        self._refresh_combos()

    def _refresh_combos(self) -> None:
        self._option_sets = build_option_sets(self._max_duration, self._hours, self._minutes)
        self._populate(self.hours_combo, self._option_sets.hours, self._hours)
        self._populate(self.minutes_combo, self._option_sets.minutes, self._minutes)
        self._populate(self.seconds_combo, self._option_sets.seconds, self._seconds)

    @staticmethod
    def _populate(combo: QComboBox, values: List[int], current: int) -> None:
        shown = list(values)
        if current not in shown:
            shown.append(current)
        combo.blockSignals(True)
        try:
            combo.clear()
            for value in shown:
                option = to_option(value)
                combo.addItem(option.label, option.value)
            combo.setCurrentIndex(combo.findData(current))
        finally:
            combo.blockSignals(False)
