import os

import pytest
from PyQt5.QtWidgets import QApplication

from wrytr.time_range import RangeConstraintEngine
from wrytr.ui.time_range_selector import TimeRangeSelector

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(scope="module")
def qapp():
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app


def _select(combo, value):
    combo.setCurrentIndex(combo.findData(value))


def _recorder(selector):
    changes = []
    selector.rangeChanged.connect(lambda start, end: changes.append((start, end)))
    return changes


def test_defaults(qapp):
    selector = TimeRangeSelector()
    assert selector.start_picker.value() == "00:00:00"
    assert selector.end_picker.value() == "00:10:00"
    assert selector.start_picker.label.text() == "Start Time:"
    assert selector.end_picker.label.text() == "End Time:"


def test_start_past_end_pushes_end(qapp):
    selector = TimeRangeSelector()
    changes = _recorder(selector)
    _select(selector.start_picker.minutes_combo, 15)
    assert selector.end_picker.value() == "00:25:00"
    assert changes == [("00:15:00", "00:25:00")]


def test_duration_clamps_end_picker(qapp):
    selector = TimeRangeSelector()
    changes = _recorder(selector)
    selector.set_media_duration(500)
    assert selector.end_time() == "00:08:20"
    assert selector.end_picker.value() == "00:08:20"
    assert selector.start_picker.max_duration() == 500
    assert selector.end_picker.max_duration() == 500
    assert changes == [("00:00:00", "00:08:20")]


def test_push_capped_by_duration(qapp):
    engine = RangeConstraintEngine("00:10:00", "00:12:00", media_duration=1000)
    selector = TimeRangeSelector(engine)
    _select(selector.start_picker.minutes_combo, 15)
    assert selector.start_time() == "00:15:00"
    assert selector.end_picker.value() == "00:16:40"


def test_end_before_start_is_restored(qapp):
    selector = TimeRangeSelector()
    _select(selector.start_picker.minutes_combo, 5)
    changes = _recorder(selector)
    _select(selector.end_picker.minutes_combo, 2)
    assert selector.end_time() == "00:10:00"
    assert selector.end_picker.value() == "00:10:00"
    assert selector.start_time() == "00:05:00"
    assert changes == []


def test_end_edit_moves_only_end(qapp):
    selector = TimeRangeSelector()
    changes = _recorder(selector)
    _select(selector.end_picker.minutes_combo, 30)
    assert changes == [("00:00:00", "00:30:00")]


def test_reset_restores_defaults(qapp):
    selector = TimeRangeSelector()
    _select(selector.start_picker.minutes_combo, 20)
    selector.reset()
    assert selector.start_picker.value() == "00:00:00"
    assert selector.end_picker.value() == "00:10:00"
