import random

import pytest

from wrytr.errors import InvalidRange, InvalidTimeFormat
from wrytr.time_range import (
    DEFAULT_END_TIME,
    DEFAULT_START_TIME,
    LOOKAHEAD_SECONDS,
    RangeConstraintEngine,
    SelectionRange,
)
from wrytr.timecode import seconds_to_time


def _assert_invariants(engine):
    sel = engine.selection
    assert 0 <= sel.start < sel.end
    if engine.media_duration is not None:
        assert sel.end <= engine.media_duration


def test_defaults():
    engine = RangeConstraintEngine()
    assert engine.start_time == DEFAULT_START_TIME == "00:00:00"
    assert engine.end_time == DEFAULT_END_TIME == "00:10:00"
    assert engine.media_duration is None


def test_start_past_end_pushes_end_when_unbounded():
    engine = RangeConstraintEngine()
    engine.set_start("00:15:00")
    assert engine.start_time == "00:15:00"
    assert engine.end_time == "00:25:00"


def test_duration_clamps_end_and_keeps_start():
    engine = RangeConstraintEngine()
    engine.set_media_duration(500)
    assert engine.end_time == "00:08:20"
    assert engine.start_time == "00:00:00"


def test_push_is_capped_by_duration():
    engine = RangeConstraintEngine("00:10:00", "00:12:00", media_duration=1000)
    engine.set_start("00:15:00")
    assert engine.start_time == "00:15:00"
    assert engine.end_time == "00:16:40"


def test_start_before_end_leaves_end_alone():
    engine = RangeConstraintEngine()
    engine.set_start("00:05:00")
    assert engine.selection == SelectionRange(300, 600)


def test_start_on_duration_is_pulled_below_end():
    engine = RangeConstraintEngine(media_duration=1000)
    engine.set_start(1000)
    assert engine.selection == SelectionRange(999, 1000)


def test_start_beyond_duration_stays_inside():
    engine = RangeConstraintEngine(media_duration=1000)
    engine.set_start(5000)
    assert engine.selection == SelectionRange(999, 1000)


def test_duration_shorter_than_start_pulls_start_down():
    engine = RangeConstraintEngine("00:20:00", "00:30:00")
    engine.set_media_duration(600)
    assert engine.selection == SelectionRange(599, 600)


def test_unknown_duration_clears_bound_without_moving_range():
    engine = RangeConstraintEngine(media_duration=500)
    engine.set_media_duration(None)
    assert engine.media_duration is None
    assert engine.end_time == "00:08:20"
    engine.set_media_duration(0)
    assert engine.media_duration is None


def test_end_is_clamped_to_duration():
    engine = RangeConstraintEngine(media_duration=900)
    engine.set_end("00:20:00")
    assert engine.end_time == "00:15:00"


def test_end_before_start_is_rejected_without_change():
    engine = RangeConstraintEngine("00:05:00", "00:10:00")
    before = engine.selection
    with pytest.raises(InvalidRange):
        engine.set_end("00:04:00")
    with pytest.raises(InvalidRange):
        engine.set_end("00:05:00")
    assert engine.selection == before


def test_end_never_moves_start():
    engine = RangeConstraintEngine("00:05:00", "00:10:00")
    engine.set_end("00:05:01")
    assert engine.start_time == "00:05:00"


def test_reset_keeps_bound():
    engine = RangeConstraintEngine(media_duration=300)
    engine.set_start(100)
    engine.reset()
    assert engine.selection == SelectionRange(0, 300)
    assert engine.media_duration == 300


def test_constructor_rejects_inverted_range():
    with pytest.raises(InvalidRange):
        RangeConstraintEngine("00:10:00", "00:05:00")


def test_bad_values_raise():
    engine = RangeConstraintEngine()
    with pytest.raises(InvalidTimeFormat):
        engine.set_start("5 minutes")
    with pytest.raises(InvalidRange):
        engine.set_start(-1)
    with pytest.raises(InvalidRange):
        engine.set_end(True)


def test_selection_range_properties():
    sel = SelectionRange(90, 3700)
    assert sel.start_time == "00:01:30"
    assert sel.end_time == "01:01:40"
    assert sel.duration == 3610


def test_invariants_hold_under_random_events():
    rng = random.Random(20240611)
    for _ in range(50):
        engine = RangeConstraintEngine()
        for _ in range(200):
            action = rng.randrange(4)
            if action == 0:
                engine.set_start(seconds_to_time(rng.randrange(0, 7200)))
            elif action == 1:
                try:
                    engine.set_end(seconds_to_time(rng.randrange(0, 7200)))
                except InvalidRange:
                    pass
            elif action == 2:
                engine.set_media_duration(rng.choice([None, 0, rng.randrange(1, 7200)]))
            else:
                engine.reset()
            _assert_invariants(engine)


def test_lookahead_is_ten_minutes():
    assert LOOKAHEAD_SECONDS == 600
