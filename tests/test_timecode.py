import pytest

from wrytr.errors import InvalidTimeFormat
from wrytr.timecode import join_time, seconds_to_time, split_time, time_to_seconds, time_to_short_form


def test_round_trip_over_supported_range():
    for total in range(0, 360000):
        assert time_to_seconds(seconds_to_time(total)) == total


def test_formatting_preserves_ordering():
    previous = seconds_to_time(0)
    for total in range(1, 360000, 7):
        current = seconds_to_time(total)
        assert current > previous
        previous = current


def test_seconds_to_time_pads_fields():
    assert seconds_to_time(0) == "00:00:00"
    assert seconds_to_time(500) == "00:08:20"
    assert seconds_to_time(3723) == "01:02:03"
    assert seconds_to_time(359999) == "99:59:59"


def test_hours_grow_past_two_digits():
    assert seconds_to_time(360000) == "100:00:00"
    assert time_to_seconds("100:00:00") == 360000


def test_float_seconds_are_floored():
    assert seconds_to_time(61.9) == "00:01:01"


def test_short_form_folds_hours_into_minutes():
    assert time_to_short_form("01:02:30") == "62:30"
    assert time_to_short_form("00:08:20") == "08:20"
    assert time_to_short_form("00:00:05") == "00:05"


def test_split_and_join():
    assert split_time("02:15:09") == (2, 15, 9)
    assert join_time(2, 15, 9) == "02:15:09"


@pytest.mark.parametrize("value", ["", "10:00", "aa:bb:cc", "00:60:00", "00:00:60", "-1:00:00", None, 5])
def test_time_to_seconds_rejects_bad_input(value):
    with pytest.raises(InvalidTimeFormat):
        time_to_seconds(value)


@pytest.mark.parametrize("value", [-1, -0.5, "12", True, None])
def test_seconds_to_time_rejects_bad_input(value):
    with pytest.raises(InvalidTimeFormat):
        seconds_to_time(value)


def test_join_time_rejects_out_of_range_fields():
    with pytest.raises(InvalidTimeFormat):
        join_time(0, 60, 0)
    with pytest.raises(InvalidTimeFormat):
        join_time(-1, 0, 0)


def test_invalid_time_format_is_a_value_error():
    assert issubclass(InvalidTimeFormat, ValueError)
