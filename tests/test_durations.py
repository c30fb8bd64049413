from datetime import timedelta

import pytest

from jvmtui.durations import parse_duration


@pytest.mark.parametrize(
    "text, expected",
    [
        ("500ms", timedelta(milliseconds=500)),
        ("1s", timedelta(seconds=1)),
        ("2s", timedelta(seconds=2)),
        ("1h 30m", timedelta(hours=1, minutes=30)),
        ("1h30m", timedelta(hours=1, minutes=30)),
        ("3 sec", timedelta(seconds=3)),
    ],
)
def test_parse_duration(text, expected):
    assert parse_duration(text) == expected


def test_components_add_up():
    assert parse_duration("1m 1s") == parse_duration("61s")


def test_minutes_and_months_are_case_sensitive():
    assert parse_duration("1M") > parse_duration("1m")


@pytest.mark.parametrize("text", ["", "   ", "10", "abc", "5 parsecs", "1s x"])
def test_invalid_durations(text):
    with pytest.raises(ValueError):
        parse_duration(text)