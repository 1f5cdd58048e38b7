"""Tests for timex date resolution."""

from datetime import date

import pytest

from weatherbot.nlu.timex import DateRange, resolve_date, week_from_today

MONDAY = date(2026, 10, 19)


def test_week_from_today_is_seven_days():
    window = week_from_today(MONDAY)

    assert window.start == MONDAY
    assert window.end == date(2026, 10, 26)
    assert MONDAY in window
    assert date(2026, 10, 25) in window
    assert date(2026, 10, 26) not in window


@pytest.mark.parametrize(
    "timex,expected",
    [
        ("XXXX-WXX-1", date(2026, 10, 19)),  # Monday is today
        ("XXXX-WXX-3", date(2026, 10, 21)),
        ("XXXX-WXX-7", date(2026, 10, 25)),
        ("XXXX-WXX-5T14", date(2026, 10, 23)),
    ],
)
def test_weekday_resolves_inside_week(timex, expected):
    assert resolve_date(timex, week_from_today(MONDAY)) == expected


def test_weekday_wraps_to_next_week():
    """From a Thursday, Monday means the following Monday."""
    thursday = date(2026, 10, 22)
    assert resolve_date("XXXX-WXX-1", week_from_today(thursday)) == date(2026, 10, 26)


def test_definite_date_inside_window():
    assert resolve_date("2026-10-22", week_from_today(MONDAY)) == date(2026, 10, 22)


def test_definite_date_outside_window():
    assert resolve_date("2026-11-22", week_from_today(MONDAY)) is None
    assert resolve_date("2026-10-18", week_from_today(MONDAY)) is None


def test_month_day_without_year():
    window = DateRange(start=date(2026, 12, 29), end=date(2027, 1, 5))
    assert resolve_date("XXXX-01-02", window) == date(2027, 1, 2)


@pytest.mark.parametrize("timex", ["", "PRESENT_REF", "XXXX-WXX-WE", "2026-02-30", "P1D"])
def test_unsupported_or_invalid(timex):
    assert resolve_date(timex, week_from_today(MONDAY)) is None
