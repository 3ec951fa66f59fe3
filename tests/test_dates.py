"""Tests for habits/dates.py — time frames and day windows."""

from datetime import date, timedelta

import pytest

from habits.dates import (
    days_in_month,
    days_in_time_frame,
    normalize_time_frame,
    parse_week_start,
    start_of_week,
)

WEDNESDAY = date(2026, 2, 11)


def test_normalize_time_frame_aliases():
    assert normalize_time_frame("day") == "daily"
    assert normalize_time_frame("Weekly") == "weekly"
    assert normalize_time_frame(" MONTH ") == "monthly"


def test_normalize_time_frame_invalid():
    with pytest.raises(ValueError, match="Invalid time frame"):
        normalize_time_frame("yearly")


def test_parse_week_start():
    assert parse_week_start("mon") == 0
    assert parse_week_start("Sunday") == 6
    assert parse_week_start(5) == 5


@pytest.mark.parametrize("value", ["funday", "", 7, -1])
def test_parse_week_start_invalid(value):
    with pytest.raises(ValueError, match="week start"):
        parse_week_start(value)


def test_start_of_week():
    assert start_of_week(WEDNESDAY, "mon") == date(2026, 2, 9)
    assert start_of_week(WEDNESDAY, "sun") == date(2026, 2, 8)
    assert start_of_week(WEDNESDAY, "wed") == WEDNESDAY


def test_days_in_month():
    assert days_in_month(date(2026, 2, 11)) == 28
    assert days_in_month(date(2024, 2, 1)) == 29
    assert days_in_month(date(2026, 4, 30)) == 30
    assert days_in_month(date(2026, 12, 31)) == 31


def test_daily_window_is_today():
    assert days_in_time_frame("day", WEDNESDAY) == [WEDNESDAY]


def test_weekly_window_monday_start():
    days = days_in_time_frame("week", WEDNESDAY, week_start="mon")
    assert len(days) == 7
    assert days[0] == date(2026, 2, 9)
    assert days[-1] == date(2026, 2, 15)
    assert WEDNESDAY in days


def test_weekly_window_sunday_start():
    days = days_in_time_frame("weekly", WEDNESDAY, week_start="sun")
    assert days[0] == date(2026, 2, 8)
    assert days[-1] == date(2026, 2, 14)


def test_weekly_window_spans_year_boundary():
    days = days_in_time_frame("weekly", date(2026, 1, 1), week_start="mon")
    assert days[0] == date(2025, 12, 29)
    assert days[-1] == date(2026, 1, 4)


def test_weekly_window_consecutive_and_contains_today_every_weekday():
    for offset in range(7):
        today = WEDNESDAY + timedelta(days=offset)
        for week_start in ("mon", "sun", "sat"):
            days = days_in_time_frame("weekly", today, week_start=week_start)
            assert today in days
            assert all(b - a == timedelta(days=1) for a, b in zip(days, days[1:]))


def test_monthly_window():
    days = days_in_time_frame("month", WEDNESDAY)
    assert len(days) == 28
    assert days[0] == date(2026, 2, 1)
    assert days[-1] == date(2026, 2, 28)


def test_monthly_window_leap_february():
    days = days_in_time_frame("monthly", date(2024, 2, 29))
    assert len(days) == 29
    assert days[-1] == date(2024, 2, 29)


def test_monthly_window_stays_inside_month():
    days = days_in_time_frame("monthly", date(2026, 12, 31))
    assert len(days) == 31
    assert days[0] == date(2026, 12, 1)
    assert all(d.month == 12 for d in days)
