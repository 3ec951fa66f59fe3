"""Calendar-day windows for the checkmark strip.

Given today and a time frame, produce the ascending list of days to
render: just today, the current week, or the current month.
"""

from __future__ import annotations

import calendar
from datetime import date, timedelta

TIME_FRAMES = ("daily", "weekly", "monthly")

_FRAME_ALIASES = {
    "day": "daily",
    "daily": "daily",
    "week": "weekly",
    "weekly": "weekly",
    "month": "monthly",
    "monthly": "monthly",
}

DAY_NAMES = ["mon", "tue", "wed", "thu", "fri", "sat", "sun"]


def normalize_time_frame(frame: str) -> str:
    """Map 'day'/'Daily'/... to one of TIME_FRAMES."""
    key = str(frame).strip().lower()
    if key not in _FRAME_ALIASES:
        raise ValueError(f"Invalid time frame: {frame!r}")
    return _FRAME_ALIASES[key]


def parse_week_start(value: str | int) -> int:
    """Return the weekday index (Monday=0) for 'mon', 'sunday', 6, ..."""
    if isinstance(value, int) and not isinstance(value, bool):
        if 0 <= value <= 6:
            return value
        raise ValueError(f"Invalid week start: {value!r}")
    key = str(value).strip().lower()[:3]
    if key not in DAY_NAMES:
        raise ValueError(f"Invalid week start: {value!r}")
    return DAY_NAMES.index(key)


def start_of_week(day: date, week_start: str | int = "mon") -> date:
    offset = (day.weekday() - parse_week_start(week_start)) % 7
    return day - timedelta(days=offset)


def days_in_month(day: date) -> int:
    return calendar.monthrange(day.year, day.month)[1]


def days_in_time_frame(frame: str, today: date, week_start: str | int = "mon") -> list[date]:
    """Days to display for the frame, left to right."""
    frame = normalize_time_frame(frame)
    if frame == "weekly":
        first = start_of_week(today, week_start)
        return [first + timedelta(days=i) for i in range(7)]
    if frame == "monthly":
        first = today.replace(day=1)
        return [first + timedelta(days=i) for i in range(days_in_month(today))]
    return [today]
