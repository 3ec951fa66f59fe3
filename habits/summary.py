"""Display values for a habit card: streak bar, completion, checkmarks."""

from __future__ import annotations

from datetime import date
from typing import Any

from habits.dates import DAY_NAMES
from habits.models import Habit
from habits.store import HabitStore

# Scale for the streak bar when a habit has no goal.
DEFAULT_STREAK_SCALE = 100


def streak_progress(habit: Habit) -> float:
    total = habit.goal or DEFAULT_STREAK_SCALE
    return max(0.0, min(1.0, habit.streak / total))


def completion_percent(rate: float) -> int:
    return int(rate * 100)


def checkmarks(store: HabitStore, habit: Habit, days: list[date]) -> list[tuple[date, bool]]:
    return [(d, store.is_done_on(habit.id, d)) for d in days]


def checkmark_strip(marks: list[tuple[date, bool]], done: str = "●", todo: str = "○") -> str:
    return " ".join(done if ok else todo for _, ok in marks)


def habit_summary(store: HabitStore, habit: Habit, days: list[date]) -> dict[str, Any]:
    """Everything a screen needs to render one habit."""
    d = habit.to_dict()
    d["streakProgress"] = streak_progress(habit)
    d["doneToday"] = store.is_done_on(habit.id, store.today())
    if habit.goal is not None:
        rate = store.completion_rate(habit.id)
        d["completionRate"] = rate
        d["completionPercent"] = completion_percent(rate)
    d["checkmarks"] = [
        {"date": day.isoformat(), "weekday": DAY_NAMES[day.weekday()].title(), "done": done}
        for day, done in checkmarks(store, habit, days)
    ]
    return d
