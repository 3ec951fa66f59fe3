"""Typed dataclasses for the habit data model.

Habits map to a camelCase dict shape for the JSON API and YAML seed
entries. Unknown keys are ignored; missing keys use defaults.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date
from typing import Any


def new_habit_id() -> str:
    return str(uuid.uuid4())


def normalize_goal(value: Any) -> int | None:
    """Coerce an optional goal to a positive int, or None.

    Accepts ints and numeric strings. Anything else (empty, non-numeric,
    zero, negative or non-finite) means "no goal tracked".
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        goal = int(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if isinstance(value, float) and not value.is_integer():
        return None
    return goal if goal > 0 else None


def normalize_description(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass
class Habit:
    title: str = ""
    category: str = ""
    frequency: str = ""
    description: str | None = None
    goal: int | None = None
    streak: int = 0
    completed_dates: set[date] = field(default_factory=set)
    id: str = field(default_factory=new_habit_id)

    def is_done_on(self, day: date) -> bool:
        return day in self.completed_dates

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Habit:
        completed = set()
        for raw in d.get("completedDates", d.get("completed_dates")) or []:
            completed.add(raw if isinstance(raw, date) else date.fromisoformat(str(raw)))
        habit = cls(
            title=str(d.get("title", "")),
            category=str(d.get("category", "")),
            frequency=str(d.get("frequency", "")),
            description=normalize_description(d.get("description")),
            goal=normalize_goal(d.get("goal")),
            streak=int(d["streak"] or 0) if "streak" in d else len(completed),
            completed_dates=completed,
        )
        if d.get("id"):
            habit.id = str(d["id"])
        return habit

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "category": self.category,
            "frequency": self.frequency,
            "description": self.description,
            "goal": self.goal,
            "streak": self.streak,
            "completedDates": [d.isoformat() for d in sorted(self.completed_dates)],
        }
