"""In-memory habit store with change notifications.

The store owns the ordered habit list and is the only place habits are
created or marked done. Stale ids are ignored by the core operations;
callers that need to know use :meth:`HabitStore.get`.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Callable, Iterator

from habits.config import Settings, get_timezone
from habits.models import Habit, normalize_description, normalize_goal

logger = logging.getLogger(__name__)

Listener = Callable[[str, Habit], None]

EXAMPLE_HABITS: list[dict[str, Any]] = [
    {
        "title": "Drink Water",
        "category": "Health",
        "frequency": "Daily",
        "description": "Drink 8 glasses",
        "goal": 30,
    },
    {
        "title": "Exercise",
        "category": "Fitness",
        "frequency": "Weekly",
        "description": "Workout 3 times a week",
        "goal": 20,
    },
    {
        "title": "Read a Book",
        "category": "Learning",
        "frequency": "Daily",
        "description": "Read for 30 minutes",
        "goal": 10,
    },
]


class HabitNotFound(KeyError):
    """Raised by HabitStore.get for an unknown habit id."""

    def __init__(self, habit_id: str) -> None:
        super().__init__(habit_id)
        self.habit_id = habit_id

    def __str__(self) -> str:
        return f"Habit not found: {self.habit_id}"


def as_day(value: date | datetime) -> date:
    """Strip the time of day from a date or datetime."""
    if isinstance(value, datetime):
        return value.date()
    return value


class HabitStore:
    def __init__(
        self,
        habits: list[Habit] | None = None,
        today: Callable[[], date] | None = None,
    ) -> None:
        self._habits: list[Habit] = list(habits or [])
        self._today = today or date.today
        self._listeners: list[Listener] = []

    @classmethod
    def with_examples(
        cls,
        today: Callable[[], date] | None = None,
        examples: list[dict[str, Any]] | None = None,
    ) -> HabitStore:
        """Build a store seeded with example habits."""
        store = cls(today=today)
        for entry in (EXAMPLE_HABITS if examples is None else examples):
            store._habits.append(Habit.from_dict(entry))
        logger.debug("Seeded store with %d example habits", len(store._habits))
        return store

    @classmethod
    def from_settings(cls, settings: Settings) -> HabitStore:
        """Build the process-wide store for the given Settings."""
        tz = get_timezone(settings)

        def clock() -> date:
            return datetime.now(tz).date()

        if settings.seed_examples:
            return cls.with_examples(today=clock, examples=settings.seed_habits)
        return cls(today=clock)

    # ── Queries ───────────────────────────────────────────────

    @property
    def habits(self) -> list[Habit]:
        return list(self._habits)

    def __len__(self) -> int:
        return len(self._habits)

    def __iter__(self) -> Iterator[Habit]:
        return iter(list(self._habits))

    def today(self) -> date:
        return as_day(self._today())

    def find(self, habit_id: str) -> Habit | None:
        for h in self._habits:
            if h.id == habit_id:
                return h
        return None

    def get(self, habit_id: str) -> Habit:
        habit = self.find(habit_id)
        if habit is None:
            raise HabitNotFound(habit_id)
        return habit

    def completion_rate(self, habit_id: str) -> float:
        """Completed days over goal; 0.0 without a goal. Not clamped."""
        habit = self.find(habit_id)
        if habit is None or habit.goal is None:
            return 0.0
        return len(habit.completed_dates) / habit.goal

    def is_done_on(self, habit_id: str, day: date | datetime) -> bool:
        habit = self.find(habit_id)
        if habit is None:
            return False
        return habit.is_done_on(as_day(day))

    # ── Mutations ─────────────────────────────────────────────

    def add(
        self,
        title: str,
        category: str,
        frequency: str,
        description: str | None = None,
        goal: Any = None,
    ) -> Habit:
        habit = Habit(
            title=title,
            category=category,
            frequency=frequency,
            description=normalize_description(description),
            goal=normalize_goal(goal),
        )
        self._habits.append(habit)
        logger.info("Added habit %s (%s)", habit.id, habit.title)
        self._notify("added", habit)
        return habit

    def mark_done(self, habit_id: str) -> bool:
        """Mark a habit done for today.

        Returns True if today was newly recorded, False for an unknown id
        or a habit already done today.
        """
        habit = self.find(habit_id)
        if habit is None:
            logger.debug("mark_done ignored unknown habit %s", habit_id)
            return False
        day = self.today()
        if day in habit.completed_dates:
            return False
        habit.completed_dates.add(day)
        habit.streak += 1
        logger.info("Marked habit %s done on %s (streak %d)", habit.id, day, habit.streak)
        self._notify("done", habit)
        return True

    # ── Subscriptions ─────────────────────────────────────────

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register listener(event, habit); returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, event: str, habit: Habit) -> None:
        for listener in list(self._listeners):
            listener(event, habit)
