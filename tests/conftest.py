"""Shared test fixtures for habit tracker tests."""

from __future__ import annotations

from datetime import date, timedelta
from pathlib import Path

import pytest
import yaml

from habits.store import HabitStore


class FixedClock:
    """Stand-in for date.today that tests can move forward."""

    def __init__(self, day: date) -> None:
        self.day = day

    def __call__(self) -> date:
        return self.day

    def advance(self, days: int = 1) -> date:
        self.day = self.day + timedelta(days=days)
        return self.day


@pytest.fixture
def clock() -> FixedClock:
    # A Wednesday in a 28-day February.
    return FixedClock(date(2026, 2, 11))


@pytest.fixture
def store(clock: FixedClock) -> HabitStore:
    """Empty store on the fixed clock."""
    return HabitStore(today=clock)


@pytest.fixture
def seeded_store(clock: FixedClock) -> HabitStore:
    return HabitStore.with_examples(today=clock)


@pytest.fixture
def config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Write a settings file and point $HABITS_CONFIG at it."""
    path = tmp_path / "habits" / "config.yaml"
    path.parent.mkdir(parents=True)
    settings = {
        "timezone": "America/Los_Angeles",
        "week_start": "sun",
        "seed_examples": True,
        "seed_habits": [
            {"title": "Stretch", "category": "Health", "frequency": "Daily", "goal": 14},
            {"title": "Journal", "category": "Mind", "frequency": "Daily"},
        ],
        "log_level": "info",
        "web_port": 8123,
    }
    path.write_text(yaml.dump(settings, default_flow_style=False), encoding="utf-8")
    monkeypatch.setenv("HABITS_CONFIG", str(path))
    return path
