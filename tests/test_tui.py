"""Tests for cli/habits_tui.py — card rendering and startup errors."""

import asyncio

import pytest
import yaml

from cli.habits_tui import HabitCard, HabitTrackerApp, checkmark_line, main
from habits.config import Settings
from habits.dates import days_in_time_frame
from habits.store import HabitStore
from habits.summary import habit_summary


def _summary(store, frame="daily"):
    days = days_in_time_frame(frame, store.today(), "mon")
    return habit_summary(store, store.habits[0], days)


def test_checkmark_line_daily(seeded_store):
    seeded_store.mark_done(seeded_store.habits[0].id)
    assert checkmark_line(_summary(seeded_store), "daily") == "●"


def test_checkmark_line_weekly_labels_days(seeded_store):
    seeded_store.mark_done(seeded_store.habits[0].id)
    line = checkmark_line(_summary(seeded_store, "weekly"), "weekly")
    assert line.startswith("Mon ○  Tue ○  Wed ●")
    assert line.count("○") == 6


def test_cards_show_clamped_completion_bar(clock):
    store = HabitStore.with_examples(
        today=clock,
        examples=[
            {"title": "Read", "goal": 1, "completedDates": ["2026-02-09", "2026-02-10"]},
            {"title": "Walk"},
        ],
    )

    async def run():
        app = HabitTrackerApp(store, Settings())
        async with app.run_test() as pilot:
            await pilot.pause()
            read, walk = list(app.query(HabitCard))
            assert read.query_one(".rate-bar").progress == 1.0
            assert read.query_one(".streak-bar").progress == 1.0
            assert len(walk.query(".rate-bar")) == 0

    asyncio.run(run())


def test_main_reports_bad_seed_dates(tmp_path, monkeypatch, capsys):
    path = tmp_path / "config.yaml"
    settings = {"seed_habits": [{"title": "Stretch", "completedDates": ["not-a-date"]}]}
    path.write_text(yaml.dump(settings), encoding="utf-8")
    monkeypatch.setenv("HABITS_CONFIG", str(path))

    with pytest.raises(SystemExit) as exc:
        main()
    assert exc.value.code == 1
    assert "Invalid settings" in capsys.readouterr().out
