#!/usr/bin/env python3
"""Habit Tracker TUI — single-screen terminal habit tracker powered by Textual."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import (
    Button,
    Footer,
    Header,
    Input,
    Label,
    ProgressBar,
    Static,
    Tab,
    Tabs,
)

from habits import (
    Habit,
    HabitStore,
    Settings,
    checkmark_strip,
    days_in_time_frame,
    habit_summary,
    load_settings,
    parse_habit_form,
    setup_logging,
)

DEFAULT_LOG_FILE = Path.home() / ".cache" / "habits" / "habits-tui.log"


CSS = """
Screen {
    layout: vertical;
}

#frame-tabs {
    margin: 0 1;
}

#habit-list {
    height: 1fr;
    padding: 0 1;
}

.habit-card {
    height: auto;
    padding: 1 2;
    margin: 1 0 0 0;
    border: round $primary-background-darken-2;
}

.habit-title {
    text-style: bold;
}

.muted {
    color: $text-muted;
}

.checkmarks {
    color: $success;
    margin: 1 0 0 0;
}

.card-actions {
    height: auto;
    align-horizontal: right;
}

AddHabitScreen {
    align: center middle;
}

#add-form {
    width: 60;
    height: auto;
    padding: 1 2;
    border: thick $primary;
    background: $surface;
}

#add-form Input {
    margin: 0 0 1 0;
}

#add-actions {
    height: auto;
    align-horizontal: right;
}
"""


def checkmark_line(summary: dict[str, Any], frame: str) -> str:
    """Checkmark row for a card; the weekly frame labels each day."""
    if frame == "weekly":
        return "  ".join(
            f"{m['weekday']} {'●' if m['done'] else '○'}" for m in summary["checkmarks"]
        )
    return checkmark_strip([(m["date"], m["done"]) for m in summary["checkmarks"]])


# ── Custom widgets ─────────────────────────────────────────────


class MarkDoneButton(Button):
    """'Mark as Done' button bound to one habit."""

    def __init__(self, habit_id: str, done_today: bool) -> None:
        super().__init__(
            "Done today" if done_today else "Mark as Done",
            variant="default" if done_today else "success",
        )
        self.habit_id = habit_id


class HabitCard(Vertical):
    """One habit: details, streak bar, completion, checkmark strip."""

    def __init__(self, summary: dict[str, Any], frame: str, **kwargs) -> None:
        super().__init__(**kwargs)
        self.summary = summary
        self.frame = frame

    def compose(self) -> ComposeResult:
        s = self.summary
        yield Label(s["title"], classes="habit-title", markup=False)
        yield Label(f"Category: {s['category']}", classes="muted", markup=False)
        yield Label(f"Frequency: {s['frequency']}", classes="muted", markup=False)
        yield Label(f"Current Streak: {s['streak']} days")
        yield ProgressBar(total=1.0, show_eta=False, show_percentage=False, classes="streak-bar")
        if "completionPercent" in s:
            yield Label(f"Completion Rate: {s['completionPercent']}%")
            yield ProgressBar(total=1.0, show_eta=False, show_percentage=False, classes="rate-bar")
        yield Static(checkmark_line(s, self.frame), classes="checkmarks", markup=False)
        if s["description"]:
            yield Label(f"Description: {s['description']}", classes="muted", markup=False)
        if s["goal"] is not None:
            yield Label(f"Goal: {s['goal']} days", classes="muted")
        yield Horizontal(MarkDoneButton(s["id"], s["doneToday"]), classes="card-actions")

    def on_mount(self) -> None:
        self.add_class("habit-card")
        self.query_one(".streak-bar", ProgressBar).update(progress=self.summary["streakProgress"])
        if "completionRate" in self.summary:
            rate = max(0.0, min(1.0, self.summary["completionRate"]))
            self.query_one(".rate-bar", ProgressBar).update(progress=rate)


class AddHabitScreen(ModalScreen[dict]):
    """Add-habit form. Dismisses with store.add() kwargs, or None on cancel."""

    BINDINGS = [Binding("escape", "cancel", "Cancel")]

    def compose(self) -> ComposeResult:
        yield Vertical(
            Label("Add New Habit", classes="habit-title"),
            Input(placeholder="Habit Title", id="title"),
            Input(placeholder="Category", id="category"),
            Input(placeholder="Frequency", id="frequency"),
            Input(placeholder="Goal (optional)", id="goal"),
            Input(placeholder="Description (optional)", id="description"),
            Horizontal(
                Button("Cancel", id="cancel"),
                Button("Save", id="save", variant="primary"),
                id="add-actions",
            ),
            id="add-form",
        )

    def on_mount(self) -> None:
        self.query_one("#title", Input).focus()

    @on(Button.Pressed, "#save")
    def _on_save(self) -> None:
        data = {inp.id: inp.value for inp in self.query(Input)}
        fields, errors = parse_habit_form(data)
        if errors:
            self.app.notify("\n".join(errors), title="Cannot save", severity="warning")
            return
        self.dismiss(fields)

    @on(Button.Pressed, "#cancel")
    def _on_cancel(self) -> None:
        self.dismiss(None)

    def action_cancel(self) -> None:
        self.dismiss(None)


# ── Main app ───────────────────────────────────────────────────


class HabitTrackerApp(App):
    """Habit Tracker — list, add, mark done."""

    TITLE = "Habit Tracker"
    CSS = CSS

    BINDINGS = [
        Binding("a", "add_habit", "Add"),
        Binding("1", "set_frame('daily')", "Daily"),
        Binding("2", "set_frame('weekly')", "Weekly"),
        Binding("3", "set_frame('monthly')", "Monthly"),
        Binding("q", "quit", "Quit"),
    ]

    current_frame: reactive[str] = reactive("daily")

    def __init__(self, store: HabitStore, settings: Settings) -> None:
        super().__init__()
        self.store = store
        self.settings = settings
        self._unsubscribe = None

    def compose(self) -> ComposeResult:
        yield Header()
        yield Tabs(
            Tab("Daily", id="daily"),
            Tab("Weekly", id="weekly"),
            Tab("Monthly", id="monthly"),
            id="frame-tabs",
        )
        yield VerticalScroll(id="habit-list")
        yield Footer()

    def on_mount(self) -> None:
        self._unsubscribe = self.store.subscribe(self._on_store_change)
        self._refresh_list()

    def on_unmount(self) -> None:
        if self._unsubscribe:
            self._unsubscribe()

    def _on_store_change(self, event: str, habit: Habit) -> None:
        self._refresh_list()

    def _refresh_list(self) -> None:
        """(Re)build the habit cards for the current time frame."""
        days = days_in_time_frame(self.current_frame, self.store.today(), self.settings.week_start)
        habit_list = self.query_one("#habit-list", VerticalScroll)
        habit_list.remove_children()
        cards = [
            HabitCard(habit_summary(self.store, h, days), self.current_frame)
            for h in self.store
        ]
        if cards:
            habit_list.mount(*cards)
        else:
            habit_list.mount(Static("No habits yet. Press [b]a[/b] to add one.", classes="muted"))
        self.sub_title = f"{len(cards)} habits · {self.current_frame}"

    @on(Tabs.TabActivated, "#frame-tabs")
    def _on_frame_change(self, event: Tabs.TabActivated) -> None:
        if event.tab.id and event.tab.id != self.current_frame:
            self.current_frame = event.tab.id
            self._refresh_list()

    @on(Button.Pressed)
    def _on_mark_done(self, event: Button.Pressed) -> None:
        if isinstance(event.button, MarkDoneButton):
            if not self.store.mark_done(event.button.habit_id):
                self.notify("Already done today.", severity="information")

    def action_set_frame(self, frame: str) -> None:
        self.query_one("#frame-tabs", Tabs).active = frame

    def action_add_habit(self) -> None:
        def _add(fields: dict | None) -> None:
            if fields:
                habit = self.store.add(**fields)
                self.notify(f"Added {habit.title}", title="Habit added")

        self.push_screen(AddHabitScreen(), _add)


# ── Entry point ────────────────────────────────────────────────


def main() -> None:
    try:
        settings = load_settings()
        store = HabitStore.from_settings(settings)
    except ValueError as e:
        print(f"Invalid settings: {e}")
        print("Fix the file at $HABITS_CONFIG or remove it to use defaults.")
        sys.exit(1)

    setup_logging(settings.log_level, settings.log_file or str(DEFAULT_LOG_FILE))
    app = HabitTrackerApp(store, settings)
    app.run()


if __name__ == "__main__":
    main()
