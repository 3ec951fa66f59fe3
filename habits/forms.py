"""Add-habit form parsing shared by the terminal and web screens."""

from __future__ import annotations

from typing import Any

from habits.models import normalize_description, normalize_goal

REQUIRED_FIELDS = ("title", "category", "frequency")


def parse_habit_form(data: dict[str, Any]) -> tuple[dict[str, Any] | None, list[str]]:
    """Validate raw form input. Returns (fields for HabitStore.add, errors).

    Required fields must be non-blank. Goal and description are optional;
    a goal that isn't a positive whole number is dropped, not rejected.
    """
    errors = []
    fields: dict[str, Any] = {}
    for name in REQUIRED_FIELDS:
        value = str(data.get(name) or "").strip()
        if not value:
            errors.append(f"Missing required field: {name}")
        fields[name] = value
    if errors:
        return None, errors

    fields["description"] = normalize_description(data.get("description"))
    fields["goal"] = normalize_goal(data.get("goal"))
    return fields, []
