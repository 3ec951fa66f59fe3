"""Habit tracker core library — habit store, day windows, settings.

Public API re-exports for convenient imports:
    from habits import HabitStore, days_in_time_frame, load_settings, ...
"""

# Models
from habits.models import (
    Habit,
    normalize_goal,
    normalize_description,
)

# Store
from habits.store import (
    EXAMPLE_HABITS,
    HabitNotFound,
    HabitStore,
)

# Day windows
from habits.dates import (
    TIME_FRAMES,
    normalize_time_frame,
    parse_week_start,
    start_of_week,
    days_in_month,
    days_in_time_frame,
)

# Settings
from habits.config import (
    ConfigError,
    Settings,
    config_path,
    load_settings,
    get_timezone,
    now_local,
    today,
)

# Forms & display
from habits.forms import parse_habit_form
from habits.summary import (
    streak_progress,
    completion_percent,
    checkmarks,
    checkmark_strip,
    habit_summary,
)

from habits.logs import setup_logging
