"""Settings file, timezone and clock helpers."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from habits.dates import parse_week_start

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """The settings file exists but cannot be parsed."""


def config_path() -> Path:
    """Settings file location: $HABITS_CONFIG or ~/.config/habits/config.yaml."""
    return Path(
        os.environ.get("HABITS_CONFIG", str(Path.home() / ".config" / "habits" / "config.yaml"))
    ).expanduser().resolve()


def read_yaml(path: Path) -> dict[str, Any]:
    """Read a YAML mapping, returning empty dict if missing or empty."""
    if not path.exists():
        return {}
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        result = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    return result if isinstance(result, dict) else {}


@dataclass
class Settings:
    timezone: str = "UTC"
    week_start: str = "mon"
    seed_examples: bool = True
    seed_habits: list[dict[str, Any]] | None = None
    log_level: str = "WARNING"
    log_file: str | None = None
    web_host: str = "127.0.0.1"
    web_port: int = 8000

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Settings:
        if not d or not isinstance(d, dict):
            return cls()
        week_start = str(d.get("week_start", "mon")).strip().lower()
        parse_week_start(week_start)
        seed = d.get("seed_habits")
        return cls(
            timezone=str(d.get("timezone", "UTC")),
            week_start=week_start,
            seed_examples=bool(d.get("seed_examples", True)),
            seed_habits=[h for h in seed if isinstance(h, dict)] if isinstance(seed, list) else None,
            log_level=str(d.get("log_level", "WARNING")).upper(),
            log_file=d.get("log_file"),
            web_host=str(d.get("web_host", "127.0.0.1")),
            web_port=int(d.get("web_port", 8000)),
        )


def load_settings(path: Path | None = None) -> Settings:
    if path is None:
        path = config_path()
    return Settings.from_dict(read_yaml(path))


def get_timezone(settings: Settings) -> ZoneInfo:
    """Configured timezone, defaulting to UTC when unknown."""
    try:
        return ZoneInfo(settings.timezone)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %r, falling back to UTC", settings.timezone)
    return ZoneInfo("UTC")


def now_local(settings: Settings) -> datetime:
    return datetime.now(get_timezone(settings))


def today(settings: Settings) -> date:
    """Current calendar day in the configured timezone."""
    return now_local(settings).date()
