"""
Lockd — Centralized configuration.

Loads all settings from .env and validates them.
Every time constant the planner store uses lives here.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

# Load .env from project root (one level up from lockd/config.py)
_ENV_PATH = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_ENV_PATH)


class Settings(BaseModel):
    """Application settings loaded from environment variables."""

    # Clock — empty string means naive local time
    TIMEZONE: str = ""

    # Demo fixture
    SEED_SAMPLE_DATA: bool = True

    # Habits
    DEFAULT_REMINDER_HOUR: int = 8
    DEFAULT_REMINDER_MINUTE: int = 0
    HABIT_SUGGESTION_MINUTES: int = 20
    ACHIEVEMENT_ON_EVERY_LOG: bool = False

    # Gym
    WORKOUT_START_HOUR: int = 18
    WORKOUT_DURATION_MINUTES: int = 70

    # Celebration overlay auto-dismiss
    CELEBRATION_DISMISS_SECONDS: float = 0.26

    # Telegram milestone notifications (optional)
    TELEGRAM_BOT_TOKEN: str = ""
    NOTIFY_CHAT_IDS: list[int] = []

    @field_validator("NOTIFY_CHAT_IDS", mode="before")
    @classmethod
    def parse_chat_ids(cls, v: str | list[int]) -> list[int]:
        if isinstance(v, list):
            return v
        if isinstance(v, str) and v.strip():
            return [int(cid.strip()) for cid in v.split(",") if cid.strip()]
        return []

    @field_validator(
        "DEFAULT_REMINDER_HOUR", "WORKOUT_START_HOUR", mode="before",
    )
    @classmethod
    def parse_hour(cls, v: str | int) -> int:
        hour = int(v)
        if not 0 <= hour <= 23:
            raise ValueError(f"Hour out of range: {hour}")
        return hour

    @field_validator("DEFAULT_REMINDER_MINUTE", mode="before")
    @classmethod
    def parse_minute(cls, v: str | int) -> int:
        minute = int(v)
        if not 0 <= minute <= 59:
            raise ValueError(f"Minute out of range: {minute}")
        return minute

    @property
    def telegram_enabled(self) -> bool:
        return bool(self.TELEGRAM_BOT_TOKEN) and not self.TELEGRAM_BOT_TOKEN.startswith("your-")


def _load_settings() -> Settings:
    """Load settings from environment."""
    return Settings(
        TIMEZONE=os.getenv("TIMEZONE", ""),
        SEED_SAMPLE_DATA=os.getenv("SEED_SAMPLE_DATA", "true"),
        DEFAULT_REMINDER_HOUR=os.getenv("DEFAULT_REMINDER_HOUR", "8"),
        DEFAULT_REMINDER_MINUTE=os.getenv("DEFAULT_REMINDER_MINUTE", "0"),
        HABIT_SUGGESTION_MINUTES=os.getenv("HABIT_SUGGESTION_MINUTES", "20"),
        ACHIEVEMENT_ON_EVERY_LOG=os.getenv("ACHIEVEMENT_ON_EVERY_LOG", "false"),
        WORKOUT_START_HOUR=os.getenv("WORKOUT_START_HOUR", "18"),
        WORKOUT_DURATION_MINUTES=os.getenv("WORKOUT_DURATION_MINUTES", "70"),
        CELEBRATION_DISMISS_SECONDS=os.getenv("CELEBRATION_DISMISS_SECONDS", "0.26"),
        TELEGRAM_BOT_TOKEN=os.getenv("TELEGRAM_BOT_TOKEN", ""),
        NOTIFY_CHAT_IDS=os.getenv("NOTIFY_CHAT_IDS", ""),
    )


# Singleton — imported by all other modules as:
#   from lockd.config import settings
settings = _load_settings()
