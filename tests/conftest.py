"""Shared test fixtures and configuration.

Sets up a predictable environment so lockd.config loads the same
settings on every machine, and provides a pinned clock and empty store.
"""

import os

# Patch env vars BEFORE any lockd imports
os.environ.setdefault("TIMEZONE", "")
os.environ.setdefault("SEED_SAMPLE_DATA", "false")
os.environ.setdefault("ACHIEVEMENT_ON_EVERY_LOG", "false")
os.environ.setdefault("TELEGRAM_BOT_TOKEN", "")
os.environ.setdefault("NOTIFY_CHAT_IDS", "12345")

from datetime import datetime, timedelta

import pytest


class FakeClock:
    """ClockPort with a hand-controlled "now"."""

    def __init__(self, now: datetime) -> None:
        self.current = now

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


# Monday 9 Feb 2026, 09:00
NOW = datetime(2026, 2, 9, 9, 0)


@pytest.fixture
def clock():
    return FakeClock(NOW)


@pytest.fixture
def bus():
    from lockd.core.events import EventBus
    return EventBus()


@pytest.fixture
def store(clock, bus):
    """Return an empty PlannerStore on the pinned clock."""
    from lockd.core.store import PlannerStore
    return PlannerStore(clock, bus)
