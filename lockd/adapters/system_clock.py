"""System clock adapter — implements ClockPort."""

from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo


class SystemClock:
    """Wall clock. Naive local time unless a timezone name is given."""

    def __init__(self, tz_name: str = "") -> None:
        self._tz = ZoneInfo(tz_name) if tz_name else None

    def now(self) -> datetime:
        return datetime.now(self._tz)
