"""Clock port — abstract source of "now" for the planner store.

The store never reads the wall clock directly, so tests can pin time.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol


class ClockPort(Protocol):
    """Abstract clock used by core modules."""

    def now(self) -> datetime: ...
