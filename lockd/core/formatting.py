"""Display formatting for planner and gym metrics.

No I/O: these helpers only turn numbers into short strings.
"""

from __future__ import annotations

from datetime import datetime


def percent(value: float) -> str:
    """Clamp to [0, 1] and render as a whole percentage, e.g. "50%"."""
    clamped = max(0.0, min(1.0, value))
    return f"{clamped * 100:.0f}%"


def decimal(value: float) -> str:
    return f"{value:.1f}"


def weight(value: float) -> str:
    return f"{value:.0f} lb"


def volume(value: float) -> str:
    return f"{value:.0f}"


def compact_count(value: int) -> str:
    """Group thousands, e.g. 12345 -> "12,345"."""
    return f"{value:,}"


def time_range(start: datetime, end: datetime) -> str:
    return f"{start:%H:%M} - {end:%H:%M}"
