"""
Lockd — Day bucketing and interval helpers.

Every task is filed under the midnight of its start's calendar day.
No I/O: this module only transforms datetimes.
"""

from __future__ import annotations

from datetime import datetime, timedelta


def day_key(moment: datetime) -> datetime:
    """Return the start-of-day normalization of *moment*.

    Timezone info is preserved, so aware and naive inputs each map to
    a key of the same kind.
    """
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def at_time(day: datetime, hour: int, minute: int) -> datetime:
    """Return *day*'s calendar date at hour:minute (seconds zeroed)."""
    return day_key(day).replace(hour=hour, minute=minute)


def add_minutes(moment: datetime, minutes: int) -> datetime:
    return moment + timedelta(minutes=minutes)


def minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes from *start* to *end*, truncated toward zero."""
    return int((end - start).total_seconds() / 60)


def intervals_overlap(
    start_a: datetime, end_a: datetime, start_b: datetime, end_b: datetime,
) -> bool:
    """Half-open interval test: touching endpoints do not overlap."""
    return max(start_a, start_b) < min(end_a, end_b)


def align_tz(moment: datetime, reference: datetime) -> datetime:
    """Return *moment* in a form comparable with *reference*.

    Naive task times are read as wall-clock times in the reference's
    zone; aware ones are converted to it. A naive reference gets the
    wall-clock time with tzinfo dropped.
    """
    if reference.tzinfo is None:
        return moment.replace(tzinfo=None)
    if moment.tzinfo is None:
        return moment.replace(tzinfo=reference.tzinfo)
    return moment.astimezone(reference.tzinfo)
