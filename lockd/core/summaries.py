"""Day summaries — pure functions over day buckets.

Same input always produces same output, no side effects.
"""

from __future__ import annotations

from datetime import datetime

from lockd.data.models import DaySummary, PlannerTask


def summarize_day(day: datetime, tasks: list[PlannerTask]) -> DaySummary:
    """Count total and completed tasks for one bucket.

    Args:
        day: The bucket key (midnight-normalized).
        tasks: Tasks filed under that key.

    Returns:
        DaySummary with totals for the day
    """
    return DaySummary(
        date=day,
        total_tasks=len(tasks),
        completed_tasks=sum(1 for t in tasks if t.is_completed),
    )


def build_history(tasks_by_day: dict[datetime, list[PlannerTask]]) -> list[DaySummary]:
    """One summary per existing bucket, most recent day first.

    Buckets that exist but hold no tasks still appear, with a 0 rate.
    """
    summaries = [summarize_day(day, tasks) for day, tasks in tasks_by_day.items()]
    summaries.sort(key=lambda s: s.date, reverse=True)
    return summaries
