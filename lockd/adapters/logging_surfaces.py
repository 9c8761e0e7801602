"""Log-only surfaces — implement ReminderPort and LiveStatusPort.

Used when no platform notification center or live-activity host is
available: reminders and the "now / next" card are written to the log
and tracked in memory so their state can be inspected.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from lockd.core.formatting import time_range

if TYPE_CHECKING:
    from lockd.data.models import PlannerTask

logger = logging.getLogger(__name__)

NO_CURRENT_TITLE = "No active task"
NO_NEXT_TITLE = "No next task"


class LoggingReminderScheduler:
    """ReminderPort that records pending reminders by task id."""

    def __init__(self) -> None:
        self.pending: dict[uuid.UUID, tuple[datetime, str]] = {}

    def schedule(self, task_id: uuid.UUID, fire_at: datetime, title: str) -> None:
        # Re-scheduling the same id replaces the earlier request
        self.pending[task_id] = (fire_at, title)
        logger.info("Reminder scheduled: '%s' at %s", title, fire_at.strftime("%Y-%m-%d %H:%M"))

    def cancel(self, task_id: uuid.UUID) -> None:
        if self.pending.pop(task_id, None) is not None:
            logger.info("Reminder cancelled for task %s", task_id)


class LoggingLiveStatus:
    """LiveStatusPort that keeps the last rendered card."""

    def __init__(self) -> None:
        self.active = False
        self.current_title = ""
        self.next_title = ""
        self.current_range = ""

    def announce(
        self, current: PlannerTask | None, next_task: PlannerTask | None,
    ) -> None:
        self.current_title = current.title if current else NO_CURRENT_TITLE
        self.next_title = next_task.title if next_task else NO_NEXT_TITLE
        self.current_range = time_range(current.start, current.end) if current else ""
        self.active = True
        logger.info(
            "Live status: now=%s %s | next=%s",
            self.current_title, self.current_range, self.next_title,
        )

    def clear(self, has_open_tasks_today: bool) -> None:
        if has_open_tasks_today or not self.active:
            return
        self.active = False
        logger.info("Live status ended: no open tasks today")
