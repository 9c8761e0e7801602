"""Reminder port — per-task timed local reminders.

A platform notification scheduler implements this; the core only asks
for a reminder to be armed or disarmed by task id.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Protocol


class ReminderPort(Protocol):
    """Abstract reminder scheduler used by core modules."""

    def schedule(self, task_id: uuid.UUID, fire_at: datetime, title: str) -> None: ...

    def cancel(self, task_id: uuid.UUID) -> None: ...
