"""
Lockd — Task reminder sync.

Arms a reminder at each new task's start and disarms it when the task
is completed. Reopening a task re-arms it if its start is still ahead.
Naive task times are compared as wall-clock times in the clock's zone.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from lockd.core.day_keys import align_tz
from lockd.core.events import DomainEvent, EventKind

if TYPE_CHECKING:
    from lockd.data.models import PlannerTask
    from lockd.ports.clock_port import ClockPort
    from lockd.ports.reminder_port import ReminderPort
    from lockd.core.store import PlannerStore

logger = logging.getLogger(__name__)


class ReminderSync:
    def __init__(self, store: PlannerStore, port: ReminderPort, clock: ClockPort) -> None:
        self._store = store
        self._port = port
        self._clock = clock
        self._unsubscribe: Callable[[], None] | None = None

    def attach(self) -> None:
        if self._unsubscribe is None:
            self._unsubscribe = self._store.bus.subscribe(
                self._on_event, {EventKind.TASK_ADDED, EventKind.TASK_TOGGLED},
            )

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _schedule_if_upcoming(self, task: PlannerTask) -> None:
        now = self._clock.now()
        if align_tz(task.start, now) <= now:
            logger.debug("Skipping reminder for past task '%s'", task.title)
            return
        self._port.schedule(task.id, task.start, task.title)

    def _on_event(self, event: DomainEvent) -> None:
        task: PlannerTask = event.payload
        if event.kind is EventKind.TASK_ADDED:
            self._schedule_if_upcoming(task)
        elif task.is_completed:
            self._port.cancel(task.id)
        else:
            self._schedule_if_upcoming(task)
