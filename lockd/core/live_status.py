"""
Lockd — Live status sync.

Keeps the "now / next" surface in step with the store. After any event
that can move the current or next task, the port is re-announced and
told whether any open tasks remain today.

This module is provider-agnostic: it depends on the LiveStatusPort
protocol, not on a specific presenter.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from lockd.core.events import TASK_EVENTS, DomainEvent

if TYPE_CHECKING:
    from lockd.core.store import PlannerStore
    from lockd.ports.live_status_port import LiveStatusPort

logger = logging.getLogger(__name__)


class LiveStatusSync:
    def __init__(self, store: PlannerStore, port: LiveStatusPort) -> None:
        self._store = store
        self._port = port
        self._unsubscribe: Callable[[], None] | None = None

    def attach(self) -> None:
        if self._unsubscribe is None:
            self._unsubscribe = self._store.bus.subscribe(self._on_event, TASK_EVENTS)

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def sync(self) -> None:
        current = self._store.current_task()
        next_task = self._store.next_task()
        self._port.announce(current, next_task)
        self._port.clear(self._store.has_open_tasks_today())
        logger.debug(
            "Live status synced: current=%s next=%s",
            current.title if current else None,
            next_task.title if next_task else None,
        )

    def _on_event(self, event: DomainEvent) -> None:
        self.sync()
