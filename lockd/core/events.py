"""
Lockd — Domain events.

The store publishes a DomainEvent after each mutation. Collaborators
(live status, reminders, milestone notifications) subscribe here rather
than observing store fields.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable

logger = logging.getLogger(__name__)


class EventKind(Enum):
    TASK_ADDED = "task_added"
    TASK_TOGGLED = "task_toggled"
    SELECTED_DAY_CHANGED = "selected_day_changed"
    TEMPLATE_APPLIED = "template_applied"
    TEMPLATE_CREATED = "template_created"
    HABIT_ADDED = "habit_added"
    HABIT_LOGGED = "habit_logged"
    ACHIEVEMENT_CREATED = "achievement_created"
    WORKOUT_TEMPLATE_ADDED = "workout_template_added"
    TREND_POINT_RECORDED = "trend_point_recorded"
    CARDIO_LOGGED = "cardio_logged"


# Events after which current/next task may have changed
TASK_EVENTS = frozenset({
    EventKind.TASK_ADDED,
    EventKind.TASK_TOGGLED,
    EventKind.TEMPLATE_APPLIED,
    EventKind.SELECTED_DAY_CHANGED,
})


@dataclass
class DomainEvent:
    kind: EventKind
    payload: Any
    occurred_at: datetime
    details: dict[str, Any] = field(default_factory=dict)


Handler = Callable[[DomainEvent], None]


class EventBus:
    """Synchronous in-process publish/subscribe.

    Handlers run inline, in subscription order. A failing handler is
    logged and skipped; it never aborts the publishing command or the
    remaining handlers.
    """

    def __init__(self) -> None:
        self._subscribers: list[tuple[Handler, frozenset[EventKind] | None]] = []

    def subscribe(
        self, handler: Handler, kinds: set[EventKind] | frozenset[EventKind] | None = None,
    ) -> Callable[[], None]:
        """Register *handler*; returns a callable that unsubscribes it."""
        entry = (handler, frozenset(kinds) if kinds is not None else None)
        self._subscribers.append(entry)

        def _unsubscribe() -> None:
            if entry in self._subscribers:
                self._subscribers.remove(entry)

        return _unsubscribe

    def publish(self, event: DomainEvent) -> None:
        for handler, kinds in list(self._subscribers):
            if kinds is not None and event.kind not in kinds:
                continue
            try:
                handler(event)
            except Exception:
                logger.exception("Event handler failed for %s", event.kind.value)
