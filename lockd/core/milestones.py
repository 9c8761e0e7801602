"""
Lockd — Milestone notifications.

Queues a message for every achievement the store creates and pushes
the queue to the configured chats through a NotificationPort.

Graceful degradation: a failed send is logged and the remaining
recipients are still tried. Unsent messages stay queued, unless there
are no recipients at all, in which case the queue is dropped.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from lockd.core.events import DomainEvent, EventKind

if TYPE_CHECKING:
    from lockd.core.events import EventBus
    from lockd.data.models import Achievement
    from lockd.ports.notification_port import NotificationPort

logger = logging.getLogger(__name__)


def format_achievement(achievement: Achievement) -> str:
    return f"🏆 {achievement.title}\n{achievement.detail}"


class MilestoneNotifier:
    def __init__(self, notifier: NotificationPort, chat_ids: list[int]) -> None:
        self._notifier = notifier
        self._chat_ids = list(chat_ids)
        self._pending: list[str] = []
        self._unsubscribe: Callable[[], None] | None = None

    @property
    def pending(self) -> list[str]:
        return list(self._pending)

    def attach(self, bus: EventBus) -> None:
        if self._unsubscribe is None:
            self._unsubscribe = bus.subscribe(self._on_event, {EventKind.ACHIEVEMENT_CREATED})

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _on_event(self, event: DomainEvent) -> None:
        self._pending.append(format_achievement(event.payload))

    async def deliver_pending(self) -> int:
        """Send every queued message to every chat; returns sends that succeeded.

        A message is dropped from the queue once at least one chat got it.
        """
        if not self._chat_ids:
            if self._pending:
                logger.warning(
                    "No chat ids configured; dropping %d milestone message(s)",
                    len(self._pending),
                )
                self._pending = []
            return 0
        sent = 0
        still_pending: list[str] = []
        for text in self._pending:
            delivered = False
            for chat_id in self._chat_ids:
                try:
                    await self._notifier.send_message(chat_id, text)
                    sent += 1
                    delivered = True
                except Exception as exc:
                    logger.error("Failed to send milestone to %d: %s", chat_id, exc)
            if not delivered:
                still_pending.append(text)
        self._pending = still_pending
        if sent:
            logger.info("Delivered %d milestone message(s)", sent)
        return sent
