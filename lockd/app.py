"""
Lockd — Application wiring.

Builds the store and attaches its collaborators to the event bus: live
status, reminders, milestone notifications and the completion
celebration. Adapters are chosen from settings unless the caller passes
its own.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from lockd.adapters.logging_surfaces import LoggingLiveStatus, LoggingReminderScheduler
from lockd.adapters.system_clock import SystemClock
from lockd.config import settings
from lockd.core.celebration import CelebrationTimer
from lockd.core.events import DomainEvent, EventBus, EventKind
from lockd.core.live_status import LiveStatusSync
from lockd.core.milestones import MilestoneNotifier
from lockd.core.reminders import ReminderSync
from lockd.core.store import PlannerStore
from lockd.data.seed import sample_state

if TYPE_CHECKING:
    from lockd.ports.clock_port import ClockPort
    from lockd.ports.live_status_port import LiveStatusPort
    from lockd.ports.notification_port import NotificationPort
    from lockd.ports.reminder_port import ReminderPort

logger = logging.getLogger(__name__)


@dataclass
class Planner:
    """The store plus everything listening to it."""

    store: PlannerStore
    live_status: LiveStatusSync
    reminders: ReminderSync
    milestones: MilestoneNotifier | None
    celebration: CelebrationTimer


def _default_notifier() -> NotificationPort | None:
    if not settings.telegram_enabled:
        return None
    from telegram import Bot

    from lockd.adapters.telegram_notifier import TelegramNotifier

    return TelegramNotifier(Bot(token=settings.TELEGRAM_BOT_TOKEN))


def _celebrate_completions(celebration: CelebrationTimer):
    """Bus handler that starts the celebration when a task is completed."""

    def handler(event: DomainEvent) -> None:
        if not event.payload.is_completed:
            return
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop; skipping celebration")
            return
        celebration.trigger()

    return handler


def build_planner(
    clock: ClockPort | None = None,
    seed: bool | None = None,
    live_status_port: LiveStatusPort | None = None,
    reminder_port: ReminderPort | None = None,
    notifier: NotificationPort | None = None,
) -> Planner:
    """Create a wired Planner.

    Args:
        clock: Time source; defaults to SystemClock(settings.TIMEZONE).
        seed: Load the sample fixture; defaults to SEED_SAMPLE_DATA.
        live_status_port: Defaults to a log-only presenter.
        reminder_port: Defaults to a log-only scheduler.
        notifier: Milestone channel; defaults to Telegram when configured,
            otherwise milestone delivery is disabled. Delivery is also
            disabled when NOTIFY_CHAT_IDS is empty.
    """
    clock = clock or SystemClock(settings.TIMEZONE)
    if seed is None:
        seed = settings.SEED_SAMPLE_DATA

    bus = EventBus()
    initial = sample_state(clock.now()) if seed else {}
    store = PlannerStore(clock, bus, **initial)

    live_status = LiveStatusSync(store, live_status_port or LoggingLiveStatus())
    live_status.attach()

    reminders = ReminderSync(store, reminder_port or LoggingReminderScheduler(), clock)
    reminders.attach()

    notifier = notifier or _default_notifier()
    milestones = None
    if notifier is not None and not settings.NOTIFY_CHAT_IDS:
        logger.warning("NOTIFY_CHAT_IDS is empty; milestone delivery disabled")
    elif notifier is not None:
        milestones = MilestoneNotifier(notifier, settings.NOTIFY_CHAT_IDS)
        milestones.attach(bus)

    celebration = CelebrationTimer(
        settings.CELEBRATION_DISMISS_SECONDS,
        on_dismiss=lambda: logger.debug("Celebration dismissed"),
    )
    bus.subscribe(_celebrate_completions(celebration), {EventKind.TASK_TOGGLED})

    logger.info(
        "Planner built (seeded=%s, milestones=%s)", seed, "on" if milestones else "off",
    )
    return Planner(
        store=store,
        live_status=live_status,
        reminders=reminders,
        milestones=milestones,
        celebration=celebration,
    )
