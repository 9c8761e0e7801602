"""Tests for the store's collaborators — live status, reminders, milestones.

Ports are MagicMock/AsyncMock stand-ins; the store is real.
"""

from datetime import datetime
from unittest.mock import AsyncMock, MagicMock, call
from zoneinfo import ZoneInfo

import pytest

from lockd.core.events import DomainEvent, EventKind
from lockd.core.live_status import LiveStatusSync
from lockd.core.milestones import MilestoneNotifier, format_achievement
from lockd.core.reminders import ReminderSync
from lockd.core.store import PlannerStore
from lockd.data.models import Achievement, HabitType, PlannerTask, TaskPriority

DAY = datetime(2026, 2, 9)


def _at(hour, minute=0):
    return DAY.replace(hour=hour, minute=minute)


def _add(store, title, start, end):
    return store.add_task(title, "Work", "", start, end, TaskPriority.MEDIUM).payload


# ---------------------------------------------------------------------------
# LiveStatusSync
# ---------------------------------------------------------------------------


class TestLiveStatusSync:
    def test_announces_after_task_added(self, store):
        port = MagicMock()
        LiveStatusSync(store, port).attach()
        running = _add(store, "Running", _at(8, 30), _at(9, 30))
        port.announce.assert_called_with(running, None)
        port.clear.assert_called_with(True)

    def test_announces_next_task(self, store):
        port = MagicMock()
        LiveStatusSync(store, port).attach()
        upcoming = _add(store, "Upcoming", _at(11), _at(12))
        port.announce.assert_called_with(None, upcoming)

    def test_completion_moves_to_next_and_reports_no_open(self, store):
        running = _add(store, "Running", _at(8, 30), _at(9, 30))
        port = MagicMock()
        LiveStatusSync(store, port).attach()
        store.toggle_complete(running.id)
        port.announce.assert_called_with(None, None)
        port.clear.assert_called_with(False)

    def test_ignores_unrelated_events(self, store):
        port = MagicMock()
        LiveStatusSync(store, port).attach()
        store.log_set("Row", weight=100, reps=8, sets=3)
        store.add_habit("Read", HabitType.BUILD, 3)
        port.announce.assert_not_called()

    def test_detach_stops_updates(self, store):
        port = MagicMock()
        sync = LiveStatusSync(store, port)
        sync.attach()
        sync.detach()
        _add(store, "Running", _at(8, 30), _at(9, 30))
        port.announce.assert_not_called()

    def test_attach_twice_subscribes_once(self, store):
        port = MagicMock()
        sync = LiveStatusSync(store, port)
        sync.attach()
        sync.attach()
        _add(store, "Running", _at(8, 30), _at(9, 30))
        assert port.announce.call_count == 1

    def test_presenter_failure_does_not_break_store(self, store):
        port = MagicMock()
        port.announce.side_effect = RuntimeError("activity host gone")
        LiveStatusSync(store, port).attach()
        outcome = store.add_task("Run", "Fitness", "", _at(10), _at(11), TaskPriority.HIGH)
        assert outcome.ok
        assert len(store.tasks_for_day(DAY)) == 1


# ---------------------------------------------------------------------------
# ReminderSync
# ---------------------------------------------------------------------------


class TestReminderSync:
    def test_schedules_future_task(self, store, clock):
        port = MagicMock()
        ReminderSync(store, port, clock).attach()
        task = _add(store, "Deep Work", _at(10), _at(11))
        port.schedule.assert_called_once_with(task.id, _at(10), "Deep Work")

    def test_skips_past_task(self, store, clock):
        port = MagicMock()
        ReminderSync(store, port, clock).attach()
        _add(store, "Breakfast", _at(7), _at(7, 30))
        port.schedule.assert_not_called()

    def test_cancel_on_complete_and_reschedule_on_reopen(self, store, clock):
        port = MagicMock()
        ReminderSync(store, port, clock).attach()
        task = _add(store, "Deep Work", _at(10), _at(11))
        store.toggle_complete(task.id)
        port.cancel.assert_called_once_with(task.id)
        store.toggle_complete(task.id)
        assert port.schedule.call_args_list == [
            call(task.id, _at(10), "Deep Work"),
            call(task.id, _at(10), "Deep Work"),
        ]

    def test_template_tasks_get_reminders(self, store, clock):
        from lockd.data.models import DayTemplate, TemplateTask

        port = MagicMock()
        ReminderSync(store, port, clock).attach()
        template = DayTemplate("Day", [TemplateTask("Lift", "Workout", 18, 0, 70)])
        store.apply_template(template, DAY)
        port.schedule.assert_called_once()

    def _publish_added(self, bus, task, clock):
        bus.publish(DomainEvent(EventKind.TASK_ADDED, task, clock.now()))

    def test_naive_task_with_aware_clock(self, bus, clock):
        clock.current = _at(9).replace(tzinfo=ZoneInfo("Asia/Jerusalem"))
        store = MagicMock(bus=bus)
        port = MagicMock()
        ReminderSync(store, port, clock).attach()
        upcoming = PlannerTask(title="Deep Work", category="Work", start=_at(10), end=_at(11))
        past = PlannerTask(title="Breakfast", category="Food", start=_at(7), end=_at(8))
        self._publish_added(bus, upcoming, clock)
        self._publish_added(bus, past, clock)
        port.schedule.assert_called_once_with(upcoming.id, _at(10), "Deep Work")

    def test_aware_task_with_naive_clock(self, bus, clock):
        store = MagicMock(bus=bus)
        port = MagicMock()
        ReminderSync(store, port, clock).attach()
        start = _at(10).replace(tzinfo=ZoneInfo("UTC"))
        task = PlannerTask(title="Call", category="Work", start=start, end=start)
        self._publish_added(bus, task, clock)
        port.schedule.assert_called_once_with(task.id, start, "Call")


# ---------------------------------------------------------------------------
# MilestoneNotifier
# ---------------------------------------------------------------------------


class TestMilestoneNotifier:
    def test_format(self):
        achievement = Achievement("Goal Locked", "Read weekly target complete", DAY)
        assert format_achievement(achievement) == "🏆 Goal Locked\nRead weekly target complete"

    def test_queues_on_achievement(self, store, bus):
        milestones = MilestoneNotifier(AsyncMock(), [1])
        milestones.attach(bus)
        habit = store.add_habit("Read", HabitType.BUILD, 1).payload
        store.log_habit(habit.id, completed=True)
        assert milestones.pending == ["🏆 Goal Locked\nRead weekly target complete"]

    @pytest.mark.asyncio
    async def test_delivers_to_every_chat(self, store, bus):
        notifier = MagicMock()
        notifier.send_message = AsyncMock()
        milestones = MilestoneNotifier(notifier, [1, 2])
        milestones.attach(bus)
        habit = store.add_habit("Read", HabitType.BUILD, 1).payload
        store.log_habit(habit.id, completed=True)

        sent = await milestones.deliver_pending()

        assert sent == 2
        assert notifier.send_message.await_count == 2
        notifier.send_message.assert_any_await(1, "🏆 Goal Locked\nRead weekly target complete")
        assert milestones.pending == []

    @pytest.mark.asyncio
    async def test_partial_failure_keeps_going(self, store, bus):
        notifier = MagicMock()
        notifier.send_message = AsyncMock(side_effect=[Exception("blocked"), None])
        milestones = MilestoneNotifier(notifier, [1, 2])
        milestones.attach(bus)
        habit = store.add_habit("Read", HabitType.BUILD, 1).payload
        store.log_habit(habit.id, completed=True)

        sent = await milestones.deliver_pending()

        assert sent == 1
        assert milestones.pending == []

    @pytest.mark.asyncio
    async def test_total_failure_keeps_message_queued(self, store, bus):
        notifier = MagicMock()
        notifier.send_message = AsyncMock(side_effect=Exception("network down"))
        milestones = MilestoneNotifier(notifier, [1])
        milestones.attach(bus)
        habit = store.add_habit("Read", HabitType.BUILD, 1).payload
        store.log_habit(habit.id, completed=True)

        assert await milestones.deliver_pending() == 0
        assert len(milestones.pending) == 1

    @pytest.mark.asyncio
    async def test_nothing_pending(self):
        notifier = MagicMock()
        notifier.send_message = AsyncMock()
        assert await MilestoneNotifier(notifier, [1]).deliver_pending() == 0
        notifier.send_message.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_no_recipients_drops_queue(self, clock, bus):
        store = PlannerStore(clock, bus, achievement_on_every_log=True)
        notifier = MagicMock()
        notifier.send_message = AsyncMock()
        milestones = MilestoneNotifier(notifier, [])
        milestones.attach(bus)
        habit = store.add_habit("Read", HabitType.BUILD, 1).payload
        for _ in range(50):
            store.log_habit(habit.id, completed=True)
        assert len(milestones.pending) == 50

        assert await milestones.deliver_pending() == 0
        assert milestones.pending == []
        notifier.send_message.assert_not_awaited()
