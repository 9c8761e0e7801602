"""
Lockd — Planner Store.

The single source of truth for the planner, habit tracker and gym log.
Commands mutate the collections, publish a DomainEvent and return a
CommandOutcome. Queries recompute from the collections on every call;
nothing derived is cached.

Unknown ids and empty preconditions never raise: they come back as
NOT_FOUND / EMPTY_PRECONDITION outcomes and leave state untouched.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import TYPE_CHECKING, Any

from lockd.config import settings
from lockd.core.day_keys import (
    add_minutes,
    at_time,
    day_key,
    intervals_overlap,
    minutes_between,
)
from lockd.core.events import DomainEvent, EventBus, EventKind
from lockd.core.outcomes import CommandOutcome
from lockd.core.summaries import build_history
from lockd.data.models import (
    Achievement,
    CardioLog,
    DaySummary,
    DayTemplate,
    Exercise,
    ExerciseTrendPoint,
    Habit,
    HabitType,
    PlannerTask,
    TaskPriority,
    TaskSource,
    TemplateTask,
    WorkoutTemplate,
)

if TYPE_CHECKING:
    from lockd.ports.clock_port import ClockPort

logger = logging.getLogger(__name__)

HABIT_CATEGORY = "Habit"
HABIT_SUGGESTION_NOTES = "Auto-suggested from Habit tab"
WORKOUT_CATEGORY = "Workout"
WORKOUT_NOTES = "Template workout day"
ACHIEVEMENT_TITLE = "Goal Locked"


class PlannerStore:
    """In-memory state for one user's planner, habits and gym log."""

    def __init__(
        self,
        clock: ClockPort,
        bus: EventBus | None = None,
        *,
        tasks_by_day: dict[datetime, list[PlannerTask]] | None = None,
        day_templates: list[DayTemplate] | None = None,
        habits: list[Habit] | None = None,
        workout_templates: list[WorkoutTemplate] | None = None,
        exercise_trends: dict[str, list[ExerciseTrendPoint]] | None = None,
        cardio_logs: list[CardioLog] | None = None,
        achievements: list[Achievement] | None = None,
        selected_day: datetime | None = None,
        achievement_on_every_log: bool | None = None,
    ) -> None:
        self._clock = clock
        self.bus = bus if bus is not None else EventBus()

        # Re-key seeded tasks so every bucket obeys the start-day invariant
        self._tasks_by_day: dict[datetime, list[PlannerTask]] = {}
        for key, tasks in (tasks_by_day or {}).items():
            self._tasks_by_day.setdefault(day_key(key), [])
            for task in tasks:
                self._bucket(task.start).append(task)

        self._day_templates = list(day_templates or [])
        self._habits = list(habits or [])
        self._workout_templates = list(workout_templates or [])
        self._exercise_trends = {
            name: list(points) for name, points in (exercise_trends or {}).items()
        }
        self._cardio_logs = list(cardio_logs or [])
        self._achievements = list(achievements or [])
        self._selected_day = day_key(selected_day or clock.now())

        if achievement_on_every_log is None:
            achievement_on_every_log = settings.ACHIEVEMENT_ON_EVERY_LOG
        self._achievement_on_every_log = achievement_on_every_log

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _bucket(self, moment: datetime) -> list[PlannerTask]:
        return self._tasks_by_day.setdefault(day_key(moment), [])

    def _publish(self, kind: EventKind, payload: Any, **details: Any) -> None:
        self.bus.publish(
            DomainEvent(kind=kind, payload=payload, occurred_at=self._clock.now(), details=details)
        )

    def _today_tasks(self, as_of: datetime) -> list[PlannerTask]:
        return self._tasks_by_day.get(day_key(as_of), [])

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------

    @property
    def clock(self) -> ClockPort:
        return self._clock

    @property
    def selected_day(self) -> datetime:
        return self._selected_day

    @property
    def tasks_by_day(self) -> dict[datetime, list[PlannerTask]]:
        return {day: list(tasks) for day, tasks in self._tasks_by_day.items()}

    @property
    def day_templates(self) -> list[DayTemplate]:
        return list(self._day_templates)

    @property
    def habits(self) -> list[Habit]:
        return list(self._habits)

    @property
    def workout_templates(self) -> list[WorkoutTemplate]:
        return list(self._workout_templates)

    @property
    def cardio_logs(self) -> list[CardioLog]:
        return list(self._cardio_logs)

    @property
    def achievements(self) -> list[Achievement]:
        return list(self._achievements)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def tasks_for_day(self, day: datetime) -> list[PlannerTask]:
        """Tasks in *day*'s bucket, ascending by start."""
        return sorted(self._tasks_by_day.get(day_key(day), []), key=lambda t: t.start)

    def tasks_for_selected_day(self) -> list[PlannerTask]:
        return self.tasks_for_day(self._selected_day)

    def current_task(self, as_of: datetime | None = None) -> PlannerTask | None:
        """Earliest-starting open task whose [start, end) contains *as_of*."""
        now = as_of or self._clock.now()
        running = [
            t for t in self._today_tasks(now)
            if not t.is_completed and t.start <= now < t.end
        ]
        return min(running, key=lambda t: t.start, default=None)

    def next_task(self, as_of: datetime | None = None) -> PlannerTask | None:
        """Earliest open task today that starts strictly after *as_of*."""
        now = as_of or self._clock.now()
        upcoming = [
            t for t in self._today_tasks(now)
            if not t.is_completed and t.start > now
        ]
        return min(upcoming, key=lambda t: t.start, default=None)

    def has_open_tasks_today(self, as_of: datetime | None = None) -> bool:
        now = as_of or self._clock.now()
        return any(not t.is_completed for t in self._today_tasks(now))

    def history(self) -> list[DaySummary]:
        return build_history(self._tasks_by_day)

    def overlapping_tasks(self, task: PlannerTask) -> list[PlannerTask]:
        """Other tasks in *task*'s bucket whose intervals intersect it."""
        return [
            other for other in self._tasks_by_day.get(day_key(task.start), [])
            if other.id != task.id
            and intervals_overlap(other.start, other.end, task.start, task.end)
        ]

    def has_overlap(self, task: PlannerTask) -> bool:
        return bool(self.overlapping_tasks(task))

    def trend(self, exercise_name: str) -> list[ExerciseTrendPoint]:
        return list(self._exercise_trends.get(exercise_name, []))

    def exercise_names(self) -> list[str]:
        return sorted(self._exercise_trends)

    def find_task(self, task_id: uuid.UUID) -> PlannerTask | None:
        for tasks in self._tasks_by_day.values():
            for task in tasks:
                if task.id == task_id:
                    return task
        return None

    def find_habit(self, habit_id: uuid.UUID) -> Habit | None:
        return next((h for h in self._habits if h.id == habit_id), None)

    def find_workout_template(self, template_id: uuid.UUID) -> WorkoutTemplate | None:
        return next((w for w in self._workout_templates if w.id == template_id), None)

    def goal_completed_habits(self) -> list[Habit]:
        return [h for h in self._habits if h.is_goal_completed]

    def suggest_habit_tasks(self, day: datetime) -> list[PlannerTask]:
        """One 20-minute candidate task per habit at its reminder time.

        Pure: nothing is added to the store.
        """
        suggestions = []
        for habit in self._habits:
            start = at_time(day, habit.reminder_hour, habit.reminder_minute)
            suggestions.append(
                PlannerTask(
                    title=habit.name,
                    category=HABIT_CATEGORY,
                    notes=HABIT_SUGGESTION_NOTES,
                    start=start,
                    end=add_minutes(start, settings.HABIT_SUGGESTION_MINUTES),
                    priority=TaskPriority.MEDIUM,
                    source=TaskSource.HABIT,
                )
            )
        return suggestions

    # ------------------------------------------------------------------
    # Planner commands
    # ------------------------------------------------------------------

    def add_task(
        self,
        title: str,
        category: str,
        notes: str,
        start: datetime,
        end: datetime,
        priority: TaskPriority,
        source: TaskSource = TaskSource.MANUAL,
    ) -> CommandOutcome:
        """File a new task under *start*'s day. end > start is not checked here."""
        task = PlannerTask(
            title=title,
            category=category,
            notes=notes,
            start=start,
            end=end,
            priority=priority,
            source=source,
        )
        self._bucket(start).append(task)
        logger.info("Task added: '%s' on %s", title, day_key(start).date())
        self._publish(EventKind.TASK_ADDED, task)
        return CommandOutcome.success(task)

    def toggle_complete(self, task_id: uuid.UUID) -> CommandOutcome:
        """Flip completion for a task on any day."""
        task = self.find_task(task_id)
        if task is None:
            logger.debug("toggle_complete: no task %s", task_id)
            return CommandOutcome.not_found(f"No task with id {task_id}")

        task.completed_at = None if task.is_completed else self._clock.now()
        logger.info(
            "Task '%s' marked %s", task.title, "complete" if task.is_completed else "open",
        )
        self._publish(EventKind.TASK_TOGGLED, task)
        return CommandOutcome.success(task)

    def update_selected_day(self, date: datetime) -> CommandOutcome:
        self._selected_day = day_key(date)
        self._publish(EventKind.SELECTED_DAY_CHANGED, self._selected_day)
        return CommandOutcome.success(self._selected_day)

    def apply_template(self, template: DayTemplate, day: datetime) -> CommandOutcome:
        """Materialize *template* onto *day*, skipping (title, hour) duplicates.

        Duplicates are checked against the bucket as it grows, so a
        template that repeats a (title, hour) pair only lands once.
        """
        bucket = self._bucket(day)
        added: list[PlannerTask] = []

        for tt in template.tasks:
            if any(t.title == tt.title and t.start.hour == tt.start_hour for t in bucket):
                continue
            start = at_time(day, tt.start_hour, tt.start_minute)
            task = PlannerTask(
                title=tt.title,
                category=tt.category,
                notes="",
                start=start,
                end=add_minutes(start, tt.duration_minutes),
                priority=tt.priority,
                source=tt.source,
            )
            bucket.append(task)
            added.append(task)

        logger.info(
            "Template '%s' applied to %s: %d added, %d skipped",
            template.name, day_key(day).date(), len(added), len(template.tasks) - len(added),
        )
        for task in added:
            self._publish(EventKind.TASK_ADDED, task)
        self._publish(EventKind.TEMPLATE_APPLIED, added, template_id=template.id)
        return CommandOutcome.success(added)

    def create_template(self, name: str, from_day: datetime) -> CommandOutcome:
        """Capture every task on *from_day* as a reusable DayTemplate."""
        source_tasks = self._tasks_by_day.get(day_key(from_day), [])
        if not source_tasks:
            logger.debug("create_template: %s has no tasks", day_key(from_day).date())
            return CommandOutcome.empty_precondition(
                f"No tasks on {day_key(from_day).date()} to build a template from"
            )

        template = DayTemplate(
            name=name,
            tasks=[
                TemplateTask(
                    title=t.title,
                    category=t.category,
                    start_hour=t.start.hour,
                    start_minute=t.start.minute,
                    duration_minutes=minutes_between(t.start, t.end),
                    priority=t.priority,
                    source=t.source,
                )
                for t in source_tasks
            ],
        )
        self._day_templates.append(template)
        logger.info("Template '%s' created with %d tasks", name, len(template.tasks))
        self._publish(EventKind.TEMPLATE_CREATED, template)
        return CommandOutcome.success(template)

    # ------------------------------------------------------------------
    # Habit commands
    # ------------------------------------------------------------------

    def add_habit(self, name: str, type: HabitType, weekly_target: int) -> CommandOutcome:
        habit = Habit(
            name=name,
            type=type,
            weekly_target=weekly_target,
            reminder_hour=settings.DEFAULT_REMINDER_HOUR,
            reminder_minute=settings.DEFAULT_REMINDER_MINUTE,
        )
        self._habits.append(habit)
        logger.info("Habit added: '%s' (%s, %d/week)", name, type.value, weekly_target)
        self._publish(EventKind.HABIT_ADDED, habit)
        return CommandOutcome.success(habit)

    def log_habit(self, habit_id: uuid.UUID, completed: bool) -> CommandOutcome:
        """Record a positive or missed log and update streaks.

        An Achievement is created when the habit crosses into
        goal-completed. With achievement_on_every_log, one is created on
        every log while the goal stays complete instead.

        Payload is the habit; a new Achievement is announced through
        ACHIEVEMENT_CREATED.
        """
        habit = self.find_habit(habit_id)
        if habit is None:
            logger.debug("log_habit: no habit %s", habit_id)
            return CommandOutcome.not_found(f"No habit with id {habit_id}")

        was_complete = habit.is_goal_completed
        if completed:
            habit.weekly_completed += 1
            habit.current_streak += 1
            habit.best_streak = max(habit.best_streak, habit.current_streak)
        else:
            habit.current_streak = 0

        logger.info(
            "Habit '%s' logged (%s): %d/%d, streak %d",
            habit.name, "done" if completed else "missed",
            habit.weekly_completed, habit.weekly_target, habit.current_streak,
        )
        self._publish(EventKind.HABIT_LOGGED, habit, completed=completed)

        if habit.is_goal_completed and (self._achievement_on_every_log or not was_complete):
            achievement = Achievement(
                title=ACHIEVEMENT_TITLE,
                detail=f"{habit.name} weekly target complete",
                date=self._clock.now(),
            )
            self._achievements.insert(0, achievement)
            logger.info("Achievement unlocked: %s", achievement.detail)
            self._publish(EventKind.ACHIEVEMENT_CREATED, achievement, habit_id=habit.id)

        return CommandOutcome.success(habit)

    def accept_habit_suggestions(self, day: datetime) -> CommandOutcome:
        """Add habit suggestions not already on *day* (matched by title + "Habit")."""
        bucket = self._bucket(day)
        added: list[PlannerTask] = []
        for suggestion in self.suggest_habit_tasks(day):
            if any(t.title == suggestion.title and t.category == HABIT_CATEGORY for t in bucket):
                continue
            bucket.append(suggestion)
            added.append(suggestion)

        logger.info("Accepted %d habit suggestions for %s", len(added), day_key(day).date())
        for task in added:
            self._publish(EventKind.TASK_ADDED, task)
        return CommandOutcome.success(added)

    # ------------------------------------------------------------------
    # Gym commands
    # ------------------------------------------------------------------

    def add_workout_template(self, name: str, exercises: list[Exercise]) -> CommandOutcome:
        template = WorkoutTemplate(name=name, exercises=list(exercises))
        self._workout_templates.append(template)
        logger.info("Workout template added: '%s' (%d exercises)", name, len(exercises))
        self._publish(EventKind.WORKOUT_TEMPLATE_ADDED, template)
        return CommandOutcome.success(template)

    def log_set(
        self, exercise_name: str, weight: float, reps: int, sets: int,
    ) -> CommandOutcome:
        """Append a trend point; a tie with the prior best counts as a PR."""
        series = self._exercise_trends.setdefault(exercise_name, [])
        current_pr = max((p.top_set_weight for p in series), default=0)
        point = ExerciseTrendPoint(
            day=self._clock.now(),
            top_set_weight=weight,
            total_volume=weight * reps * sets,
            is_personal_record=weight >= current_pr,
        )
        series.append(point)
        logger.info(
            "Set logged for %s: %s x %d x %d%s",
            exercise_name, weight, reps, sets, " (PR)" if point.is_personal_record else "",
        )
        self._publish(EventKind.TREND_POINT_RECORDED, point, exercise_name=exercise_name)
        return CommandOutcome.success(point)

    def schedule_workout(self, template_id: uuid.UUID, day: datetime) -> CommandOutcome:
        template = self.find_workout_template(template_id)
        if template is None:
            logger.debug("schedule_workout: no template %s", template_id)
            return CommandOutcome.not_found(f"No workout template with id {template_id}")

        start = at_time(day, settings.WORKOUT_START_HOUR, 0)
        return self.add_task(
            title=template.name,
            category=WORKOUT_CATEGORY,
            notes=WORKOUT_NOTES,
            start=start,
            end=add_minutes(start, settings.WORKOUT_DURATION_MINUTES),
            priority=TaskPriority.HIGH,
            source=TaskSource.WORKOUT,
        )

    def add_cardio_log(self, log: CardioLog) -> CommandOutcome:
        self._cardio_logs.insert(0, log)
        logger.info("Cardio logged: %s for %d min", log.machine.value, log.duration_minutes)
        self._publish(EventKind.CARDIO_LOGGED, log)
        return CommandOutcome.success(log)
