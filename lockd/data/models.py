"""
Lockd — Data Models.

Plain records held by the planner store. Tasks live in day buckets;
templates are blueprints that never reference live tasks.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class TaskPriority(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TaskSource(Enum):
    MANUAL = "manual"
    HABIT = "habit"
    WORKOUT = "workout"


class HabitType(Enum):
    BUILD = "BUILD"
    REMOVE = "REMOVE"


class CardioMachine(Enum):
    TREADMILL = "Treadmill"
    STAIRMASTER = "Stairmaster"
    BIKE = "Bike"
    OTHER = "Other"


# ---------------------------------------------------------------------------
# Planner
# ---------------------------------------------------------------------------


@dataclass
class PlannerTask:
    """A time-blocked task, owned by the day bucket of its start."""

    title: str
    category: str
    start: datetime
    end: datetime
    notes: str = ""
    priority: TaskPriority = TaskPriority.MEDIUM
    source: TaskSource = TaskSource.MANUAL
    completed_at: datetime | None = None
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None


@dataclass
class TemplateTask:
    """A task blueprint: time of day plus duration, no calendar date."""

    title: str
    category: str
    start_hour: int
    start_minute: int
    duration_minutes: int
    priority: TaskPriority = TaskPriority.MEDIUM
    source: TaskSource = TaskSource.MANUAL
    id: uuid.UUID = field(default_factory=uuid.uuid4)


@dataclass
class DayTemplate:
    name: str
    tasks: list[TemplateTask] = field(default_factory=list)
    id: uuid.UUID = field(default_factory=uuid.uuid4)


@dataclass
class DaySummary:
    """Task totals for one day bucket."""

    date: datetime
    total_tasks: int
    completed_tasks: int

    @property
    def completion_rate(self) -> float:
        if self.total_tasks <= 0:
            return 0.0
        return self.completed_tasks / self.total_tasks


# ---------------------------------------------------------------------------
# Habits
# ---------------------------------------------------------------------------


@dataclass
class Habit:
    """A tracked habit.

    Counters are cumulative for the life of the store; nothing rolls
    weekly_completed over at week boundaries.
    """

    name: str
    type: HabitType
    weekly_target: int
    weekly_completed: int = 0
    current_streak: int = 0
    best_streak: int = 0
    reminder_hour: int = 8
    reminder_minute: int = 0
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @property
    def is_goal_completed(self) -> bool:
        return self.weekly_completed >= self.weekly_target


@dataclass
class Achievement:
    title: str
    detail: str
    date: datetime
    id: uuid.UUID = field(default_factory=uuid.uuid4)


# ---------------------------------------------------------------------------
# Gym
# ---------------------------------------------------------------------------


@dataclass
class Exercise:
    name: str
    target_sets: int = 4
    target_reps: int = 8
    id: uuid.UUID = field(default_factory=uuid.uuid4)


@dataclass
class WorkoutTemplate:
    name: str
    exercises: list[Exercise] = field(default_factory=list)
    id: uuid.UUID = field(default_factory=uuid.uuid4)


@dataclass(frozen=True)
class ExerciseTrendPoint:
    """One logged session for an exercise; the name is the series key."""

    day: datetime
    top_set_weight: float
    total_volume: float
    is_personal_record: bool
    id: uuid.UUID = field(default_factory=uuid.uuid4)


@dataclass
class CardioLog:
    date: datetime
    machine: CardioMachine
    duration_minutes: int
    speed: float = 0.0
    incline: float = 0.0
    level: int = 0
    id: uuid.UUID = field(default_factory=uuid.uuid4)
