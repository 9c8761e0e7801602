"""
Lockd — Sample data.

Demo fixture loaded at startup when SEED_SAMPLE_DATA is on. Everything
is laid out relative to the given "today" so the demo always has a
current day with a finished, a running and an upcoming block.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any

from lockd.core.day_keys import at_time, day_key
from lockd.data.models import (
    CardioLog,
    CardioMachine,
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


def mock_trend(now: datetime, base: float, growth: float) -> list[ExerciseTrendPoint]:
    """Six daily points ending today; weight climbs by *growth*, last is the PR."""
    points = []
    for index in range(6):
        weight = base + index * growth
        points.append(
            ExerciseTrendPoint(
                day=now + timedelta(days=index - 5),
                top_set_weight=weight,
                total_volume=weight * 14,
                is_personal_record=index == 5,
            )
        )
    return points


def sample_state(now: datetime) -> dict[str, Any]:
    """Keyword arguments for PlannerStore holding the demo data."""
    today = day_key(now)
    tomorrow = today + timedelta(days=1)

    tasks_by_day = {
        today: [
            PlannerTask(
                title="Morning Run",
                category="Fitness",
                notes="5k easy pace",
                start=at_time(today, 7, 0),
                end=at_time(today, 7, 40),
                priority=TaskPriority.HIGH,
                source=TaskSource.MANUAL,
                completed_at=now,
            ),
            PlannerTask(
                title="Deep Work Sprint",
                category="Work",
                notes="Project scope and shipping tasks",
                start=at_time(today, 10, 0),
                end=at_time(today, 11, 30),
                priority=TaskPriority.HIGH,
                source=TaskSource.MANUAL,
            ),
            PlannerTask(
                title="Upper Body Session",
                category="Workout",
                notes="Bench + rows + shoulders",
                start=at_time(today, 18, 0),
                end=at_time(today, 19, 15),
                priority=TaskPriority.MEDIUM,
                source=TaskSource.WORKOUT,
            ),
        ],
        tomorrow: [
            PlannerTask(
                title="Plan Review",
                category="Work",
                notes="Review daily priorities",
                start=at_time(tomorrow, 8, 30),
                end=at_time(tomorrow, 9, 0),
                priority=TaskPriority.MEDIUM,
                source=TaskSource.MANUAL,
            ),
        ],
    }

    day_templates = [
        DayTemplate(
            name="Standard Lock-In Day",
            tasks=[
                TemplateTask("Hydration", "Habit", 8, 0, 10, TaskPriority.LOW, TaskSource.HABIT),
                TemplateTask("Focus Block", "Work", 9, 0, 120, TaskPriority.HIGH, TaskSource.MANUAL),
                TemplateTask("Lift Session", "Workout", 18, 0, 70, TaskPriority.HIGH, TaskSource.WORKOUT),
            ],
        ),
    ]

    habits = [
        Habit(
            name="No Late Scrolling", type=HabitType.REMOVE, weekly_target=6,
            weekly_completed=4, current_streak=5, best_streak=9,
            reminder_hour=21, reminder_minute=30,
        ),
        Habit(
            name="Read 20 Minutes", type=HabitType.BUILD, weekly_target=7,
            weekly_completed=5, current_streak=3, best_streak=8,
            reminder_hour=20, reminder_minute=0,
        ),
    ]

    workout_templates = [
        WorkoutTemplate(
            name="Push Day",
            exercises=[
                Exercise("Bench Press", 4, 6),
                Exercise("Incline Dumbbell Press", 3, 10),
                Exercise("Overhead Press", 4, 8),
            ],
        ),
        WorkoutTemplate(
            name="Leg Day",
            exercises=[
                Exercise("Back Squat", 5, 5),
                Exercise("Romanian Deadlift", 4, 8),
                Exercise("Walking Lunges", 3, 12),
            ],
        ),
    ]

    cardio_logs = [
        CardioLog(date=now, machine=CardioMachine.TREADMILL, duration_minutes=20, speed=6.2, incline=3.5),
        CardioLog(date=now - timedelta(days=1), machine=CardioMachine.STAIRMASTER, duration_minutes=15, level=8),
    ]

    return {
        "tasks_by_day": tasks_by_day,
        "day_templates": day_templates,
        "habits": habits,
        "workout_templates": workout_templates,
        "exercise_trends": {
            "Bench Press": mock_trend(now, base=185, growth=2),
            "Back Squat": mock_trend(now, base=225, growth=3),
        },
        "cardio_logs": cardio_logs,
    }
