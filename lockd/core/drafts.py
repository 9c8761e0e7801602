"""
Lockd — Draft validation.

The store accepts any input it is given. These checks are the ones an
entry form applies before calling a store command; any new caller has
to run them itself.
"""

from __future__ import annotations

import logging
from datetime import datetime

from lockd.core.outcomes import CommandOutcome
from lockd.data.models import Exercise

logger = logging.getLogger(__name__)

DEFAULT_TARGET_SETS = 4
DEFAULT_TARGET_REPS = 8


def validate_task_draft(title: str, start: datetime, end: datetime) -> CommandOutcome:
    """Reject blank titles and end times at or before the start."""
    if not title.strip():
        return CommandOutcome.invalid_input("Task title is required")
    if end <= start:
        return CommandOutcome.invalid_range("End time must be after start time")
    return CommandOutcome.success()


def validate_habit_draft(name: str, weekly_target: int) -> CommandOutcome:
    if not name.strip():
        return CommandOutcome.invalid_input("Habit name is required")
    if weekly_target < 1:
        return CommandOutcome.invalid_input("Weekly target must be at least 1")
    return CommandOutcome.success()


def parse_exercise_list(
    text: str,
    target_sets: int = DEFAULT_TARGET_SETS,
    target_reps: int = DEFAULT_TARGET_REPS,
) -> list[Exercise]:
    """Turn "Bench Press, Incline Press" into Exercise records.

    Blank entries (e.g. from a trailing comma) are dropped.
    """
    names = [part.strip() for part in text.split(",")]
    return [
        Exercise(name=name, target_sets=target_sets, target_reps=target_reps)
        for name in names
        if name
    ]


def validate_workout_draft(name: str, exercises_text: str) -> CommandOutcome:
    """Validate a workout day form; payload is the parsed exercise list."""
    if not name.strip():
        return CommandOutcome.invalid_input("Workout name is required")
    exercises = parse_exercise_list(exercises_text)
    if not exercises:
        return CommandOutcome.invalid_input("At least one exercise is required")
    logger.debug("Parsed %d exercises for workout '%s'", len(exercises), name)
    return CommandOutcome.success(exercises)
