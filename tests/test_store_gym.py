"""Tests for lockd.core.store — trends, personal records, workouts, cardio."""

import uuid
from datetime import datetime, timedelta

import pytest

from lockd.core.events import EventKind
from lockd.core.outcomes import OutcomeKind
from lockd.data.models import (
    CardioLog,
    CardioMachine,
    Exercise,
    TaskPriority,
    TaskSource,
)

DAY = datetime(2026, 2, 12)


# ---------------------------------------------------------------------------
# log_set / trend
# ---------------------------------------------------------------------------


class TestLogSet:
    def test_first_set_is_record(self, store, clock):
        point = store.log_set("Bench Press", weight=185, reps=5, sets=3).payload
        assert point.total_volume == 2775
        assert point.top_set_weight == 185
        assert point.is_personal_record is True
        assert point.day == clock.now()
        assert store.trend("Bench Press") == [point]

    def test_lighter_set_is_not_record_and_tie_is(self, store):
        store.log_set("Bench Press", weight=185, reps=5, sets=3)
        lighter = store.log_set("Bench Press", weight=180, reps=5, sets=3).payload
        tie = store.log_set("Bench Press", weight=185, reps=5, sets=3).payload
        assert lighter.is_personal_record is False
        assert tie.is_personal_record is True

    def test_heavier_set_is_record(self, store):
        store.log_set("Squat", weight=225, reps=5, sets=5)
        assert store.log_set("Squat", weight=230, reps=3, sets=1).payload.is_personal_record is True

    def test_series_are_per_exercise(self, store):
        store.log_set("Bench Press", weight=300, reps=1, sets=1)
        point = store.log_set("Curl", weight=40, reps=10, sets=3).payload
        assert point.is_personal_record is True
        assert len(store.trend("Bench Press")) == 1

    def test_trend_keeps_insertion_order(self, store, clock):
        weights = [100, 90, 110, 105]
        for w in weights:
            store.log_set("Row", weight=w, reps=8, sets=3)
            clock.advance(days=1)
        series = store.trend("Row")
        assert [p.top_set_weight for p in series] == weights
        assert [p.is_personal_record for p in series] == [True, False, True, False]

    def test_earlier_points_not_rewritten(self, store):
        first = store.log_set("Row", weight=100, reps=8, sets=3).payload
        store.log_set("Row", weight=120, reps=8, sets=3)
        assert store.trend("Row")[0] is first
        assert first.is_personal_record is True

    def test_zero_weight_on_empty_series_is_record(self, store):
        assert store.log_set("Plank", weight=0, reps=1, sets=3).payload.is_personal_record is True

    def test_unknown_exercise_trend_is_empty(self, store):
        assert store.trend("Nothing") == []

    def test_trend_returns_copy(self, store):
        store.log_set("Row", weight=100, reps=8, sets=3)
        store.trend("Row").clear()
        assert len(store.trend("Row")) == 1

    def test_exercise_names_sorted(self, store):
        store.log_set("Squat", weight=1, reps=1, sets=1)
        store.log_set("Bench", weight=1, reps=1, sets=1)
        assert store.exercise_names() == ["Bench", "Squat"]

    def test_publishes_trend_point(self, store, bus):
        seen = []
        bus.subscribe(seen.append)
        store.log_set("Row", weight=100, reps=8, sets=3)
        assert seen[0].kind is EventKind.TREND_POINT_RECORDED
        assert seen[0].details == {"exercise_name": "Row"}


# ---------------------------------------------------------------------------
# workout templates
# ---------------------------------------------------------------------------


class TestWorkouts:
    def test_add_workout_template(self, store):
        exercises = [Exercise("Bench Press", 4, 6), Exercise("Overhead Press")]
        template = store.add_workout_template("Push Day", exercises).payload
        assert store.workout_templates == [template]
        assert [e.name for e in template.exercises] == ["Bench Press", "Overhead Press"]
        assert (template.exercises[1].target_sets, template.exercises[1].target_reps) == (4, 8)

    def test_schedule_workout_creates_evening_task(self, store):
        template = store.add_workout_template("Leg Day", [Exercise("Back Squat")]).payload
        outcome = store.schedule_workout(template.id, DAY.replace(hour=7, minute=12))
        assert outcome.ok
        [task] = store.tasks_for_day(DAY)
        assert task is outcome.payload
        assert task.title == "Leg Day"
        assert task.category == "Workout"
        assert task.source is TaskSource.WORKOUT
        assert task.priority is TaskPriority.HIGH
        assert task.start == datetime(2026, 2, 12, 18, 0)
        assert task.end == datetime(2026, 2, 12, 19, 10)

    def test_schedule_unknown_template_is_not_found(self, store):
        outcome = store.schedule_workout(uuid.uuid4(), DAY)
        assert outcome.kind is OutcomeKind.NOT_FOUND
        assert store.history() == []

    def test_schedule_twice_adds_two_tasks(self, store):
        template = store.add_workout_template("Push Day", []).payload
        store.schedule_workout(template.id, DAY)
        store.schedule_workout(template.id, DAY)
        assert len(store.tasks_for_day(DAY)) == 2

    def test_find_workout_template(self, store):
        template = store.add_workout_template("Push Day", []).payload
        assert store.find_workout_template(template.id) is template
        assert store.find_workout_template(uuid.uuid4()) is None


# ---------------------------------------------------------------------------
# cardio
# ---------------------------------------------------------------------------


class TestCardio:
    def test_newest_first(self, store, clock):
        older = CardioLog(date=clock.now() - timedelta(days=1), machine=CardioMachine.STAIRMASTER, duration_minutes=15, level=8)
        newer = CardioLog(date=clock.now(), machine=CardioMachine.TREADMILL, duration_minutes=20, speed=6.2, incline=3.5)
        store.add_cardio_log(older)
        store.add_cardio_log(newer)
        assert store.cardio_logs == [newer, older]

    @pytest.mark.parametrize("machine", list(CardioMachine))
    def test_any_machine(self, store, clock, machine):
        log = CardioLog(date=clock.now(), machine=machine, duration_minutes=10)
        assert store.add_cardio_log(log).payload is log

    def test_publishes_cardio_logged(self, store, bus, clock):
        seen = []
        bus.subscribe(seen.append)
        store.add_cardio_log(CardioLog(date=clock.now(), machine=CardioMachine.BIKE, duration_minutes=30))
        assert seen[0].kind is EventKind.CARDIO_LOGGED
