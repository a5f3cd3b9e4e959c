from datetime import date, datetime

import pytest
from sqlalchemy import select, func
from sqlalchemy.exc import OperationalError

from liftlog import actions
from liftlog.actions import RequestContext
from liftlog.models import Workout
from liftlog.repositories.workout_repo import WorkoutRepository

from conftest import new_user_id


@pytest.fixture
def ctx(db, revalidator):
    return RequestContext(db=db, user_id=new_user_id(), revalidator=revalidator)


def test_leg_day_lifecycle(db, ctx, revalidator):
    created = actions.create_workout(ctx, {"name": "Leg Day", "started_at": "2025-01-10T08:00:00Z"})
    assert created.success, created.error
    w = created.data
    assert w.name == "Leg Day"
    assert w.started_at == datetime(2025, 1, 10, 8, 0)
    assert w.completed_at is None
    assert w.is_completed is False
    assert w.created_at == w.updated_at
    assert revalidator.paths == ["/dashboard"]

    done = actions.update_workout(ctx, w.id, {"completed_at": "2025-01-10T09:00:00Z"})
    assert done.success, done.error
    assert done.data.completed_at == datetime(2025, 1, 10, 9, 0)
    assert done.data.is_completed is True
    assert done.data.duration_minutes == 60
    assert done.data.name == "Leg Day"
    assert f"/dashboard/workout/{w.id}" in revalidator.paths

    stranger = RequestContext(db=db, user_id="u2", revalidator=revalidator)
    other = actions.get_workout(stranger, w.id)
    assert other.success is False
    assert other.code == "not_found"
    assert other.error == "Workout not found or unauthorized"


def test_blank_name_gets_generated_label(ctx):
    r = actions.create_workout(ctx, {"name": "   ", "started_at": "2025-01-10T08:00:00"})
    assert r.success
    assert r.data.name == "Workout on 10 Jan 2025"


def test_missing_identity_is_unauthorized_even_for_bad_input(db, revalidator):
    anon = RequestContext(db=db, user_id=None, revalidator=revalidator)
    r = actions.create_workout(anon, {"started_at": "not a date"})
    assert r.success is False
    assert r.code == "unauthorized"
    assert r.error == "Unauthorized"
    assert r.field_errors == []
    assert revalidator.paths == []


def test_validation_failure_lists_fields(ctx, revalidator):
    r = actions.create_workout(ctx, {"name": "x" * 256})
    assert r.success is False
    assert r.code == "validation_error"
    fields = {e.field for e in r.field_errors}
    assert fields == {"name", "started_at"}
    assert revalidator.paths == []


def test_completed_before_started_rejected_against_stored_value(ctx):
    w = actions.create_workout(ctx, {"started_at": "2025-01-10T08:00:00"}).data
    r = actions.update_workout(ctx, w.id, {"completed_at": "2025-01-10T07:00:00"})
    assert r.success is False
    assert r.code == "validation_error"
    assert r.field_errors[0].field == "completed_at"


def test_started_at_cannot_be_cleared(ctx):
    w = actions.create_workout(ctx, {"started_at": "2025-01-10T08:00:00"}).data
    r = actions.update_workout(ctx, w.id, {"started_at": None})
    assert r.code == "validation_error"
    assert r.field_errors[0].field == "started_at"


def test_partial_update_only_touches_given_fields(ctx):
    w = actions.create_workout(ctx, {"name": "Pull", "started_at": "2025-01-11T18:00:00"}).data
    r = actions.update_workout(ctx, w.id, {"name": "Pull (heavy)"})
    assert r.success
    assert r.data.name == "Pull (heavy)"
    assert r.data.started_at == w.started_at
    assert r.data.completed_at is None


def test_complete_and_reopen(ctx):
    w = actions.create_workout(ctx, {"started_at": "2025-01-12T08:00:00"}).data
    done = actions.complete_workout(ctx, w.id, datetime(2025, 1, 12, 9, 30))
    assert done.data.is_completed
    reopened = actions.reopen_workout(ctx, w.id)
    assert reopened.success
    assert reopened.data.completed_at is None


def test_delete_workout_is_owner_scoped(db, ctx, revalidator):
    w = actions.create_workout(ctx, {"started_at": "2025-01-13T08:00:00"}).data
    stranger = RequestContext(db=db, user_id=new_user_id(), revalidator=revalidator)
    assert actions.delete_workout(stranger, w.id).code == "not_found"
    deleted = actions.delete_workout(ctx, w.id)
    assert deleted.success
    assert deleted.data.id == w.id
    assert actions.get_workout(ctx, w.id).code == "not_found"


def test_list_for_day_and_all(ctx):
    actions.create_workout(ctx, {"name": "morning", "started_at": "2025-05-01T06:00:00"})
    actions.create_workout(ctx, {"name": "evening", "started_at": "2025-05-01T19:00:00"})
    actions.create_workout(ctx, {"name": "next day", "started_at": "2025-05-02T06:00:00"})

    day = actions.list_workouts_for_day(ctx, date(2025, 5, 1))
    assert day.success
    assert [w.name for w in day.data] == ["evening", "morning"]

    everything = actions.list_workouts(ctx)
    assert [w.name for w in everything.data] == ["next day", "evening", "morning"]

    bad = actions.list_workouts(ctx, {"day": "yesterday-ish"})
    assert bad.code == "validation_error"


def test_bulk_create_builds_nested_workout(ctx, revalidator):
    tag = new_user_id()
    r = actions.create_workout_with_exercises(ctx, {
        "name": "Upper",
        "started_at": "2025-06-01T10:00:00",
        "completed_at": "2025-06-01T11:15:00",
        "exercises": [
            {"exercise_name": f"Bench {tag}", "sets": [
                {"weight": "80", "reps": 8}, {"weight": "85", "reps": 6},
            ]},
            {"exercise_name": f"Row {tag}", "order": 5, "sets": [{"weight": 60.5, "reps": 10}]},
        ],
    })
    assert r.success, r.field_errors
    detail = r.data
    assert detail.is_completed
    assert [we.exercise.name for we in detail.workout_exercises] == [f"Bench {tag}", f"Row {tag}"]
    assert [we.order for we in detail.workout_exercises] == [1, 5]
    assert [s.set_number for s in detail.workout_exercises[0].sets] == [1, 2]
    assert str(detail.workout_exercises[1].sets[0].weight) == "60.50"
    assert "/exercises" in revalidator.paths


def test_bulk_create_writes_nothing_on_failure(db, ctx):
    r = actions.create_workout_with_exercises(ctx, {
        "name": "Doomed",
        "started_at": "2025-06-02T10:00:00",
        "exercises": [
            {"exercise_name": f"Squat {new_user_id()}"},
            {"exercise_id": 987654321},
        ],
    })
    assert r.success is False
    assert r.code == "validation_error"
    assert r.field_errors[0].field == "exercises.1.exercise_id"
    count = db.execute(select(func.count()).select_from(Workout).where(Workout.user_id == ctx.user_id)).scalar_one()
    assert count == 0


def test_storage_failure_is_reported_generically(ctx, monkeypatch):
    def boom(self, *a, **kw):
        raise OperationalError("INSERT INTO workouts", {}, Exception("disk I/O error"))
    monkeypatch.setattr(WorkoutRepository, "create", boom)

    r = actions.create_workout(ctx, {"started_at": "2025-01-10T08:00:00"})
    assert r.success is False
    assert r.code == "storage_failure"
    assert r.error == "Failed to create workout"
    assert "disk" not in r.error
