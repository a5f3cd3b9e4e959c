from __future__ import annotations

from datetime import date, datetime
from typing import Any, Mapping

from liftlog.actions.base import DASHBOARD_PATH, EXERCISES_PATH, RequestContext, action, parse, workout_path
from liftlog.clock import utcnow
from liftlog.db import transaction
from liftlog.errors import NotFoundOrUnauthorized, ValidationFailed
from liftlog.repositories.exercise_repo import ExerciseRepository
from liftlog.repositories.workout_exercise_repo import WorkoutExerciseRepository
from liftlog.repositories.workout_repo import WorkoutRepository
from liftlog.repositories.workout_set_repo import SetRepository
from liftlog.schemas.workout import (
    WorkoutCreate,
    WorkoutDetail,
    WorkoutQuery,
    WorkoutRead,
    WorkoutUpdate,
    WorkoutWithExercisesCreate,
)

Raw = Mapping[str, Any]


def default_workout_name(started_at: datetime) -> str:
    return f"Workout on {started_at:%d %b %Y}"


@action("Failed to create workout")
def create_workout(ctx: RequestContext, raw: Raw) -> WorkoutRead:
    user_id = ctx.require_user()
    payload = parse(WorkoutCreate, raw)
    with transaction(ctx.db):
        workout = WorkoutRepository(ctx.db).create(
            user_id,
            name=payload.name or default_workout_name(payload.started_at),
            started_at=payload.started_at,
        )
        data = WorkoutRead.model_validate(workout)
    ctx.revalidate(DASHBOARD_PATH)
    return data


@action("Failed to create workout")
def create_workout_with_exercises(ctx: RequestContext, raw: Raw) -> WorkoutDetail:
    """Workout, its exercises and their sets in one transaction; any failure writes nothing."""
    user_id = ctx.require_user()
    payload = parse(WorkoutWithExercisesCreate, raw)
    library_changed = False
    with transaction(ctx.db):
        workouts = WorkoutRepository(ctx.db)
        exercises = ExerciseRepository(ctx.db)
        links = WorkoutExerciseRepository(ctx.db)
        sets = SetRepository(ctx.db)

        workout = workouts.create(
            user_id,
            name=payload.name or default_workout_name(payload.started_at),
            started_at=payload.started_at,
            completed_at=payload.completed_at,
        )
        for idx, item in enumerate(payload.exercises):
            if item.exercise_id is not None:
                exercise = exercises.get(item.exercise_id)
                if exercise is None:
                    raise ValidationFailed.single(f"exercises.{idx}.exercise_id", "unknown exercise")
            else:
                exercise, created = exercises.get_or_create(item.exercise_name)
                library_changed = library_changed or created
            link = links.create(
                workout.id,
                user_id,
                exercise_id=exercise.id,
                order=item.order if item.order is not None else idx + 1,
            )
            for set_no, s in enumerate(item.sets, start=1):
                sets.create(
                    link.id,
                    user_id,
                    weight=s.weight,
                    reps=s.reps,
                    set_number=s.set_number if s.set_number is not None else set_no,
                )
        data = WorkoutDetail.model_validate(workouts.get_detail(workout.id, user_id))
    ctx.revalidate(DASHBOARD_PATH)
    if library_changed:
        ctx.revalidate(EXERCISES_PATH)
    return data


@action("Failed to update workout")
def update_workout(ctx: RequestContext, workout_id: int, raw: Raw) -> WorkoutRead:
    user_id = ctx.require_user()
    payload = parse(WorkoutUpdate, raw)
    changes = payload.changes()
    with transaction(ctx.db):
        repo = WorkoutRepository(ctx.db)
        current = repo.get(workout_id, user_id)
        if current is None:
            raise NotFoundOrUnauthorized("Workout")
        # checked against stored values for whichever side the payload leaves out
        started = changes.get("started_at", current.started_at)
        completed = changes["completed_at"] if "completed_at" in changes else current.completed_at
        if completed is not None and completed < started:
            raise ValidationFailed.single("completed_at", "completed_at must not be before started_at")
        workout = repo.update(workout_id, user_id, **changes)
        data = WorkoutRead.model_validate(workout)
    ctx.revalidate(DASHBOARD_PATH, workout_path(workout_id))
    return data


def complete_workout(ctx: RequestContext, workout_id: int, completed_at: datetime | str | None = None):
    """in_progress -> completed; defaults to now."""
    return update_workout(ctx, workout_id, {"completed_at": completed_at or utcnow()})


def reopen_workout(ctx: RequestContext, workout_id: int):
    """completed -> in_progress."""
    return update_workout(ctx, workout_id, {"completed_at": None})


@action("Failed to delete workout")
def delete_workout(ctx: RequestContext, workout_id: int) -> WorkoutRead:
    user_id = ctx.require_user()
    with transaction(ctx.db):
        workout = WorkoutRepository(ctx.db).delete(workout_id, user_id)
        if workout is None:
            raise NotFoundOrUnauthorized("Workout")
        data = WorkoutRead.model_validate(workout)
    ctx.revalidate(DASHBOARD_PATH, workout_path(workout_id))
    return data


@action("Failed to load workout")
def get_workout(ctx: RequestContext, workout_id: int) -> WorkoutDetail:
    user_id = ctx.require_user()
    workout = WorkoutRepository(ctx.db).get_detail(workout_id, user_id)
    if workout is None:
        raise NotFoundOrUnauthorized("Workout")
    return WorkoutDetail.model_validate(workout)


@action("Failed to load workouts")
def list_workouts(ctx: RequestContext, raw: Raw | None = None) -> list[WorkoutDetail]:
    user_id = ctx.require_user()
    query = parse(WorkoutQuery, raw)
    repo = WorkoutRepository(ctx.db)
    if query.day is not None:
        rows = repo.list_by_date(user_id, query.day)
    else:
        rows = repo.list_for_user(user_id)
    return [WorkoutDetail.model_validate(w) for w in rows]


def list_workouts_for_day(ctx: RequestContext, day: date):
    return list_workouts(ctx, {"day": day})
