from __future__ import annotations

from typing import Any, Mapping

from liftlog.actions.base import DASHBOARD_PATH, EXERCISES_PATH, RequestContext, action, parse, workout_path
from liftlog.db import transaction
from liftlog.errors import NotFoundOrUnauthorized, ValidationFailed
from liftlog.repositories.exercise_repo import ExerciseRepository
from liftlog.repositories.workout_exercise_repo import WorkoutExerciseRepository
from liftlog.repositories.workout_set_repo import SetRepository
from liftlog.schemas.workout_exercise import WorkoutExerciseCreate, WorkoutExerciseRead, WorkoutExerciseUpdate


@action("Failed to add exercise")
def add_exercise_to_workout(ctx: RequestContext, workout_id: int, raw: Mapping[str, Any]) -> WorkoutExerciseRead:
    user_id = ctx.require_user()
    payload = parse(WorkoutExerciseCreate, raw)
    created = False
    with transaction(ctx.db):
        exercises = ExerciseRepository(ctx.db)
        if payload.exercise_id is not None:
            exercise = exercises.get(payload.exercise_id)
            if exercise is None:
                raise ValidationFailed.single("exercise_id", "unknown exercise")
        else:
            exercise, created = exercises.get_or_create(payload.exercise_name)

        links = WorkoutExerciseRepository(ctx.db)
        link = links.create(workout_id, user_id, exercise_id=exercise.id, order=payload.order)
        if link is None:
            raise NotFoundOrUnauthorized("Workout")
        sets = SetRepository(ctx.db)
        for s in payload.sets:
            sets.create(link.id, user_id, weight=s.weight, reps=s.reps, set_number=s.set_number)
        data = WorkoutExerciseRead.model_validate(link)
    ctx.revalidate(DASHBOARD_PATH, workout_path(workout_id))
    if created:
        ctx.revalidate(EXERCISES_PATH)
    return data


@action("Failed to reorder exercise")
def reorder_workout_exercise(
    ctx: RequestContext, workout_exercise_id: int, raw: Mapping[str, Any]
) -> WorkoutExerciseRead:
    user_id = ctx.require_user()
    payload = parse(WorkoutExerciseUpdate, raw)
    with transaction(ctx.db):
        link = WorkoutExerciseRepository(ctx.db).update_order(workout_exercise_id, user_id, order=payload.order)
        if link is None:
            raise NotFoundOrUnauthorized("Workout exercise")
        data = WorkoutExerciseRead.model_validate(link)
    ctx.revalidate(DASHBOARD_PATH, workout_path(data.workout_id))
    return data


@action("Failed to remove exercise")
def remove_workout_exercise(ctx: RequestContext, workout_exercise_id: int) -> WorkoutExerciseRead:
    user_id = ctx.require_user()
    with transaction(ctx.db):
        links = WorkoutExerciseRepository(ctx.db)
        link = links.get(workout_exercise_id, user_id)
        if link is None:
            raise NotFoundOrUnauthorized("Workout exercise")
        data = WorkoutExerciseRead.model_validate(link)
        links.delete(workout_exercise_id, user_id)
    ctx.revalidate(DASHBOARD_PATH, workout_path(data.workout_id))
    return data
