from __future__ import annotations

from typing import Any, Mapping

from liftlog.actions.base import DASHBOARD_PATH, RequestContext, action, parse, workout_path
from liftlog.db import transaction
from liftlog.errors import NotFoundOrUnauthorized
from liftlog.repositories.workout_set_repo import SetRepository
from liftlog.schemas.workout_set import SetCreate, SetRead, SetUpdate


@action("Failed to add set")
def add_set(ctx: RequestContext, workout_exercise_id: int, raw: Mapping[str, Any]) -> SetRead:
    user_id = ctx.require_user()
    payload = parse(SetCreate, raw)
    with transaction(ctx.db):
        s = SetRepository(ctx.db).create(
            workout_exercise_id,
            user_id,
            weight=payload.weight,
            reps=payload.reps,
            set_number=payload.set_number,
        )
        if s is None:
            raise NotFoundOrUnauthorized("Workout exercise")
        workout_id = s.workout_exercise.workout_id
        data = SetRead.model_validate(s)
    ctx.revalidate(DASHBOARD_PATH, workout_path(workout_id))
    return data


@action("Failed to update set")
def update_set(ctx: RequestContext, set_id: int, raw: Mapping[str, Any]) -> SetRead:
    user_id = ctx.require_user()
    payload = parse(SetUpdate, raw)
    with transaction(ctx.db):
        s = SetRepository(ctx.db).update(set_id, user_id, **payload.model_dump(include=payload.model_fields_set))
        if s is None:
            raise NotFoundOrUnauthorized("Set")
        workout_id = s.workout_exercise.workout_id
        data = SetRead.model_validate(s)
    ctx.revalidate(DASHBOARD_PATH, workout_path(workout_id))
    return data


@action("Failed to delete set")
def delete_set(ctx: RequestContext, set_id: int) -> SetRead:
    user_id = ctx.require_user()
    with transaction(ctx.db):
        repo = SetRepository(ctx.db)
        s = repo.get(set_id, user_id)
        if s is None:
            raise NotFoundOrUnauthorized("Set")
        workout_id = s.workout_exercise.workout_id
        data = SetRead.model_validate(s)
        repo.delete(set_id, user_id)
    ctx.revalidate(DASHBOARD_PATH, workout_path(workout_id))
    return data
