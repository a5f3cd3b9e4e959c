from typing import Any
from fastapi import APIRouter, Body, Depends, status

from liftlog import actions
from liftlog.actions import RequestContext
from liftlog.deps.auth import get_context
from liftlog.routers.common import RowIdPath, respond

router = APIRouter(prefix="/workout-exercises", tags=["workout exercises"])

@router.patch("/{workout_exercise_id}")
def reorder(workout_exercise_id: RowIdPath, payload: dict[str, Any] = Body(...), ctx: RequestContext = Depends(get_context)):
    return respond(actions.reorder_workout_exercise(ctx, workout_exercise_id, payload))

@router.delete("/{workout_exercise_id}")
def remove(workout_exercise_id: RowIdPath, ctx: RequestContext = Depends(get_context)):
    return respond(actions.remove_workout_exercise(ctx, workout_exercise_id))

@router.post("/{workout_exercise_id}/sets")
def add_set(workout_exercise_id: RowIdPath, payload: dict[str, Any] = Body(...), ctx: RequestContext = Depends(get_context)):
    return respond(actions.add_set(ctx, workout_exercise_id, payload), status.HTTP_201_CREATED)
