from typing import Any, Optional
from fastapi import APIRouter, Body, Depends, Query, status

from liftlog import actions
from liftlog.actions import RequestContext
from liftlog.deps.auth import get_context
from liftlog.routers.common import RowIdPath, present, respond

router = APIRouter(prefix="/workouts", tags=["workouts"])

@router.get("")
def list_my_workouts(
    ctx: RequestContext = Depends(get_context),
    day: Optional[str] = Query(None, description="YYYY-MM-DD; omit for all workouts"),
):
    return respond(actions.list_workouts(ctx, present(day=day)))

@router.post("")
def create_workout(payload: dict[str, Any] = Body(...), ctx: RequestContext = Depends(get_context)):
    return respond(actions.create_workout(ctx, payload), status.HTTP_201_CREATED)

@router.post("/bulk")
def create_workout_with_exercises(payload: dict[str, Any] = Body(...), ctx: RequestContext = Depends(get_context)):
    return respond(actions.create_workout_with_exercises(ctx, payload), status.HTTP_201_CREATED)

@router.get("/{workout_id}")
def get_workout(workout_id: RowIdPath, ctx: RequestContext = Depends(get_context)):
    return respond(actions.get_workout(ctx, workout_id))

@router.patch("/{workout_id}")
def update_workout(workout_id: RowIdPath, payload: dict[str, Any] = Body(...), ctx: RequestContext = Depends(get_context)):
    return respond(actions.update_workout(ctx, workout_id, payload))

@router.post("/{workout_id}/complete")
def complete_workout(
    workout_id: RowIdPath,
    payload: Optional[dict[str, Any]] = Body(None),
    ctx: RequestContext = Depends(get_context),
):
    completed_at = (payload or {}).get("completed_at")
    return respond(actions.complete_workout(ctx, workout_id, completed_at))

@router.post("/{workout_id}/reopen")
def reopen_workout(workout_id: RowIdPath, ctx: RequestContext = Depends(get_context)):
    return respond(actions.reopen_workout(ctx, workout_id))

@router.delete("/{workout_id}")
def delete_workout(workout_id: RowIdPath, ctx: RequestContext = Depends(get_context)):
    return respond(actions.delete_workout(ctx, workout_id))

@router.post("/{workout_id}/exercises")
def add_exercise(workout_id: RowIdPath, payload: dict[str, Any] = Body(...), ctx: RequestContext = Depends(get_context)):
    return respond(actions.add_exercise_to_workout(ctx, workout_id, payload), status.HTTP_201_CREATED)
