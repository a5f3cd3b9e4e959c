from typing import Any, Optional
from fastapi import APIRouter, Body, Depends, Query, status

from liftlog import actions
from liftlog.actions import RequestContext
from liftlog.deps.auth import get_context
from liftlog.routers.common import present, respond

router = APIRouter(prefix="/exercises", tags=["exercises"])

@router.get("")
def list_exercises(
    ctx: RequestContext = Depends(get_context),
    search: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    offset: Optional[str] = Query(None),
):
    return respond(actions.list_exercises(ctx, present(search=search, limit=limit, offset=offset)))

@router.post("")
def create_exercise(payload: dict[str, Any] = Body(...), ctx: RequestContext = Depends(get_context)):
    return respond(actions.create_exercise(ctx, payload), status.HTTP_201_CREATED)
