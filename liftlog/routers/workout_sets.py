from typing import Any
from fastapi import APIRouter, Body, Depends

from liftlog import actions
from liftlog.actions import RequestContext
from liftlog.deps.auth import get_context
from liftlog.routers.common import RowIdPath, respond

router = APIRouter(prefix="/sets", tags=["sets"])

@router.patch("/{set_id}")
def update_set(set_id: RowIdPath, payload: dict[str, Any] = Body(...), ctx: RequestContext = Depends(get_context)):
    return respond(actions.update_set(ctx, set_id, payload))

@router.delete("/{set_id}")
def delete_set(set_id: RowIdPath, ctx: RequestContext = Depends(get_context)):
    return respond(actions.delete_set(ctx, set_id))
