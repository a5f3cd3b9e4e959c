from __future__ import annotations

from typing import Any, Mapping

from liftlog.actions.base import EXERCISES_PATH, RequestContext, action, parse
from liftlog.db import transaction
from liftlog.repositories.exercise_repo import ExerciseRepository
from liftlog.schemas.exercise import ExerciseCreate, ExerciseQuery, ExerciseRead


@action("Failed to load exercises")
def list_exercises(ctx: RequestContext, raw: Mapping[str, Any] | None = None) -> dict:
    ctx.require_user()
    query = parse(ExerciseQuery, raw)
    page = ExerciseRepository(ctx.db).list(search=query.search, limit=query.limit, offset=query.offset)
    return {
        "items": [ExerciseRead.model_validate(e) for e in page.items],
        "total": page.total,
        "limit": page.limit,
        "offset": page.offset,
    }


@action("Failed to create exercise")
def create_exercise(ctx: RequestContext, raw: Mapping[str, Any]) -> ExerciseRead:
    """Idempotent by name: an existing exercise is returned as-is."""
    ctx.require_user()
    payload = parse(ExerciseCreate, raw)
    with transaction(ctx.db):
        exercise, created = ExerciseRepository(ctx.db).get_or_create(payload.name)
        data = ExerciseRead.model_validate(exercise)
    if created:
        ctx.revalidate(EXERCISES_PATH)
    return data
