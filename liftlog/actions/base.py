"""Plumbing shared by every action.

An action resolves the caller, validates raw input, runs repository calls inside one
transaction, signals stale paths, and reports back through ``ActionResult``. Nothing
raised below this layer reaches the caller.
"""
from __future__ import annotations

import functools
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Protocol, TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from liftlog.errors import ActionError, StorageFailure, Unauthorized, ValidationFailed
from liftlog.schemas.result import ActionResult

log = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

DASHBOARD_PATH = "/dashboard"
EXERCISES_PATH = "/exercises"


def workout_path(workout_id: int) -> str:
    return f"{DASHBOARD_PATH}/workout/{workout_id}"


class Revalidator(Protocol):
    def revalidate(self, path: str) -> None: ...


class LoggingRevalidator:
    """Default sink: records which cached views went stale."""

    def revalidate(self, path: str) -> None:
        log.info("revalidate path=%s", path)


@dataclass(slots=True)
class RequestContext:
    db: Session
    user_id: str | None
    revalidator: Revalidator = field(default_factory=LoggingRevalidator)

    def require_user(self) -> str:
        if not self.user_id:
            raise Unauthorized()
        return self.user_id

    def revalidate(self, *paths: str) -> None:
        for path in paths:
            self.revalidator.revalidate(path)


def parse(schema: type[M], raw: Mapping[str, Any] | BaseModel | None) -> M:
    try:
        return schema.model_validate({} if raw is None else raw)
    except PydanticValidationError as exc:
        raise ValidationFailed.from_pydantic(exc) from exc


def action(failure_message: str) -> Callable[[Callable[..., Any]], Callable[..., ActionResult]]:
    """Wrap an action body so every outcome becomes an ``ActionResult``.

    ``failure_message`` is what the caller sees when storage fails; the real
    error only goes to the log.
    """
    def decorate(fn: Callable[..., Any]) -> Callable[..., ActionResult]:
        @functools.wraps(fn)
        def wrapper(ctx: RequestContext, *args, **kwargs) -> ActionResult:
            try:
                data = fn(ctx, *args, **kwargs)
            except ValidationFailed as exc:
                ctx.db.rollback()
                return ActionResult.fail(exc.message, code=exc.code, field_errors=exc.field_errors)
            except ActionError as exc:
                ctx.db.rollback()
                return ActionResult.fail(exc.message, code=exc.code)
            except (SQLAlchemyError, OverflowError):
                # OverflowError: an integer the driver cannot bind
                ctx.db.rollback()
                log.exception("%s (user=%s)", failure_message, ctx.user_id)
                return ActionResult.fail(failure_message, code=StorageFailure.code)
            return ActionResult.ok(data)
        return wrapper
    return decorate
