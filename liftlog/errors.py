"""Failure taxonomy for actions.

Repositories never raise these: they return ``None`` for rows that are missing or owned
by someone else and let SQLAlchemy errors propagate. Actions raise them, and
``liftlog.actions.base.action`` turns them into an ``ActionResult``.
"""
from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError

from liftlog.schemas.result import FieldError


class ActionError(Exception):
    code = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailed(ActionError):
    code = "validation_error"

    def __init__(self, field_errors: list[FieldError], message: str = "Invalid input"):
        super().__init__(message)
        self.field_errors = field_errors

    @classmethod
    def from_pydantic(cls, exc: PydanticValidationError) -> "ValidationFailed":
        return cls.from_error_list(exc.errors())

    @classmethod
    def from_error_list(cls, raw_errors, *, drop_source: bool = False) -> "ValidationFailed":
        """``drop_source`` strips FastAPI's leading "path"/"body"/"query" location."""
        errors = []
        for err in raw_errors:
            loc = err["loc"]
            if drop_source and len(loc) > 1:
                loc = loc[1:]
            # model-level validators report an empty location
            field = ".".join(str(p) for p in loc) or "__root__"
            msg = err["msg"]
            if msg.startswith("Value error, "):
                msg = msg[len("Value error, "):]
            errors.append(FieldError(field=field, message=msg))
        return cls(errors)

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationFailed":
        return cls([FieldError(field=field, message=message)])


class Unauthorized(ActionError):
    code = "unauthorized"

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class NotFoundOrUnauthorized(ActionError):
    """Row is missing or belongs to another user; callers cannot tell which."""
    code = "not_found"

    def __init__(self, what: str = "Workout"):
        super().__init__(f"{what} not found or unauthorized")


class StorageFailure(ActionError):
    code = "storage_failure"
