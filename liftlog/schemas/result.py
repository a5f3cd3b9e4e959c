from typing import Any
from pydantic import BaseModel

class FieldError(BaseModel):
    field: str
    message: str

class ActionResult(BaseModel):
    """Uniform outcome of every action: data on success, error text otherwise."""
    success: bool
    data: Any = None
    error: str | None = None
    code: str | None = None
    field_errors: list[FieldError] = []

    @classmethod
    def ok(cls, data: Any = None) -> "ActionResult":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str, *, code: str, field_errors: list[FieldError] | None = None) -> "ActionResult":
        return cls(success=False, error=error, code=code, field_errors=field_errors or [])
