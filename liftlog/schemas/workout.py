from typing import Annotated
from datetime import date, datetime
from pydantic import BaseModel, BeforeValidator, Field, ValidationInfo, computed_field, field_validator

from liftlog.clock import to_naive_utc
from liftlog.schemas.workout_exercise import WorkoutExerciseCreate, WorkoutExerciseRead


def _blank_to_none(v):
    if isinstance(v, str):
        v = v.strip()
        return v or None
    return v


# Trimmed, up to 255 chars; blank counts as "no name"
NameStr = Annotated[Annotated[str, Field(max_length=255)] | None, BeforeValidator(_blank_to_none)]


def _completed_after_started(v: datetime | None, info: ValidationInfo) -> datetime | None:
    if v is None:
        return v
    v = to_naive_utc(v)
    started = info.data.get("started_at")
    if started is not None and v < started:
        raise ValueError("completed_at must not be before started_at")
    return v


class WorkoutCreate(BaseModel):
    # Blank names are replaced with a generated label
    name: NameStr = None
    started_at: datetime

    @field_validator("started_at")
    @classmethod
    def as_utc(cls, v: datetime) -> datetime:
        return to_naive_utc(v)


class WorkoutWithExercisesCreate(WorkoutCreate):
    completed_at: datetime | None = None
    exercises: Annotated[list[WorkoutExerciseCreate], Field(max_length=50)] = []

    @field_validator("completed_at")
    @classmethod
    def completed_after_started(cls, v: datetime | None, info: ValidationInfo) -> datetime | None:
        return _completed_after_started(v, info)


class WorkoutUpdate(BaseModel):
    """Partial update; only fields present in the payload are written."""
    name: NameStr = None
    started_at: datetime | None = None
    completed_at: datetime | None = None

    @field_validator("started_at")
    @classmethod
    def started_required(cls, v: datetime | None) -> datetime:
        if v is None:
            raise ValueError("started_at cannot be cleared")
        return to_naive_utc(v)

    @field_validator("completed_at")
    @classmethod
    def completed_after_started(cls, v: datetime | None, info: ValidationInfo) -> datetime | None:
        return _completed_after_started(v, info)

    def changes(self) -> dict:
        return self.model_dump(include=self.model_fields_set)


class WorkoutQuery(BaseModel):
    day: date | None = None


class WorkoutRead(BaseModel):
    id: int
    user_id: str
    name: str | None = None
    display_name: str
    started_at: datetime
    completed_at: datetime | None = None
    is_completed: bool
    duration_minutes: int | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class WorkoutDetail(WorkoutRead):
    workout_exercises: list[WorkoutExerciseRead] = []

    @computed_field
    @property
    def exercise_count(self) -> int:
        return len(self.workout_exercises)
