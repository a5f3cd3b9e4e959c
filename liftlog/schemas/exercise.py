from typing import Annotated
from datetime import datetime
from pydantic import BaseModel, Field, StringConstraints, field_validator

ExerciseName = Annotated[str, Field(max_length=255)]

class ExerciseCreate(BaseModel):
    name: ExerciseName

    @field_validator("name")
    @classmethod
    def name_non_blank(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("exercise name cannot be blank")
        return v2

class ExerciseQuery(BaseModel):
    search: Annotated[str, StringConstraints(strip_whitespace=True, max_length=255)] | None = None
    limit: Annotated[int, Field(ge=1, le=200)] = 50
    offset: Annotated[int, Field(ge=0)] = 0

class ExerciseRead(BaseModel):
    id: int
    name: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
