from typing import Annotated
from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, Field, field_validator

# int4 columns
INT4_MAX = 2_147_483_647
RowId = Annotated[int, Field(ge=1, le=INT4_MAX)]

SetNumber = Annotated[int, Field(ge=1, le=INT4_MAX)]
# numeric(10, 2) column
Weight = Annotated[Decimal, Field(ge=0, max_digits=10, decimal_places=2)]
Reps = Annotated[int, Field(ge=1, le=1000)]

class SetCreate(BaseModel):
    # Optional: if omitted, the next number after the last set is used
    set_number: SetNumber | None = None
    weight: Weight
    reps: Reps

class SetUpdate(BaseModel):
    set_number: SetNumber | None = None
    weight: Weight | None = None
    reps: Reps | None = None

    @field_validator("set_number", "weight", "reps")
    @classmethod
    def not_null(cls, v):
        # Only runs for supplied values; omitted fields keep their default
        if v is None:
            raise ValueError("value cannot be null")
        return v

class SetRead(BaseModel):
    id: int
    workout_exercise_id: int
    set_number: int
    weight: Decimal
    reps: int
    created_at: datetime

    model_config = {"from_attributes": True}
