from typing import Annotated
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from pydantic import BaseModel, Field, computed_field, model_validator

from liftlog.schemas.exercise import ExerciseName, ExerciseRead
from liftlog.schemas.workout_set import INT4_MAX, RowId, SetCreate, SetRead

Order = Annotated[int, Field(ge=0, le=INT4_MAX)]

class WorkoutExerciseCreate(BaseModel):
    """Reference an existing exercise by id, or by name (created if missing)."""
    exercise_id: RowId | None = None
    exercise_name: ExerciseName | None = None
    order: Order | None = None
    sets: list[SetCreate] = []

    @model_validator(mode="after")
    def exactly_one_exercise_ref(self):
        if self.exercise_name is not None:
            self.exercise_name = self.exercise_name.strip() or None
        if (self.exercise_id is None) == (self.exercise_name is None):
            raise ValueError("provide exactly one of exercise_id or exercise_name")
        return self

class WorkoutExerciseUpdate(BaseModel):
    order: Order

class WorkoutExerciseRead(BaseModel):
    id: int
    workout_id: int
    exercise_id: int
    order: int
    created_at: datetime
    exercise: ExerciseRead
    sets: list[SetRead] = []

    model_config = {"from_attributes": True}

    # Dashboard summary; averages are 0 for an exercise with no sets yet
    @computed_field
    @property
    def total_sets(self) -> int:
        return len(self.sets)

    @computed_field
    @property
    def avg_reps(self) -> int:
        if not self.sets:
            return 0
        mean = Decimal(sum(s.reps for s in self.sets)) / len(self.sets)
        return int(mean.quantize(Decimal(1), rounding=ROUND_HALF_UP))

    @computed_field
    @property
    def avg_weight(self) -> Decimal:
        if not self.sets:
            return Decimal("0.00")
        mean = sum(s.weight for s in self.sets) / len(self.sets)
        return mean.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
