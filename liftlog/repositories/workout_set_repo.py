# liftlog/repositories/workout_set_repo.py
from __future__ import annotations
from decimal import Decimal
from typing import Optional

from sqlalchemy import select, func

from liftlog.clock import utcnow
from liftlog.models import Workout, WorkoutExercise, WorkoutSet
from liftlog.repositories.base import BaseRepository

UPDATABLE = frozenset({"set_number", "weight", "reps"})

class SetRepository(BaseRepository[WorkoutSet]):
    """Sets resolve ownership through WorkoutExercise -> Workout."""

    def _owned(self, user_id: str):
        return (
            select(WorkoutSet)
            .join(WorkoutExercise, WorkoutSet.workout_exercise_id == WorkoutExercise.id)
            .join(Workout, WorkoutExercise.workout_id == Workout.id)
            .where(Workout.user_id == user_id)
        )

    def _owns_workout_exercise(self, workout_exercise_id: int, user_id: str) -> bool:
        stmt = (
            select(WorkoutExercise.id)
            .join(Workout, WorkoutExercise.workout_id == Workout.id)
            .where(WorkoutExercise.id == workout_exercise_id, Workout.user_id == user_id)
        )
        return self.db.execute(stmt).first() is not None

    # READS
    def get(self, set_id: int, user_id: str) -> Optional[WorkoutSet]:
        stmt = self._owned(user_id).where(WorkoutSet.id == set_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def list_for_workout_exercise(self, workout_exercise_id: int, user_id: str) -> list[WorkoutSet]:
        stmt = (
            self._owned(user_id)
            .where(WorkoutSet.workout_exercise_id == workout_exercise_id)
            .order_by(WorkoutSet.set_number.asc(), WorkoutSet.id.asc())
        )
        return list(self.db.execute(stmt).scalars().all())

    # WRITES
    def create(
        self,
        workout_exercise_id: int,
        user_id: str,
        *,
        weight: Decimal,
        reps: int,
        set_number: int | None = None,
    ) -> Optional[WorkoutSet]:
        if not self._owns_workout_exercise(workout_exercise_id, user_id):
            return None
        if set_number is None:
            max_no = self.db.execute(
                select(func.max(WorkoutSet.set_number)).where(WorkoutSet.workout_exercise_id == workout_exercise_id)
            ).scalar_one()
            set_number = (max_no or 0) + 1
        s = WorkoutSet(
            workout_exercise_id=workout_exercise_id,
            set_number=set_number,
            weight=weight,
            reps=reps,
            created_at=utcnow(),
        )
        return self.add_and_refresh(s)

    def update(self, set_id: int, user_id: str, **fields) -> Optional[WorkoutSet]:
        unknown = set(fields) - UPDATABLE
        if unknown:
            raise TypeError(f"cannot update set fields: {sorted(unknown)}")
        s = self.get(set_id, user_id)
        if not s:
            return None
        for key, value in fields.items():
            setattr(s, key, value)
        self.db.flush()
        self.db.refresh(s)
        return s

    def delete(self, set_id: int, user_id: str) -> Optional[WorkoutSet]:
        s = self.get(set_id, user_id)
        if not s:
            return None
        return self.delete_and_flush(s)
