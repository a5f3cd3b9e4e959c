# liftlog/repositories/workout_exercise_repo.py
from __future__ import annotations
from typing import Optional

from sqlalchemy import select, func

from liftlog.clock import utcnow
from liftlog.models import Workout, WorkoutExercise
from liftlog.repositories.base import BaseRepository

class WorkoutExerciseRepository(BaseRepository[WorkoutExercise]):
    """Workout exercises carry no owner column; every query joins back to Workout."""

    def _owned(self, user_id: str):
        return (
            select(WorkoutExercise)
            .join(Workout, WorkoutExercise.workout_id == Workout.id)
            .where(Workout.user_id == user_id)
        )

    def _owns_workout(self, workout_id: int, user_id: str) -> bool:
        stmt = select(Workout.id).where(Workout.id == workout_id, Workout.user_id == user_id)
        return self.db.execute(stmt).first() is not None

    # READS
    def get(self, workout_exercise_id: int, user_id: str) -> Optional[WorkoutExercise]:
        stmt = self._owned(user_id).where(WorkoutExercise.id == workout_exercise_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def list_for_workout(self, workout_id: int, user_id: str) -> list[WorkoutExercise]:
        stmt = (
            self._owned(user_id)
            .where(WorkoutExercise.workout_id == workout_id)
            .order_by(WorkoutExercise.order.asc(), WorkoutExercise.id.asc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def next_order(self, workout_id: int) -> int:
        max_order = self.db.execute(
            select(func.max(WorkoutExercise.order)).where(WorkoutExercise.workout_id == workout_id)
        ).scalar_one()
        return (max_order or 0) + 1

    # WRITES
    def create(
        self,
        workout_id: int,
        user_id: str,
        *,
        exercise_id: int,
        order: int | None = None,
    ) -> Optional[WorkoutExercise]:
        if not self._owns_workout(workout_id, user_id):
            return None
        if order is None:
            # Auto-increment based on current max for this workout
            order = self.next_order(workout_id)
        we = WorkoutExercise(workout_id=workout_id, exercise_id=exercise_id, order=order, created_at=utcnow())
        return self.add_and_refresh(we)

    def update_order(self, workout_exercise_id: int, user_id: str, *, order: int) -> Optional[WorkoutExercise]:
        we = self.get(workout_exercise_id, user_id)
        if not we:
            return None
        we.order = order
        self.db.flush()
        return we

    def delete(self, workout_exercise_id: int, user_id: str) -> Optional[WorkoutExercise]:
        we = self.get(workout_exercise_id, user_id)
        if not we:
            return None
        return self.delete_and_flush(we)
