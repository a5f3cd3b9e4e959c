# liftlog/repositories/workout_repo.py
from __future__ import annotations
from datetime import date, datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from liftlog.clock import day_bounds, utcnow
from liftlog.models import Workout, WorkoutExercise
from liftlog.repositories.base import BaseRepository

# Fields a partial update may touch
UPDATABLE = frozenset({"name", "started_at", "completed_at"})

def _with_children():
    # nested ordering comes from the relationship order_by
    return selectinload(Workout.workout_exercises).options(
        selectinload(WorkoutExercise.exercise),
        selectinload(WorkoutExercise.sets),
    )

class WorkoutRepository(BaseRepository[Workout]):
    # READS
    def get(self, workout_id: int, user_id: str) -> Optional[Workout]:
        stmt = select(Workout).where(Workout.id == workout_id, Workout.user_id == user_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_detail(self, workout_id: int, user_id: str) -> Optional[Workout]:
        stmt = (
            select(Workout)
            .where(Workout.id == workout_id, Workout.user_id == user_id)
            .options(_with_children())
            .execution_options(populate_existing=True)
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def list_for_user(
        self,
        user_id: str,
        *,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[Workout]:
        """Owner's workouts, newest first, optionally within ``[start, end)``."""
        stmt = select(Workout).where(Workout.user_id == user_id)
        if start is not None:
            stmt = stmt.where(Workout.started_at >= start)
        if end is not None:
            stmt = stmt.where(Workout.started_at < end)
        stmt = (
            stmt.order_by(Workout.started_at.desc(), Workout.id.desc())
            .options(_with_children())
            .execution_options(populate_existing=True)
        )
        return list(self.db.execute(stmt).scalars().all())

    def list_by_date(self, user_id: str, day: date) -> list[Workout]:
        start, end = day_bounds(day)
        return self.list_for_user(user_id, start=start, end=end)

    # WRITES
    def create(
        self,
        user_id: str,
        *,
        name: str | None,
        started_at: datetime,
        completed_at: datetime | None = None,
    ) -> Workout:
        now = utcnow()
        workout = Workout(
            user_id=user_id,
            name=name,
            started_at=started_at,
            completed_at=completed_at,
            created_at=now,
            updated_at=now,
        )
        return self.add_and_refresh(workout)

    def update(self, workout_id: int, user_id: str, **fields) -> Optional[Workout]:
        unknown = set(fields) - UPDATABLE
        if unknown:
            raise TypeError(f"cannot update workout fields: {sorted(unknown)}")
        workout = self.get(workout_id, user_id)
        if not workout:
            return None
        for key, value in fields.items():
            setattr(workout, key, value)
        workout.updated_at = utcnow()
        self.db.flush()
        self.db.refresh(workout)
        return workout

    def delete(self, workout_id: int, user_id: str) -> Optional[Workout]:
        workout = self.get(workout_id, user_id)
        if not workout:
            return None
        return self.delete_and_flush(workout)
