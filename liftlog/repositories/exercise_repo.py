# liftlog/repositories/exercise_repo.py
from __future__ import annotations
from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError

from liftlog.clock import utcnow
from liftlog.models import Exercise
from liftlog.repositories.base import BaseRepository, Page

class ExerciseRepository(BaseRepository[Exercise]):
    # READS
    def get(self, exercise_id: int) -> Optional[Exercise]:
        return self.db.get(Exercise, exercise_id)

    def get_by_name(self, name: str) -> Optional[Exercise]:
        stmt = select(Exercise).where(func.lower(Exercise.name) == name.strip().lower())
        return self.db.execute(stmt).scalar_one_or_none()

    def list(self, *, search: str | None = None, limit: int = 50, offset: int = 0) -> Page[Exercise]:
        stmt = select(Exercise)
        count = select(func.count()).select_from(Exercise)
        if search:
            cond = func.lower(Exercise.name).contains(search.lower(), autoescape=True)
            stmt = stmt.where(cond)
            count = count.where(cond)
        items = self.db.execute(stmt.order_by(Exercise.name.asc()).limit(limit).offset(offset)).scalars().all()
        total = self.db.execute(count).scalar_one()
        return Page(items=list(items), total=total, limit=limit, offset=offset)

    # WRITES
    def get_or_create(self, name: str) -> tuple[Exercise, bool]:
        """Return ``(exercise, created)``; names match case-insensitively.

        The insert runs in a savepoint so losing a race to a concurrent insert of the
        same name only undoes this row; the winner is read back instead.
        """
        name = name.strip()
        existing = self.get_by_name(name)
        if existing:
            return existing, False
        now = utcnow()
        exercise = Exercise(name=name, created_at=now, updated_at=now)
        try:
            with self.db.begin_nested():
                self.db.add(exercise)
        except IntegrityError:
            existing = self.get_by_name(name)
            if existing is None:
                raise
            return existing, False
        self.db.refresh(exercise)
        return exercise, True
