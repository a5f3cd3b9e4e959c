from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Index, Integer, String, DateTime, func
from liftlog.db import Base
from liftlog.settings import get_settings

class Workout(Base):
    __tablename__ = "workouts"
    __table_args__ = (
        Index("workouts_user_id_idx", "user_id"),
        Index("workouts_started_at_idx", "started_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    # Identity-provider subject; the only ownership column in the schema
    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    started_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), nullable=False)

    # Unloaded children go away through ON DELETE CASCADE
    workout_exercises = relationship(
        "WorkoutExercise",
        back_populates="workout",
        order_by="[WorkoutExercise.order, WorkoutExercise.id]",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None

    @property
    def display_name(self) -> str:
        return self.name or get_settings().UNTITLED_WORKOUT_NAME

    @property
    def duration_minutes(self) -> int | None:
        if self.completed_at is None:
            return None
        return round((self.completed_at - self.started_at).total_seconds() / 60)
