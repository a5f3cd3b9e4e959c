# liftlog/repositories/base.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Generic, TypeVar

from sqlalchemy.orm import Session

T = TypeVar("T")  # SQLAlchemy model type

@dataclass(slots=True)
class Page(Generic[T]):
    items: list[T]
    total: int
    limit: int
    offset: int

class BaseRepository(Generic[T]):
    """Lightweight base for repositories using SQLAlchemy 2.0 style.

    Repositories flush but never commit; the caller owns the transaction
    (see ``liftlog.db.transaction``).
    """
    def __init__(self, db: Session):
        self.db = db

    def add_and_refresh(self, entity: T) -> T:
        self.db.add(entity)
        self.db.flush()
        self.db.refresh(entity)
        return entity

    def delete_and_flush(self, entity: T) -> T:
        self.db.delete(entity)
        self.db.flush()
        return entity
