# app/core/repository.py
from __future__ import annotations

from typing import Any, Generic, TypeVar

from sqlalchemy.orm import Session

ModelT = TypeVar("ModelT")


class SqlRepository(Generic[ModelT]):
    """Narrow persistence interface shared by every entity repository."""

    model: type[ModelT]

    def __init__(self, db: Session):
        self.db = db

    def create(self, obj: ModelT) -> ModelT:
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def find_by_id(self, obj_id: Any) -> ModelT | None:
        return self.db.query(self.model).filter(self.model.id == obj_id).first()

    def list(self) -> list[ModelT]:
        return self.db.query(self.model).order_by(self.model.id).all()

    def update(self, obj: ModelT, **fields: Any) -> ModelT:
        for field, value in fields.items():
            setattr(obj, field, value)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def delete(self, obj: ModelT) -> None:
        self.db.delete(obj)
        self.db.commit()
