from __future__ import annotations

from typing import Any, Generic, Optional, TypeVar

from sqlalchemy.orm import Query, Session

from catalog.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """CRUD helpers shared by the module repositories."""

    model: type[ModelT]

    def __init__(self, db: Session):
        self.db = db

    def query(self) -> Query:
        return self.db.query(self.model)

    def get_by_id(self, obj_id: Any) -> Optional[ModelT]:
        return self.db.get(self.model, obj_id)

    def find_by(self, **criteria) -> Optional[ModelT]:
        return self.query().filter_by(**criteria).order_by(self.model.id).first()

    def create(self, **kwargs) -> ModelT:
        obj = self.model(**kwargs)
        self.db.add(obj)
        self.db.flush()
        return obj

    def update(self, obj: ModelT, **kwargs) -> ModelT:
        """Update fields; an explicit ``None`` never overwrites a NOT NULL column."""
        columns = self.model.__table__.columns
        for key, value in kwargs.items():
            if not hasattr(obj, key):
                continue
            column = columns.get(key)
            if value is None and column is not None and not column.nullable:
                continue
            setattr(obj, key, value)
        self.db.flush()
        return obj

    def delete(self, obj: ModelT) -> None:
        self.db.delete(obj)
        self.db.flush()
