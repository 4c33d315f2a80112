from abc import ABC
from typing import TypeVar, Generic, List, Optional, Any
from sqlalchemy.orm import Session
from sqlalchemy import select

ModelType = TypeVar("ModelType")


class BaseRepository(ABC, Generic[ModelType]):
    """Base repository with user-scoped CRUD operations.

    Every table is partitioned by ``user_id``; lookups never cross users.
    """

    def __init__(self, db: Session, model: type[ModelType]):
        self.db = db
        self.model = model

    def get_by_user(self, id: Any, user_id: str) -> Optional[ModelType]:
        """Get a single record by ID within a user's partition."""
        return self.db.execute(
            select(self.model).where(self.model.id == id, self.model.user_id == user_id)
        ).scalar_one_or_none()

    def list_by_user(self, user_id: str, *order_by) -> List[ModelType]:
        """Get all records owned by a user."""
        query = select(self.model).where(self.model.user_id == user_id)
        if order_by:
            query = query.order_by(*order_by)
        return self.db.execute(query).scalars().all()

    def add(self, db_obj: ModelType) -> ModelType:
        """Stage a new record and load store-assigned columns."""
        self.db.add(db_obj)
        self.db.flush()
        self.db.refresh(db_obj)
        return db_obj

    def update(self, db_obj: ModelType, **fields) -> ModelType:
        """Update an existing record in place."""
        for field, value in fields.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        self.db.flush()
        self.db.refresh(db_obj)
        return db_obj

    def delete_by_user(self, id: Any, user_id: str) -> bool:
        """Delete a record by ID within a user's partition."""
        db_obj = self.get_by_user(id, user_id)
        if db_obj is None:
            return False
        self.db.delete(db_obj)
        self.db.flush()
        return True
