"""
Base repository with common CRUD operations.
"""

import logging
from typing import Generic, TypeVar, Type, Optional, List, Any, Dict, Iterable
from sqlalchemy.orm import Session
from sqlalchemy import select, delete, func
from sqlalchemy.exc import SQLAlchemyError
from pydantic import BaseModel

from core.database import Base, write_lock
from core.exceptions import PersistenceError

ModelType = TypeVar("ModelType", bound=Base)

logger = logging.getLogger(__name__)


class BaseRepository(Generic[ModelType]):
    """Base repository with common CRUD operations.

    Reads that fail are logged and reported as empty results. Writes that fail
    are rolled back and raised as :class:`PersistenceError`.
    """

    def __init__(self, model: Type[ModelType], db: Session):
        self.model = model
        self.db = db

    def get(self, id: Any) -> Optional[ModelType]:
        """Get a single record by ID."""
        try:
            return self.db.get(self.model, id)
        except SQLAlchemyError as e:
            logger.error(f"Error fetching {self.model.__name__} {id}: {e}")
            return None

    def get_many(self, ids: Iterable[Any]) -> List[ModelType]:
        ids = list(ids)
        if not ids:
            return []
        return self.fetch(select(self.model).where(self.model.id.in_(ids)))

    def fetch(self, query) -> List[ModelType]:
        """Run a select and return its rows, or an empty list on failure."""
        try:
            result = self.db.execute(query)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Error querying {self.model.__name__}: {e}")
            return []

    def count(self, filters: Optional[Dict[str, Any]] = None) -> int:
        """Count records with optional equality filters."""
        query = select(func.count()).select_from(self.model)
        if filters:
            for field, value in filters.items():
                if hasattr(self.model, field):
                    query = query.where(getattr(self.model, field) == value)
        try:
            return self.db.execute(query).scalar_one()
        except SQLAlchemyError as e:
            logger.error(f"Error counting {self.model.__name__}: {e}")
            return 0

    def create(self, obj_in: BaseModel | Dict[str, Any]) -> ModelType:
        """Create a new record."""
        data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump()
        db_obj = self.model(**data)
        with write_lock:
            self.db.add(db_obj)
            self.save()
        self.db.refresh(db_obj)
        return db_obj

    def create_bulk(self, rows: Iterable[Dict[str, Any]]) -> List[ModelType]:
        """Create several records in a single commit."""
        db_objs = [self.model(**row) for row in rows]
        with write_lock:
            self.db.add_all(db_objs)
            self.save()
        return db_objs

    def update(self, db_obj: ModelType, obj_in: BaseModel | Dict[str, Any]) -> ModelType:
        """Update an existing record."""
        if isinstance(obj_in, dict):
            update_data = obj_in
        else:
            update_data = obj_in.model_dump(exclude_unset=True)

        with write_lock:
            for field, value in update_data.items():
                setattr(db_obj, field, value)
            self.db.add(db_obj)
            self.save()
        return db_obj

    def delete(self, db_obj: ModelType) -> None:
        """Delete one record."""
        with write_lock:
            self.db.delete(db_obj)
            self.save()

    def delete_many(self, ids: Iterable[Any]) -> int:
        """Delete records by ID, returning the number removed."""
        ids = list(ids)
        if not ids:
            return 0
        with write_lock:
            result = self.db.execute(delete(self.model).where(self.model.id.in_(ids)))
            self.save()
        return result.rowcount

    def save(self) -> None:
        """Commit pending changes or roll back and raise."""
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error saving {self.model.__name__}: {e}")
            raise PersistenceError(f"Failed to save {self.model.__name__}") from e
