"""
Base repository with standardized CRUD operations, transaction management, and error handling.

Provides the foundation for all domain repositories.
"""

from contextlib import contextmanager
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import (
    BaseAppException,
    ResourceNotFoundError,
    handle_database_exception,
)
from app.core.logging import get_logger
from app.models.base import BaseModel

logger = get_logger(__name__)

# Type variable for model classes
ModelType = TypeVar("ModelType", bound=BaseModel)


class BaseRepository(Generic[ModelType]):
    """
    Base repository with standardized operations.

    Provides CRUD operations, transaction management, and error handling
    for all domain repositories. Database errors are translated into
    application exceptions after rolling the session back.
    """

    def __init__(self, model: Type[ModelType], db: Session):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            db: Database session
        """
        self.model = model
        self.db = db

    # ==================== Transaction Management ====================

    @contextmanager
    def transaction(self):
        """
        Transaction context manager with automatic rollback.

        Usage:
            with repository.transaction():
                repository.create(entity, commit=False)
                repository.update(id, data, commit=False)
        """
        try:
            yield self.db
            self.db.commit()
        except BaseAppException:
            self.db.rollback()
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Transaction rollback: {str(e)}", exc_info=True)
            raise handle_database_exception(e) from e

    def commit(self):
        """Commit current transaction."""
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise handle_database_exception(e) from e

    def rollback(self):
        """Rollback current transaction."""
        self.db.rollback()

    def not_found(self, id: Any) -> BaseAppException:
        """Exception raised by get_by_id; subclasses return a specific type."""
        return ResourceNotFoundError(self.model.__name__, id)

    # ==================== Create Operations ====================

    def create(self, entity: ModelType, commit: bool = True) -> ModelType:
        """
        Create new entity.

        Args:
            entity: Entity to create
            commit: Whether to commit immediately

        Returns:
            Created entity

        Raises:
            DuplicateEntryError: If a unique constraint is violated
        """
        try:
            self.db.add(entity)

            if commit:
                self.db.commit()
                self.db.refresh(entity)
            else:
                self.db.flush()

            logger.info(f"Created {self.model.__name__} with id: {entity.id}")
            return entity

        except SQLAlchemyError as e:
            self.db.rollback()
            raise handle_database_exception(e) from e

    # ==================== Read Operations ====================

    def find_by_id(self, id: int) -> Optional[ModelType]:
        """
        Find entity by ID.

        Returns:
            Entity or None
        """
        return self.db.get(self.model, id)

    def get_by_id(self, id: int) -> ModelType:
        """
        Get entity by ID or raise exception.

        Raises:
            ResourceNotFoundError: If entity not found
        """
        entity = self.find_by_id(id)
        if entity is None:
            raise self.not_found(id)
        return entity

    def find_all(self, skip: int = 0, limit: Optional[int] = None) -> List[ModelType]:
        """
        Find all entities ordered by id.

        Args:
            skip: Number of records to skip
            limit: Maximum number of records, None for all
        """
        query = self.db.query(self.model).order_by(self.model.id)
        if skip:
            query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def find_by_criteria(
        self,
        criteria: Dict[str, Any],
        order_by: Optional[List[str]] = None,
    ) -> List[ModelType]:
        """
        Find entities matching criteria.

        Args:
            criteria: Filter criteria as key-value pairs; list values match any
            order_by: List of fields to order by (prefix with - for desc)

        Returns:
            List of matching entities
        """
        query = self.db.query(self.model)

        for key, value in criteria.items():
            if hasattr(self.model, key):
                column = getattr(self.model, key)
                if isinstance(value, (list, tuple, set, frozenset)):
                    query = query.filter(column.in_(list(value)))
                else:
                    query = query.filter(column == value)

        for field in order_by or []:
            if field.startswith('-'):
                query = query.order_by(getattr(self.model, field[1:]).desc())
            else:
                query = query.order_by(getattr(self.model, field))

        return query.all()

    def count(self) -> int:
        return self.db.query(func.count(self.model.id)).scalar() or 0

    # ==================== Update Operations ====================

    def update(self, id: int, data: Dict[str, Any], commit: bool = True) -> ModelType:
        """
        Update entity fields.

        Args:
            id: Entity ID
            data: Update data; unknown keys are ignored
            commit: Whether to commit immediately

        Returns:
            Updated entity
        """
        entity = self.get_by_id(id)
        try:
            for key, value in data.items():
                if hasattr(entity, key):
                    setattr(entity, key, value)

            if commit:
                self.db.commit()
                self.db.refresh(entity)
            else:
                self.db.flush()

            logger.info(f"Updated {self.model.__name__} with id: {id}")
            return entity

        except SQLAlchemyError as e:
            self.db.rollback()
            raise handle_database_exception(e) from e

    # ==================== Delete Operations ====================

    def delete(self, id: int, commit: bool = True) -> None:
        """Delete entity by ID."""
        entity = self.get_by_id(id)
        try:
            self.db.delete(entity)
            if commit:
                self.db.commit()
            else:
                self.db.flush()
            logger.info(f"Deleted {self.model.__name__} with id: {id}")
        except SQLAlchemyError as e:
            self.db.rollback()
            raise handle_database_exception(e) from e
