"""
Base repository with standardized CRUD operations and error handling.

Repositories only flush; committing belongs to the service that owns the
unit of work.
"""

from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from hostelhub.core.exceptions import ConflictError, RepositoryError, ResourceNotFoundError
from hostelhub.core.logging import get_logger
from hostelhub.models.base import BaseModel

logger = get_logger(__name__)

# Type variable for model classes
ModelType = TypeVar("ModelType", bound=BaseModel)


class BaseRepository(Generic[ModelType]):
    """
    Generic repository over one SQLAlchemy model.
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

    # ==================== Create Operations ====================

    def create(self, entity: ModelType) -> ModelType:
        """
        Add a new entity and flush it so its id and defaults are populated.

        Raises:
            ConflictError: If a unique constraint is violated
            RepositoryError: On any other database failure
        """
        try:
            self.db.add(entity)
            self.db.flush()
        except IntegrityError as e:
            raise ConflictError(f"{self.model.__name__} already exists") from e
        except SQLAlchemyError as e:
            raise RepositoryError(f"Create failed: {e}") from e

        logger.info(f"Created {self.model.__name__} with id: {entity.id}")
        return entity

    # ==================== Read Operations ====================

    def find_by_id(self, id: str) -> Optional[ModelType]:
        """Find entity by ID."""
        if not id:
            return None
        return self.db.get(self.model, id)

    def get_by_id(self, id: str) -> ModelType:
        """
        Get entity by ID or raise exception.

        Raises:
            ResourceNotFoundError: If entity not found
        """
        entity = self.find_by_id(id)
        if not entity:
            raise ResourceNotFoundError(self.model.__name__, id)
        return entity

    def find_all(self, order_by: Optional[List[str]] = None) -> List[ModelType]:
        return self.find_by_criteria({}, order_by=order_by or ["-created_at"])

    def find_by_criteria(
        self,
        criteria: Dict[str, Any],
        order_by: Optional[List[str]] = None,
        limit: Optional[int] = None,
    ) -> List[ModelType]:
        """
        Find entities matching criteria.

        Args:
            criteria: Filter criteria as key-value pairs; list values mean IN
            order_by: List of fields to order by (prefix with - for desc)
            limit: Maximum number of records

        Returns:
            List of matching entities
        """
        query = self.db.query(self.model)

        for key, value in criteria.items():
            column = getattr(self.model, key)
            if isinstance(value, (list, tuple, set)):
                query = query.filter(column.in_(list(value)))
            else:
                query = query.filter(column == value)

        for field in order_by or []:
            if field.startswith("-"):
                query = query.order_by(getattr(self.model, field[1:]).desc())
            else:
                query = query.order_by(getattr(self.model, field))

        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def find_one_by_criteria(
        self,
        criteria: Dict[str, Any],
        order_by: Optional[List[str]] = None,
    ) -> Optional[ModelType]:
        results = self.find_by_criteria(criteria, order_by=order_by, limit=1)
        return results[0] if results else None

    def count(self, criteria: Optional[Dict[str, Any]] = None) -> int:
        query = self.db.query(self.model)
        for key, value in (criteria or {}).items():
            column = getattr(self.model, key)
            if isinstance(value, (list, tuple, set)):
                query = query.filter(column.in_(list(value)))
            else:
                query = query.filter(column == value)
        return query.count()

    def exists(self, criteria: Dict[str, Any]) -> bool:
        return self.find_one_by_criteria(criteria) is not None

    # ==================== Update Operations ====================

    def update(self, entity: ModelType, data: Dict[str, Any]) -> ModelType:
        """
        Apply ``data`` to ``entity`` and flush.

        Unknown keys raise AttributeError so typos surface immediately.
        """
        for key, value in data.items():
            if not hasattr(self.model, key):
                raise AttributeError(f"{self.model.__name__} has no attribute '{key}'")
            setattr(entity, key, value)

        try:
            self.db.flush()
        except IntegrityError as e:
            raise ConflictError(f"{self.model.__name__} update conflicts with existing data") from e
        return entity

    # ==================== Delete Operations ====================

    def delete(self, entity: ModelType) -> None:
        self.db.delete(entity)
        self.db.flush()
        logger.info(f"Deleted {self.model.__name__} with id: {entity.id}")

    def delete_where(self, *conditions) -> int:
        """
        Bulk delete rows matching ``conditions``.

        Returns:
            Number of deleted rows
        """
        if not conditions:
            raise ValueError("delete_where requires at least one condition")
        result = self.db.execute(
            delete(self.model)
            .where(*conditions)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount:
            logger.info(f"Deleted {result.rowcount} {self.model.__name__} rows")
        return result.rowcount
