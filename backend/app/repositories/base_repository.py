# backend/app/repositories/base_repository.py
"""
Base Repository Pattern for the TuitionHub Platform

Provides the foundation for all repository classes with:
- Common CRUD operations
- Type safety with generics
- Transaction support (managed by services)
- Query execution helpers with uniform error handling

Repositories never commit; the service layer owns transaction boundaries.
"""

from abc import ABC, abstractmethod
import logging
from typing import Any, Generic, List, Optional, Type, TypeVar

from sqlalchemy import Delete, Update, delete as sa_delete, update as sa_update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Query, Session

from ..core.exceptions import RepositoryException

# Type variable for generic model support
T = TypeVar("T")

logger = logging.getLogger(__name__)


class IRepository(ABC, Generic[T]):
    """
    Abstract repository interface defining core data access methods.

    All repositories must implement these methods to ensure consistency
    across the application.
    """

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[T]:
        """
        Retrieve an entity by its primary key.

        Returns:
            The entity if found, None otherwise
        """

    @abstractmethod
    def create(self, **kwargs: Any) -> T:
        """
        Create a new entity.

        Raises:
            RepositoryException: If creation fails
        """

    @abstractmethod
    def update_fields(self, id: str, **values: Any) -> int:
        """
        Overwrite columns on one row.

        Returns:
            Number of matched rows (0 when the id does not exist)
        """

    @abstractmethod
    def delete_by_id(self, id: str) -> int:
        """
        Delete an entity by its primary key.

        Returns:
            Number of deleted rows
        """


class BaseRepository(IRepository[T]):
    """
    Concrete base repository implementation with common data access patterns.

    Attributes:
        db: SQLAlchemy session
        model: SQLAlchemy model class
    """

    def __init__(self, db: Session, model: Type[T]):
        """
        Initialize repository with database session and model.

        Args:
            db: SQLAlchemy session (managed by service layer)
            model: SQLAlchemy model class
        """
        self.db = db
        self.model = model
        self.logger = logging.getLogger(f"{__name__}.{model.__name__}")

    def get_by_id(self, id: str) -> Optional[T]:
        """Retrieve an entity by its primary key."""
        try:
            return self.db.get(self.model, id)
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting {self.model.__name__} by id {id}: {str(e)}")
            raise RepositoryException(f"Failed to retrieve {self.model.__name__}: {str(e)}")

    def get_all(self) -> List[T]:
        """Retrieve all entities in creation order."""
        return self._execute_query(self._build_query().order_by(self.model.id))

    def create(self, **kwargs: Any) -> T:
        """
        Create a new entity.

        Note: Does NOT commit - transaction management is handled by service layer.
        """
        try:
            entity = self.model(**kwargs)
            self.db.add(entity)
            self.db.flush()  # Get ID without committing
            return entity
        except IntegrityError as exc:
            self.logger.error(
                "Integrity error creating %s: %s", self.model.__name__, exc, exc_info=True
            )
            self.db.rollback()
            raise RepositoryException(f"Integrity constraint violated: {exc}") from exc
        except SQLAlchemyError as e:
            self.logger.error(f"Error creating {self.model.__name__}: {str(e)}")
            self.db.rollback()
            raise RepositoryException(f"Failed to create {self.model.__name__}: {str(e)}")

    def update_fields(self, id: str, **values: Any) -> int:
        """
        Overwrite the given columns with a single UPDATE statement.

        Returns the matched row count so callers can tell "absent" from "applied".
        """
        stmt = sa_update(self.model).where(self.model.id == id).values(**values)
        return self._execute_write(stmt)

    def delete_by_id(self, id: str) -> int:
        """Delete a row by primary key and return the deleted row count."""
        stmt = sa_delete(self.model).where(self.model.id == id)
        return self._execute_write(stmt)

    def find_by(self, **kwargs: Any) -> List[T]:
        """
        Find entities by given criteria.

        Args:
            **kwargs: Filter criteria (exact match)

        Returns:
            List of matching entities in creation order
        """
        return self._execute_query(self._build_query().filter_by(**kwargs).order_by(self.model.id))

    def find_one_by(self, **kwargs: Any) -> Optional[T]:
        """
        Find a single entity by given criteria.

        Returns:
            First matching entity or None
        """
        try:
            return self.db.query(self.model).filter_by(**kwargs).first()
        except SQLAlchemyError as e:
            self.logger.error(f"Error finding one by criteria: {str(e)}")
            raise RepositoryException(f"Failed to find record: {str(e)}")

    # Protected helper methods for use by subclasses

    def _build_query(self) -> Query:
        """Get base query for the model."""
        return self.db.query(self.model)

    def _execute_query(self, query: Query) -> List[T]:
        """Execute query with error handling."""
        try:
            return query.all()
        except SQLAlchemyError as e:
            self.logger.error(f"Query execution error: {str(e)}")
            raise RepositoryException(f"Query failed: {str(e)}")

    def _execute_write(self, stmt: Update | Delete) -> int:
        """Execute an UPDATE/DELETE statement and return its row count."""
        try:
            result = self.db.execute(stmt.execution_options(synchronize_session="fetch"))
            self.db.flush()
            return int(result.rowcount or 0)
        except SQLAlchemyError as e:
            self.logger.error(f"Write statement failed on {self.model.__name__}: {str(e)}")
            self.db.rollback()
            raise RepositoryException(f"Failed to write {self.model.__name__}: {str(e)}")
