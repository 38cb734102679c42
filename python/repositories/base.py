"""
Base repository with common functionality.
"""

from typing import Optional, List, Dict, Any, TypeVar, Generic, NoReturn
from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import ConflictError, DatabaseError, NotFoundError
from core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar('T', bound=BaseModel)


class BaseRepository(Generic[T]):
    """
    Base repository providing common database operations.

    Subclasses should:
    - Set `row_class` class attribute (SQLAlchemy table model)
    - Set `model_class` class attribute (pydantic domain model)
    - Set `entity_name` for error messages
    - Implement domain-specific methods
    """

    row_class: type = None
    model_class: type = None
    entity_name: str = "Record"

    def __init__(self, db: Session):
        """
        Initialize repository.

        Args:
            db: SQLAlchemy session (from infrastructure.database.get_db)
        """
        self.db = db
        self.logger = get_logger(f"repo.{self.__class__.__name__}")

    # ============================================================
    # Generic CRUD Operations
    # ============================================================

    def get_by_id(self, id: int) -> Optional[T]:
        """
        Get single record by ID.

        Returns:
            Model instance or None
        """
        try:
            row = self.db.get(self.row_class, id)
        except SQLAlchemyError as e:
            self._handle_error("get_by_id", e)
        return self._to_model(row) if row is not None else None

    def get_by_id_or_raise(self, id: int) -> T:
        """
        Get single record by ID or raise NotFoundError.
        """
        result = self.get_by_id(id)
        if result is None:
            raise NotFoundError(self.entity_name, id)
        return result

    def get_all(
        self,
        limit: Optional[int] = None,
        offset: int = 0,
        order_by: str = "created_at",
        order_desc: bool = True
    ) -> List[T]:
        """
        Get all records, optionally windowed.
        """
        column = getattr(self.row_class, order_by)
        query = select(self.row_class).order_by(
            column.desc() if order_desc else column.asc(),
            self.row_class.id.desc() if order_desc else self.row_class.id.asc(),
        )
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)

        try:
            rows = self.db.scalars(query).all()
        except SQLAlchemyError as e:
            self._handle_error("get_all", e)
        return [self._to_model(row) for row in rows]

    def count(self, filters: Dict[str, Any] = None) -> int:
        """
        Count records matching equality filters.
        """
        query = select(func.count()).select_from(self.row_class)
        for key, value in (filters or {}).items():
            query = query.where(getattr(self.row_class, key) == value)

        try:
            return self.db.scalar(query) or 0
        except SQLAlchemyError as e:
            self._handle_error("count", e)

    def create(self, data: Dict[str, Any]) -> T:
        """
        Create new record.
        """
        row = self.row_class(**data)
        self.db.add(row)
        self._commit("create")
        self.db.refresh(row)
        self.logger.info(f"Created {self.entity_name.lower()} {row.id}")
        return self._to_model(row)

    def update(self, id: int, data: Dict[str, Any]) -> T:
        """
        Update existing record with the given fields.
        """
        row = self._get_row_or_raise(id)
        for key, value in data.items():
            setattr(row, key, value)
        self._commit("update")
        self.db.refresh(row)
        self.logger.info(f"Updated {self.entity_name.lower()} {id}: {sorted(data)}")
        return self._to_model(row)

    def delete(self, id: int) -> bool:
        """
        Delete record by ID.

        Returns:
            False when nothing was deleted
        """
        row = self.db.get(self.row_class, id)
        if row is None:
            return False
        self.db.delete(row)
        self._commit("delete")
        self.logger.info(f"Deleted {self.entity_name.lower()} {id}")
        return True

    # ============================================================
    # Helper Methods
    # ============================================================

    def _get_row_or_raise(self, id: int):
        row = self.db.get(self.row_class, id)
        if row is None:
            raise NotFoundError(self.entity_name, id)
        return row

    def _commit(self, operation: str) -> None:
        """
        Commit the session, translating database errors.
        """
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            self.logger.warning(f"{operation} violated a constraint: {e.orig}")
            raise ConflictError(
                f"{self.entity_name} conflicts with existing data or is still in use"
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            self._handle_error(operation, e)

    def _to_model(self, row) -> T:
        """
        Convert database row to model instance.
        Override in subclasses for custom transformation.
        """
        if self.model_class is None:
            return row
        return self.model_class.model_validate(row)

    def _handle_error(self, operation: str, error: Exception) -> NoReturn:
        """
        Handle database error with logging.
        """
        self.logger.error(f"{operation} failed: {error}")
        raise DatabaseError(str(error), operation=f"{self.row_class.__tablename__}.{operation}")
