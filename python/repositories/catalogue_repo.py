"""
Exercises and methods repositories - handle the catalogue tables.
"""

from typing import List, Optional

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError

from repositories.base import BaseRepository
from models.domain.exercise import Exercise, Method
from models.tables import ExerciseRow, MethodRow
from core.exceptions import ExerciseNotFoundError, MethodNotFoundError


class CatalogueRepository(BaseRepository):
    """
    Shared queries for name/description catalogues.
    """

    def list_by_name(self, search: Optional[str] = None) -> List:
        """
        List records ordered by name, optionally filtered by a
        case-insensitive substring over name and description.
        """
        query = select(self.row_class)
        if search:
            query = query.where(
                or_(
                    self.row_class.name.icontains(search, autoescape=True),
                    self.row_class.description.icontains(search, autoescape=True),
                )
            )
        query = query.order_by(self.row_class.name.asc(), self.row_class.id.asc())

        try:
            rows = self.db.scalars(query).all()
        except SQLAlchemyError as e:
            self._handle_error("list_by_name", e)
        return [self._to_model(row) for row in rows]


class ExercisesRepository(CatalogueRepository):
    """
    Repository for exercises table.
    """

    row_class = ExerciseRow
    model_class = Exercise
    entity_name = "Exercise"

    def get_by_id_or_raise(self, id: int) -> Exercise:
        exercise = self.get_by_id(id)
        if exercise is None:
            raise ExerciseNotFoundError(id)
        return exercise

    def existing_ids(self, ids: List[int]) -> set:
        """Subset of ids that exist."""
        if not ids:
            return set()
        return set(self.db.scalars(select(ExerciseRow.id).where(ExerciseRow.id.in_(ids))).all())


class MethodsRepository(CatalogueRepository):
    """
    Repository for methods table.
    """

    row_class = MethodRow
    model_class = Method
    entity_name = "Method"

    def get_by_id_or_raise(self, id: int) -> Method:
        method = self.get_by_id(id)
        if method is None:
            raise MethodNotFoundError(id)
        return method

    def existing_ids(self, ids: List[int]) -> set:
        """Subset of ids that exist."""
        if not ids:
            return set()
        return set(self.db.scalars(select(MethodRow.id).where(MethodRow.id.in_(ids))).all())
