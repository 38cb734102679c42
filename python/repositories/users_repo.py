"""
Users repository - handles users table.
"""

from typing import Optional, Tuple

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from repositories.base import BaseRepository
from models.domain.user import User
from models.tables import UserRow
from core.exceptions import ConflictError


class UsersRepository(BaseRepository):
    """
    Repository for users table.
    """

    row_class = UserRow
    model_class = User
    entity_name = "User"

    def get_with_password_hash(self, email: str) -> Optional[Tuple[User, str]]:
        """
        Find user by email (case-insensitive).

        Returns:
            (user, password_hash) or None
        """
        query = select(UserRow).where(UserRow.email == email.strip().lower())
        try:
            row = self.db.scalars(query).first()
        except SQLAlchemyError as e:
            self._handle_error("get_with_password_hash", e)
        if row is None:
            return None
        return self._to_model(row), row.password_hash

    def create_user(self, email: str, name: str, password_hash: str) -> User:
        email = email.strip().lower()
        if self.get_with_password_hash(email) is not None:
            raise ConflictError("A user with this email already exists", field="email")
        return self.create({"email": email, "name": name.strip(), "password_hash": password_hash})
