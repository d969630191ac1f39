# backend/app/repositories/user_repository.py
"""
User Repository for the TuitionHub Platform

Users are keyed by email. ``insert_if_absent`` and ``update_profile`` run in
a SAVEPOINT and report a uniqueness violation as ``None`` instead of raising.
"""

from datetime import datetime
import logging
from typing import Any, List, Optional

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException
from ..models.user import User
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """Repository for marketplace accounts."""

    def __init__(self, db: Session):
        super().__init__(db, User)

    def get_by_email(self, email: str) -> Optional[User]:
        return self.find_one_by(email=email)

    def list_all_except(self, email: str) -> List[User]:
        return self._execute_query(
            self._build_query().filter(User.email != email).order_by(User.id)
        )

    def insert_if_absent(self, **fields: Any) -> Optional[User]:
        """
        Insert a user.

        Returns:
            The new user, or None when the email is already taken.
        """
        try:
            with self.db.begin_nested():
                user = User(**fields)
                self.db.add(user)
                self.db.flush()
            return user
        except IntegrityError:
            self.logger.info("User %s already exists; treating insert as login", fields.get("email"))
            return None
        except SQLAlchemyError as e:
            self.logger.error(f"Error creating user: {str(e)}")
            raise RepositoryException(f"Failed to create user: {str(e)}")

    def touch_last_login(self, email: str, when: datetime) -> int:
        """Update only last_logged_in; returns matched row count."""
        stmt = update(User).where(User.email == email).values(last_logged_in=when)
        return self._execute_write(stmt)

    def update_profile(self, user_id: str, **values: Any) -> Optional[int]:
        """
        Overwrite profile columns on one user.

        Returns:
            Matched row count, or None when the new email belongs to
            another user.
        """
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(**values)
            .execution_options(synchronize_session="fetch")
        )
        try:
            with self.db.begin_nested():
                result = self.db.execute(stmt)
            return int(result.rowcount or 0)
        except IntegrityError:
            self.logger.info("Email %s already belongs to another user", values.get("email"))
            return None
        except SQLAlchemyError as e:
            self.logger.error(f"Error updating user {user_id}: {str(e)}")
            raise RepositoryException(f"Failed to update user: {str(e)}")
