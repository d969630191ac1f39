# backend/app/services/user_service.py
"""
User Service for the TuitionHub Platform

Keeps the users table in step with the identity provider: the first login
for an email inserts a record, later logins only bump ``last_logged_in``.
Also backs the administrator user-management screens.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.enums import RoleName
from ..core.exceptions import NotFoundException, ServiceException, ValidationException
from ..models.user import User
from ..repositories.factory import RepositoryFactory
from ..repositories.user_repository import UserRepository
from .base import BaseService

logger = logging.getLogger(__name__)

# Roles a caller may claim for themselves on first login.
SELF_ASSIGNABLE_ROLES = frozenset({RoleName.STUDENT.value, RoleName.TUTOR.value})


@dataclass
class UpsertResult:
    user: User
    created: bool


class UserService(BaseService):
    """Service for account upsert, lookup and administration."""

    def __init__(self, db: Session, user_repository: Optional[UserRepository] = None):
        super().__init__(db)
        self.user_repository = user_repository or RepositoryFactory.create_user_repository(db)

    @BaseService.measure_operation("upsert_user")
    def upsert(
        self,
        email: str,
        *,
        name: Optional[str] = None,
        photo_url: Optional[str] = None,
        role: Optional[str] = None,
    ) -> UpsertResult:
        """
        Insert a first-seen user or touch a returning one.

        A new user gets created_at, last_logged_in and timestamp from a single
        clock reading. A returning user only has last_logged_in updated. Two
        concurrent first logins resolve to one insert and one touch.
        """
        now = datetime.now(timezone.utc)

        with self.transaction():
            user: Optional[User] = None
            if self.user_repository.get_by_email(email) is None:
                user = self.user_repository.insert_if_absent(
                    email=email,
                    name=name,
                    photo_url=photo_url,
                    role=role if role in SELF_ASSIGNABLE_ROLES else RoleName.STUDENT.value,
                    verified=False,
                    created_at=now,
                    last_logged_in=now,
                    timestamp=now,
                )
            created = user is not None

            if not created:
                self.user_repository.touch_last_login(email, now)
                user = self.user_repository.get_by_email(email)
                if user is None:
                    raise ServiceException(f"User {email} disappeared during login")

        self.log_operation("upsert_user", email=email, user_created=created)
        return UpsertResult(user=user, created=created)

    @BaseService.measure_operation("list_users_except")
    def list_all_except(self, caller_email: str) -> List[User]:
        return self.user_repository.list_all_except(caller_email)

    @BaseService.measure_operation("patch_user_profile")
    def patch_profile(
        self,
        user_id: str,
        *,
        name: Optional[str],
        email: Optional[str],
        role: Optional[str],
        status: Optional[str],
        verified: Optional[bool],
    ) -> int:
        """
        Overwrite name, email, role, status and verified on one user.

        Omitted name/status are written as null; omitted email, role and
        verified keep their stored values because the columns are required.

        Raises:
            NotFoundException: If no user has this id
            ValidationException: If the new email belongs to another user
        """
        values = {"name": name, "status": status}
        if email is not None:
            values["email"] = email
        if role is not None:
            values["role"] = role
        if verified is not None:
            values["verified"] = verified

        with self.transaction():
            matched = self.user_repository.update_profile(user_id, **values)
        if matched is None:
            raise ValidationException(f"Email {email} is already in use", code="EMAIL_TAKEN")
        if matched == 0:
            raise NotFoundException(f"User {user_id} not found", code="USER_NOT_FOUND")
        return matched

    @BaseService.measure_operation("get_user_role")
    def get_role(self, email: str) -> Optional[str]:
        user = self.user_repository.get_by_email(email)
        return user.role if user else None

    @BaseService.measure_operation("delete_user")
    def delete(self, user_id: str) -> int:
        with self.transaction():
            deleted = self.user_repository.delete_by_id(user_id)
        if deleted == 0:
            raise NotFoundException(f"User {user_id} not found", code="USER_NOT_FOUND")
        return deleted
