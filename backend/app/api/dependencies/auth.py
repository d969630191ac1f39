# backend/app/api/dependencies/auth.py
"""
Authentication and role dependencies.

Roles are not carried in the token: they are read from the users table
row for the caller's verified email. A caller without a row has no role.
"""

import asyncio
from dataclasses import dataclass
import logging
from typing import Awaitable, Callable, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user_email
from ...core.enums import RoleName
from ...core.exceptions import ForbiddenException
from ...repositories.factory import RepositoryFactory
from .database import get_db

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CurrentCaller:
    """Verified email of the caller plus the role stored for it."""

    email: str
    role: Optional[str]

    @property
    def is_admin(self) -> bool:
        return self.role == RoleName.ADMIN.value


def _lookup_role(db: Session, email: str) -> Optional[str]:
    user = RepositoryFactory.create_user_repository(db).get_by_email(email)
    return user.role if user else None


async def get_current_caller(
    email: str = Depends(get_current_user_email),
    db: Session = Depends(get_db),
) -> CurrentCaller:
    role = await asyncio.to_thread(_lookup_role, db, email)
    return CurrentCaller(email=email, role=role)


def require_roles(*roles: RoleName) -> Callable[..., Awaitable[CurrentCaller]]:
    """Ensure the caller's stored role is one of ``roles``."""

    required = {role.value for role in roles}

    async def checker(caller: CurrentCaller = Depends(get_current_caller)) -> CurrentCaller:
        if caller.role not in required:
            logger.info(
                "Role check failed",
                extra={"email": caller.email, "role": caller.role, "required": sorted(required)},
            )
            raise ForbiddenException(
                f"User lacks required role(s): {', '.join(sorted(required))}",
                code="FORBIDDEN_ROLE",
            )
        return caller

    return checker


require_admin = require_roles(RoleName.ADMIN)
