# backend/app/models/user.py
"""
User model for the TuitionHub platform.

Accounts are created by the identity provider; this table mirrors the
profile and role of each verified email. Records are upserted on login.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from ..core.enums import RoleName
from ..core.ulid_helper import generate_ulid
from ..database import Base


class User(Base):
    """
    Marketplace account.

    Attributes:
        email: Unique key used by the upsert workflow
        role: student, tutor or admin
        status: Free-form account status managed by administrators
        verified: Whether an administrator verified the account
        created_at: First login
        last_logged_in: Most recent login
        timestamp: Set once, alongside created_at
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(26), primary_key=True, default=generate_ulid)
    email: Mapped[str] = mapped_column(String(320), unique=True, index=True, nullable=False)
    name: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    photo_url: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default=RoleName.STUDENT.value)
    status: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    last_logged_in: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
