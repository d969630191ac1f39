"""Tutor application model for the TuitionHub platform."""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from sqlalchemy import DateTime, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ..core.enums import ApplicationStatus
from ..core.ulid_helper import generate_ulid
from ..database import Base


class TutorApplication(Base):
    """
    A tutor's submission against a tuition posting.

    Qualifications, experience and expected salary may only change while
    the application is Pending.
    """

    __tablename__ = "applications"

    id: Mapped[str] = mapped_column(String(26), primary_key=True, default=generate_ulid)
    tuition_id: Mapped[Optional[str]] = mapped_column(String(26), nullable=True, index=True)
    tutor_email: Mapped[str] = mapped_column(String(320), nullable=False, index=True)
    tutor_name: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    qualifications: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    experience: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    expected_salary: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=ApplicationStatus.PENDING.value, index=True
    )
    applied_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )

    def __repr__(self) -> str:
        return f"<TutorApplication(id={self.id}, tutor={self.tutor_email}, status={self.status})>"
