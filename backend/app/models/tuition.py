"""Tuition posting model for the TuitionHub platform."""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from sqlalchemy import DateTime, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ..core.enums import TuitionStatus
from ..core.ulid_helper import generate_ulid
from ..database import Base


class TuitionPosting(Base):
    """
    A tuition listing seeking a tutor.

    The id is a monotonic ULID, so ordering by id is ordering by creation.
    Only postings with status Approved appear on the public board.
    """

    __tablename__ = "tuitions"

    id: Mapped[str] = mapped_column(String(26), primary_key=True, default=generate_ulid)
    subject: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    class_level: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    location: Mapped[str] = mapped_column(String(200), nullable=False)
    budget: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=TuitionStatus.PENDING.value, index=True
    )
    posted_by_email: Mapped[Optional[str]] = mapped_column(String(320), nullable=True, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )

    def __repr__(self) -> str:
        return f"<TuitionPosting(id={self.id}, subject={self.subject!r}, status={self.status})>"
