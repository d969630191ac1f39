# backend/app/repositories/application_repository.py
"""
Application Repository for the TuitionHub Platform

Data access for tutor applications. The Pending-only edit is a single
conditional UPDATE so the status check and the write cannot interleave
with a concurrent approval.
"""

from decimal import Decimal
import logging
from typing import List, Optional

from sqlalchemy import update
from sqlalchemy.orm import Session

from ..core.enums import ApplicationStatus
from ..models.application import TutorApplication
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class ApplicationRepository(BaseRepository[TutorApplication]):
    """Repository for tutor application queries and writes."""

    def __init__(self, db: Session):
        super().__init__(db, TutorApplication)

    def list_all(self) -> List[TutorApplication]:
        return self.get_all()

    def list_by_tutor_email(self, tutor_email: str) -> List[TutorApplication]:
        return self.find_by(tutor_email=tutor_email)

    def update_if_pending(
        self,
        application_id: str,
        *,
        qualifications: Optional[str],
        experience: Optional[str],
        expected_salary: Optional[Decimal],
    ) -> int:
        """
        Edit an application only while it is Pending.

        Returns:
            Matched row count: 1 when applied, 0 when absent or no longer Pending
        """
        stmt = (
            update(TutorApplication)
            .where(
                TutorApplication.id == application_id,
                TutorApplication.status == ApplicationStatus.PENDING.value,
            )
            .values(
                qualifications=qualifications,
                experience=experience,
                expected_salary=expected_salary,
            )
        )
        return self._execute_write(stmt)

    def update_status(self, application_id: str, status: str) -> int:
        """Unconditional status transition; returns matched row count."""
        return self.update_fields(application_id, status=status)
