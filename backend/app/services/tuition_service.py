# backend/app/services/tuition_service.py
"""
Tuition Service for the TuitionHub Platform

Business rules around tuition postings: new postings start Pending, only
the poster or an administrator may edit or delete one, and listings go
through the repository's filter/search/pagination helpers.
"""

from decimal import Decimal
import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.enums import TuitionSortMode, TuitionStatus
from ..core.exceptions import ForbiddenException, NotFoundException, ValidationException
from ..models.tuition import TuitionPosting
from ..repositories.factory import RepositoryFactory
from ..repositories.tuition_repository import TuitionRepository
from .base import BaseService

logger = logging.getLogger(__name__)


class TuitionService(BaseService):
    """Service for creating, listing and moderating tuition postings."""

    def __init__(self, db: Session, tuition_repository: Optional[TuitionRepository] = None):
        super().__init__(db)
        self.tuition_repository = tuition_repository or RepositoryFactory.create_tuition_repository(db)

    @BaseService.measure_operation("create_tuition")
    def create_posting(
        self,
        *,
        subject: str,
        class_level: str,
        location: str,
        budget: Decimal,
        description: Optional[str],
        posted_by_email: str,
    ) -> str:
        """Create a Pending posting owned by ``posted_by_email`` and return its id."""
        with self.transaction():
            posting = self.tuition_repository.create(
                subject=subject,
                class_level=class_level,
                location=location,
                budget=budget,
                description=description,
                posted_by_email=posted_by_email,
                status=TuitionStatus.PENDING.value,
            )
        self.log_operation("create_tuition", tuition_id=posting.id, poster=posted_by_email)
        return posting.id

    @BaseService.measure_operation("list_tuitions")
    def list_postings(
        self, *, status: Optional[str] = None, posted_by_email: Optional[str] = None
    ) -> List[TuitionPosting]:
        return self.tuition_repository.list_postings(status=status, posted_by_email=posted_by_email)

    @BaseService.measure_operation("list_approved_tuitions")
    def list_approved(self) -> List[TuitionPosting]:
        return self.tuition_repository.list_approved()

    @BaseService.measure_operation("list_tuitions_paginated")
    def list_paginated(self, page: int, page_size: int) -> Tuple[List[TuitionPosting], int]:
        return self.tuition_repository.list_paginated(page, page_size)

    @BaseService.measure_operation("search_tuitions")
    def search(
        self,
        *,
        subject: Optional[str] = None,
        class_level: Optional[str] = None,
        location: Optional[str] = None,
        sort: Optional[str] = None,
    ) -> List[TuitionPosting]:
        return self.tuition_repository.search(
            subject=subject,
            class_level=class_level,
            location=location,
            sort_mode=TuitionSortMode.parse(sort),
        )

    @BaseService.measure_operation("list_latest_tuitions")
    def list_latest(self, limit: Optional[int] = None) -> List[TuitionPosting]:
        return self.tuition_repository.list_latest(limit or settings.latest_tuitions_limit)

    @BaseService.measure_operation("update_tuition")
    def update_posting(
        self,
        tuition_id: str,
        *,
        subject: str,
        class_level: str,
        location: str,
        budget: Decimal,
        caller_email: str,
        caller_is_admin: bool,
    ) -> int:
        """
        Overwrite subject, class level, location and budget.

        Raises:
            NotFoundException: If the posting does not exist
            ForbiddenException: If the caller neither owns it nor is an admin
        """
        self._require_owner_or_admin(tuition_id, caller_email, caller_is_admin)
        with self.transaction():
            matched = self.tuition_repository.update_details(
                tuition_id,
                subject=subject,
                class_level=class_level,
                location=location,
                budget=budget,
            )
        if matched == 0:
            raise NotFoundException(f"Tuition {tuition_id} not found", code="TUITION_NOT_FOUND")
        return matched

    @BaseService.measure_operation("update_tuition_status")
    def update_status(self, tuition_id: str, status: str) -> int:
        if status not in {s.value for s in TuitionStatus}:
            raise ValidationException(f"Unknown tuition status: {status}", code="INVALID_STATUS")
        with self.transaction():
            matched = self.tuition_repository.update_status(tuition_id, status)
        if matched == 0:
            raise NotFoundException(f"Tuition {tuition_id} not found", code="TUITION_NOT_FOUND")
        self.log_operation("update_tuition_status", tuition_id=tuition_id, status=status)
        return matched

    @BaseService.measure_operation("delete_tuition")
    def delete_posting(self, tuition_id: str, *, caller_email: str, caller_is_admin: bool) -> int:
        self._require_owner_or_admin(tuition_id, caller_email, caller_is_admin)
        with self.transaction():
            deleted = self.tuition_repository.delete_by_id(tuition_id)
        # Deleted concurrently after the ownership check.
        if deleted == 0:
            raise NotFoundException(f"Tuition {tuition_id} not found", code="TUITION_NOT_FOUND")
        return deleted

    def _require_owner_or_admin(
        self, tuition_id: str, caller_email: str, caller_is_admin: bool
    ) -> TuitionPosting:
        posting = self.tuition_repository.get_by_id(tuition_id)
        if posting is None:
            raise NotFoundException(f"Tuition {tuition_id} not found", code="TUITION_NOT_FOUND")
        if not caller_is_admin and posting.posted_by_email != caller_email:
            raise ForbiddenException("Only the poster or an admin may change this tuition")
        return posting
