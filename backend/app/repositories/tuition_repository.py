# backend/app/repositories/tuition_repository.py
"""
Tuition Repository for the TuitionHub Platform

Data access for tuition postings: filtered, searched, sorted and paginated
listings plus the field and status updates used by the posting workflow.
"""

from decimal import Decimal
import logging
from typing import List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from ..core.enums import TuitionSortMode, TuitionStatus
from ..core.exceptions import RepositoryException
from ..models.tuition import TuitionPosting
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class TuitionRepository(BaseRepository[TuitionPosting]):
    """Repository for tuition posting queries and writes."""

    def __init__(self, db: Session):
        super().__init__(db, TuitionPosting)

    def list_postings(
        self,
        *,
        status: Optional[str] = None,
        posted_by_email: Optional[str] = None,
    ) -> List[TuitionPosting]:
        """List postings matching the optional filter, in creation order."""
        query = self._filtered(status=status, posted_by_email=posted_by_email)
        return self._execute_query(query.order_by(TuitionPosting.id))

    def list_approved(self) -> List[TuitionPosting]:
        """Postings visible on the public board."""
        return self.list_postings(status=TuitionStatus.APPROVED.value)

    def list_paginated(
        self,
        page: int,
        page_size: int,
        *,
        status: Optional[str] = None,
    ) -> Tuple[List[TuitionPosting], int]:
        """
        Return one page of postings, newest first, with the unpaged total.

        Args:
            page: 1-based page number
            page_size: Items per page
            status: Optional status filter applied to both items and total

        Returns:
            (items, total_count)
        """
        query = self._filtered(status=status)
        try:
            total = query.count()
        except SQLAlchemyError as e:
            self.logger.error(f"Error counting tuitions: {str(e)}")
            raise RepositoryException(f"Failed to count tuitions: {str(e)}")

        items = self._execute_query(
            query.order_by(TuitionPosting.id.desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        return items, total

    def search(
        self,
        *,
        subject: Optional[str] = None,
        class_level: Optional[str] = None,
        location: Optional[str] = None,
        sort_mode: TuitionSortMode = TuitionSortMode.NONE,
    ) -> List[TuitionPosting]:
        """
        Search postings.

        Subject and location are case-insensitive substring matches with
        wildcard characters escaped; class level is an exact match.
        """
        query = self._build_query()
        if subject:
            query = query.filter(TuitionPosting.subject.icontains(subject, autoescape=True))
        if class_level:
            query = query.filter(TuitionPosting.class_level == class_level)
        if location:
            query = query.filter(TuitionPosting.location.icontains(location, autoescape=True))

        if sort_mode is TuitionSortMode.BUDGET_LOW:
            query = query.order_by(TuitionPosting.budget.asc(), TuitionPosting.id.asc())
        elif sort_mode is TuitionSortMode.BUDGET_HIGH:
            query = query.order_by(TuitionPosting.budget.desc(), TuitionPosting.id.asc())
        elif sort_mode is TuitionSortMode.NEWEST:
            query = query.order_by(TuitionPosting.id.desc())
        else:
            query = query.order_by(TuitionPosting.id.asc())

        return self._execute_query(query)

    def list_latest(self, limit: int) -> List[TuitionPosting]:
        """The ``limit`` most recently created postings, regardless of status."""
        return self._execute_query(
            self._build_query().order_by(TuitionPosting.id.desc()).limit(limit)
        )

    def update_details(
        self,
        tuition_id: str,
        *,
        subject: Optional[str],
        class_level: Optional[str],
        location: Optional[str],
        budget: Optional[Decimal],
    ) -> int:
        """Overwrite the editable posting fields; returns matched row count."""
        return self.update_fields(
            tuition_id,
            subject=subject,
            class_level=class_level,
            location=location,
            budget=budget,
        )

    def update_status(self, tuition_id: str, status: str) -> int:
        return self.update_fields(tuition_id, status=status)

    def _filtered(
        self,
        *,
        status: Optional[str] = None,
        posted_by_email: Optional[str] = None,
    ) -> Query:
        query = self._build_query()
        if status:
            query = query.filter(TuitionPosting.status == status)
        if posted_by_email:
            query = query.filter(TuitionPosting.posted_by_email == posted_by_email)
        return query
