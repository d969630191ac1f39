"""
Pydantic schemas for tuition postings.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from ..core.enums import TuitionStatus
from .base import Money, StandardizedModel, wire_field


class TuitionCreate(StandardizedModel):
    """Body of POST /tuitions. Poster and status are set by the server."""

    subject: str = Field(..., min_length=1, max_length=200)
    class_level: str = Field(..., min_length=1, max_length=100)
    location: str = Field(..., min_length=1, max_length=200)
    budget: Money
    description: Optional[str] = None


class TuitionUpdate(StandardizedModel):
    """Body of PUT /tuitions/{id}: overwrites the four editable fields."""

    subject: str = Field(..., min_length=1, max_length=200)
    class_level: str = Field(..., min_length=1, max_length=100)
    location: str = Field(..., min_length=1, max_length=200)
    budget: Money


class TuitionStatusUpdate(StandardizedModel):
    status: TuitionStatus


class TuitionResponse(StandardizedModel):
    id: str = wire_field("id", "_id")
    subject: str
    class_level: str
    location: str
    budget: Money
    description: Optional[str] = None
    status: str
    posted_by_email: Optional[str] = None
    created_at: datetime


class TuitionListingResponse(StandardizedModel):
    """One page of postings plus the unpaged total."""

    result: List[TuitionResponse]
    total_count: int
