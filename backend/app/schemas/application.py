"""
Pydantic schemas for tutor applications.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from ..core.enums import ApplicationStatus
from .base import Money, StandardizedModel, wire_field


class ApplicationCreate(StandardizedModel):
    """Body of POST /applications. The tutor email comes from the token."""

    tuition_id: Optional[str] = None
    tutor_name: Optional[str] = Field(None, max_length=200)
    qualifications: Optional[str] = None
    experience: Optional[str] = None
    expected_salary: Money


class ApplicationUpdate(StandardizedModel):
    """Body of PUT /applications/{id}; applied only while the application is Pending."""

    qualifications: Optional[str] = None
    experience: Optional[str] = None
    expected_salary: Optional[Money] = None


class ApplicationStatusUpdate(StandardizedModel):
    status: ApplicationStatus


class ApplicationResponse(StandardizedModel):
    id: str = wire_field("id", "_id")
    tuition_id: Optional[str] = None
    tutor_email: str
    tutor_name: Optional[str] = None
    qualifications: Optional[str] = None
    experience: Optional[str] = None
    expected_salary: Money
    status: str
    applied_at: datetime
