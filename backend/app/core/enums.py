# backend/app/core/enums.py
"""
Core enums for the TuitionHub platform.

Statuses are stored as plain strings so the wire format stays identical
to what the frontend already sends ("Pending", "Approved", ...).
"""

from enum import Enum


class RoleName(str, Enum):
    """Roles a user account can hold."""

    ADMIN = "admin"
    TUTOR = "tutor"
    STUDENT = "student"


class TuitionStatus(str, Enum):
    """Moderation status of a tuition posting."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class ApplicationStatus(str, Enum):
    """
    Lifecycle of a tutor application.

    Pending -> Approved (payment confirmed or manual approval)
    Pending -> Rejected
    """

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class TuitionSortMode(str, Enum):
    """Sort options accepted by the tuition search endpoint."""

    BUDGET_LOW = "budgetLow"
    BUDGET_HIGH = "budgetHigh"
    NEWEST = "newest"
    NONE = "none"

    @classmethod
    def parse(cls, raw: str | None) -> "TuitionSortMode":
        """Map a query-string value to a sort mode, unknown values sort nothing."""
        if not raw:
            return cls.NONE
        try:
            return cls(raw)
        except ValueError:
            return cls.NONE
