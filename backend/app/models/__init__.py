"""
Database models for the TuitionHub platform.

- TuitionPosting: listings seeking a tutor
- TutorApplication: tutor submissions with a Pending/Approved/Rejected lifecycle
- Order: confirmed payments, unique per processor transaction id
- User: marketplace accounts keyed by email
"""

from .application import TutorApplication
from .order import Order
from .tuition import TuitionPosting
from .user import User

__all__ = [
    "Order",
    "TuitionPosting",
    "TutorApplication",
    "User",
]
