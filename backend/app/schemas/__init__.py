# backend/app/schemas/__init__.py
"""
Pydantic schemas for the TuitionHub platform.

Request and response models for every public endpoint. Wire names are
camelCase; see ``base.StandardizedModel``.
"""

from .application import (
    ApplicationCreate,
    ApplicationResponse,
    ApplicationStatusUpdate,
    ApplicationUpdate,
)
from .common import DeleteResult, InsertResult, UpdateResult, UpsertResult
from .payment import (
    CheckoutRequest,
    CheckoutResponse,
    OrderResponse,
    PaymentSuccessRequest,
    PaymentSuccessResponse,
    ReconcileResponse,
)
from .tuition import (
    TuitionCreate,
    TuitionListingResponse,
    TuitionResponse,
    TuitionStatusUpdate,
    TuitionUpdate,
)
from .user import RoleResponse, UserPatchRequest, UserResponse, UserUpsertRequest

__all__ = [
    "ApplicationCreate",
    "ApplicationResponse",
    "ApplicationStatusUpdate",
    "ApplicationUpdate",
    "CheckoutRequest",
    "CheckoutResponse",
    "DeleteResult",
    "InsertResult",
    "OrderResponse",
    "PaymentSuccessRequest",
    "PaymentSuccessResponse",
    "ReconcileResponse",
    "RoleResponse",
    "TuitionCreate",
    "TuitionListingResponse",
    "TuitionResponse",
    "TuitionStatusUpdate",
    "TuitionUpdate",
    "UpdateResult",
    "UpsertResult",
    "UserPatchRequest",
    "UserResponse",
    "UserUpsertRequest",
]
