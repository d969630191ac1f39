"""
Pydantic schemas for checkout and orders.
"""

from datetime import datetime
from typing import Optional

from pydantic import ConfigDict, Field

from .base import Money, StandardizedModel, wire_field


class CheckoutRequest(StandardizedModel):
    """
    Body of POST /create-checkout-session.

    tutorId and expectedSalary are optional here so that their absence is
    reported as a 400 by the order workflow rather than as a schema error.
    """

    tutor_id: Optional[str] = None
    tutor_email: Optional[str] = None
    expected_salary: Optional[Money] = None
    name: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "tutorId": "01K2K8CVN3A55280PFKJD9YHKV",
                "tutorEmail": "tutor@example.com",
                "expectedSalary": 49.99,
                "name": "Jane Tutor",
            }
        }
    )


class CheckoutResponse(StandardizedModel):
    url: str = Field(..., description="Hosted checkout page to redirect the payer to")


class PaymentSuccessRequest(StandardizedModel):
    session_id: Optional[str] = None


class OrderResponse(StandardizedModel):
    id: str = wire_field("id", "_id")
    tutor_id: str
    transaction_id: str
    user_email: str
    user_name: str
    amount: Money
    status: str
    paid_at: datetime


class PaymentSuccessResponse(OrderResponse):
    created: bool = Field(..., description="False when the order had already been recorded")
    message: str


class ReconcileResponse(StandardizedModel):
    repaired: int = Field(..., description="Applications moved to Approved")
