# backend/app/api/dependencies/services.py
"""
Service layer dependencies for dependency injection.

This module provides factory functions that create service instances
with their required dependencies properly injected.
"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from ...services.application_service import ApplicationService
from ...services.order_service import OrderService
from ...services.stripe_service import StripeCheckoutGateway
from ...services.tuition_service import TuitionService
from ...services.user_service import UserService
from .database import get_db


@lru_cache(maxsize=1)
def get_checkout_gateway() -> StripeCheckoutGateway:
    """Process-wide Stripe gateway; the SDK configuration is global anyway."""
    return StripeCheckoutGateway()


def get_tuition_service(db: Session = Depends(get_db)) -> TuitionService:
    return TuitionService(db)


def get_application_service(db: Session = Depends(get_db)) -> ApplicationService:
    return ApplicationService(db)


def get_order_service(
    db: Session = Depends(get_db),
    gateway: StripeCheckoutGateway = Depends(get_checkout_gateway),
) -> OrderService:
    """
    Get order service instance.

    Args:
        db: Database session
        gateway: Stripe checkout gateway

    Returns:
        OrderService instance
    """
    return OrderService(db, gateway=gateway)


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db)
