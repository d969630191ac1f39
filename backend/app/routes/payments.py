# backend/app/routes/payments.py
"""
Checkout and order routes.

Endpoints:
    POST /create-checkout-session   → Stripe Checkout URL for an application (auth)
    POST /payment-success           → Record the order for a paid session (auth)
    GET  /my-orders                 → Orders paid by the caller (auth)
    GET  /transaction-history       → Every order (admin)
    POST /admin/reconcile-orders    → Approve applications left behind by recorded orders (admin)
"""

import asyncio
import logging
from typing import List

from fastapi import APIRouter, Depends

from ..api.dependencies import CurrentCaller, get_current_caller, get_order_service, require_admin
from ..schemas.payment import (
    CheckoutRequest,
    CheckoutResponse,
    OrderResponse,
    PaymentSuccessRequest,
    PaymentSuccessResponse,
    ReconcileResponse,
)
from ..services.order_service import OrderService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["payments"])


@router.post("/create-checkout-session", response_model=CheckoutResponse)
async def create_checkout_session(
    payload: CheckoutRequest,
    _: CurrentCaller = Depends(get_current_caller),
    order_service: OrderService = Depends(get_order_service),
) -> CheckoutResponse:
    """
    Start a card payment for an application's expected salary.

    Returns:
        CheckoutResponse with the hosted checkout URL

    Raises:
        ValidationException: If tutorId or expectedSalary is missing
    """
    url = await asyncio.to_thread(
        order_service.initiate_checkout,
        tutor_id=payload.tutor_id,
        tutor_email=payload.tutor_email,
        expected_salary=payload.expected_salary,
        name=payload.name,
    )
    return CheckoutResponse(url=url)


@router.post("/payment-success", response_model=PaymentSuccessResponse)
async def payment_success(
    payload: PaymentSuccessRequest,
    caller: CurrentCaller = Depends(get_current_caller),
    order_service: OrderService = Depends(get_order_service),
) -> PaymentSuccessResponse:
    """
    Confirm a checkout session with the processor and record its order.

    Replays return the already recorded order with ``created`` false.

    Raises:
        PaymentNotVerifiedException: If the session is not paid
    """
    confirmation = await asyncio.to_thread(
        order_service.confirm_payment,
        payload.session_id or "",
        payer_email=caller.email,
    )
    order = OrderResponse.model_validate(confirmation.order)
    return PaymentSuccessResponse(
        **order.model_dump(),
        created=confirmation.created,
        message=confirmation.message,
    )


@router.get("/my-orders", response_model=List[OrderResponse])
async def my_orders(
    caller: CurrentCaller = Depends(get_current_caller),
    order_service: OrderService = Depends(get_order_service),
) -> List[OrderResponse]:
    orders = await asyncio.to_thread(order_service.list_orders_for, caller.email)
    return [OrderResponse.model_validate(o) for o in orders]


@router.get("/transaction-history", response_model=List[OrderResponse])
async def transaction_history(
    _: CurrentCaller = Depends(require_admin),
    order_service: OrderService = Depends(get_order_service),
) -> List[OrderResponse]:
    orders = await asyncio.to_thread(order_service.list_all_orders)
    return [OrderResponse.model_validate(o) for o in orders]


@router.post("/admin/reconcile-orders", response_model=ReconcileResponse)
async def reconcile_orders(
    _: CurrentCaller = Depends(require_admin),
    order_service: OrderService = Depends(get_order_service),
) -> ReconcileResponse:
    repaired = await asyncio.to_thread(order_service.reconcile_approvals)
    return ReconcileResponse(repaired=repaired)
