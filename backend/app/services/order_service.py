# backend/app/services/order_service.py
"""
Order Service for the TuitionHub Platform

Drives the checkout workflow for a tutor application:

    NoOrder -> CheckoutCreated -> PaymentConfirmed

Nothing is stored until the payment processor reports the session as paid.
Confirmation then inserts the Order and approves the linked application in
one transaction, and ``reconcile_approvals`` repairs any order whose
application was left Pending.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.constants import ORDER_STATUS_PAID, PAYMENT_STATUS_PAID, UNKNOWN_CUSTOMER_NAME
from ..core.enums import ApplicationStatus
from ..core.exceptions import PaymentNotVerifiedException, ServiceException, ValidationException
from ..models.order import Order
from ..monitoring.prometheus_metrics import prometheus_metrics
from ..repositories.application_repository import ApplicationRepository
from ..repositories.factory import RepositoryFactory
from ..repositories.order_repository import OrderRepository
from .base import BaseService
from .stripe_service import CheckoutSession, StripeCheckoutGateway

logger = logging.getLogger(__name__)


@dataclass
class PaymentConfirmation:
    order: Order
    created: bool

    @property
    def message(self) -> str:
        return "Order recorded" if self.created else "Order already recorded"


class OrderService(BaseService):
    """
    Service for checkout sessions and the orders they produce.
    """

    def __init__(
        self,
        db: Session,
        gateway: Optional[StripeCheckoutGateway] = None,
        order_repository: Optional[OrderRepository] = None,
        application_repository: Optional[ApplicationRepository] = None,
    ):
        super().__init__(db)
        self.gateway = gateway or StripeCheckoutGateway()
        self.order_repository = order_repository or RepositoryFactory.create_order_repository(db)
        self.application_repository = (
            application_repository or RepositoryFactory.create_application_repository(db)
        )

    @BaseService.measure_operation("initiate_checkout")
    def initiate_checkout(
        self,
        *,
        tutor_id: Optional[str],
        tutor_email: Optional[str],
        expected_salary: Optional[Decimal],
        name: Optional[str],
    ) -> str:
        """
        Ask the processor for a checkout session and return its redirect URL.

        Raises:
            ValidationException: If tutor_id or expected_salary is missing or zero
            ServiceException: If the processor call fails
        """
        if not tutor_id or not expected_salary:
            raise ValidationException(
                "tutorId and expectedSalary are required", code="MISSING_CHECKOUT_FIELDS"
            )

        self.log_operation("initiate_checkout", tutor_id=tutor_id)
        session = self.gateway.create_checkout_session(
            tutor_id=tutor_id,
            tutor_email=tutor_email,
            expected_salary=expected_salary,
            name=name,
        )
        if not session.url:
            raise ServiceException("Checkout session has no redirect URL")
        return session.url

    @BaseService.measure_operation("confirm_payment")
    def confirm_payment(
        self, session_id: str, *, payer_email: Optional[str] = None
    ) -> PaymentConfirmation:
        """
        Record the order for a paid checkout session.

        Replaying the same session returns the existing order unchanged.

        Args:
            session_id: Checkout session id from the success redirect
            payer_email: Verified caller email, used when the processor
                reports no customer email

        Raises:
            ValidationException: If session_id is empty
            PaymentNotVerifiedException: If the processor does not report "paid"
        """
        if not session_id:
            raise ValidationException("sessionId is required", code="MISSING_SESSION_ID")

        session = self.gateway.retrieve_checkout_session(session_id)
        if session.payment_status != PAYMENT_STATUS_PAID:
            self.logger.info(
                "Checkout session %s not paid (status=%s)", session_id, session.payment_status
            )
            raise PaymentNotVerifiedException(session_id, session.payment_status)

        transaction_id = session.payment_intent or session.id
        existing = self.order_repository.get_by_transaction_id(transaction_id)
        if existing is not None:
            prometheus_metrics.inc_order_recorded("duplicate")
            return PaymentConfirmation(order=existing, created=False)

        with self.transaction():
            order = self.order_repository.add_order(**self._order_fields(session, payer_email))
            if order is None:
                # Lost the race to a concurrent confirmation of the same session.
                order = self.order_repository.get_by_transaction_id(transaction_id)
                if order is None:
                    raise ServiceException(f"Order for transaction {transaction_id} vanished")
                created = False
            else:
                self._approve_application(order.tutor_id)
                created = True

        prometheus_metrics.inc_order_recorded("created" if created else "duplicate")
        self.log_operation(
            "confirm_payment", transaction_id=transaction_id, order_id=order.id, order_created=created
        )
        return PaymentConfirmation(order=order, created=created)

    @BaseService.measure_operation("reconcile_approvals")
    def reconcile_approvals(self) -> int:
        """
        Approve every Pending application that has an order.

        Rejected applications keep their status; a later reject decision is
        not overridden by an earlier payment.

        Returns:
            Number of applications repaired
        """
        with self.transaction():
            orders = self.order_repository.list_with_pending_application()
            tutor_ids = sorted({order.tutor_id for order in orders})
            repaired = 0
            for tutor_id in tutor_ids:
                repaired += self.application_repository.update_status(
                    tutor_id, ApplicationStatus.APPROVED.value
                )

        if repaired:
            self.logger.warning(f"Reconciled {repaired} application(s) with recorded payments")
        prometheus_metrics.inc_approvals_reconciled(repaired)
        return repaired

    @BaseService.measure_operation("list_orders_for")
    def list_orders_for(self, email: str) -> List[Order]:
        return self.order_repository.list_for_user_email(email)

    @BaseService.measure_operation("list_all_orders")
    def list_all_orders(self) -> List[Order]:
        return self.order_repository.list_all()

    def _approve_application(self, application_id: str) -> None:
        if not application_id:
            self.logger.warning("Paid session carries no tutorId; no application to approve")
            return
        matched = self.application_repository.update_status(
            application_id, ApplicationStatus.APPROVED.value
        )
        if matched == 0:
            self.logger.warning(f"Application {application_id} not found while recording order")

    @staticmethod
    def _order_fields(session: CheckoutSession, payer_email: Optional[str]) -> dict:
        amount_total = session.amount_total or 0
        return {
            "tutor_id": session.metadata.get("tutorId", ""),
            "transaction_id": session.payment_intent or session.id,
            "user_email": session.customer_email or payer_email or "",
            "user_name": session.customer_name or UNKNOWN_CUSTOMER_NAME,
            "amount": Decimal(amount_total) / 100,
            "status": ORDER_STATUS_PAID,
            "paid_at": datetime.now(timezone.utc),
        }
