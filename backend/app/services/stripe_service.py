# backend/app/services/stripe_service.py
"""
Stripe Checkout gateway for the TuitionHub Platform.

Every call to the payment processor goes through ``StripeCheckoutGateway``
so the order workflow can be exercised with a stub gateway in tests.
Sessions are returned as plain ``CheckoutSession`` values instead of raw
Stripe objects.
"""

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
import logging
from typing import Any, Dict, Optional

import stripe

from ..core.config import settings
from ..core.constants import CHECKOUT_CANCEL_PATH, CHECKOUT_SUCCESS_PATH
from ..core.exceptions import ServiceException
from ..monitoring.prometheus_metrics import prometheus_metrics

logger = logging.getLogger(__name__)


@dataclass
class CheckoutSession:
    """The subset of a Stripe Checkout Session the order workflow reads."""

    id: str
    url: Optional[str] = None
    payment_status: Optional[str] = None
    payment_intent: Optional[str] = None
    amount_total: Optional[int] = None
    customer_email: Optional[str] = None
    customer_name: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)


def to_minor_units(amount: Decimal) -> int:
    """Convert a major-unit amount to cents, rounding half away from zero."""
    return int((Decimal(amount) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _field(obj: Any, name: str, default: Any = None) -> Any:
    if obj is None:
        return default
    if isinstance(obj, dict):
        return obj.get(name, default)
    return getattr(obj, name, default)


def _payment_intent_id(value: Any) -> Optional[str]:
    # Expanded sessions carry the PaymentIntent object instead of its id.
    if value is None or isinstance(value, str):
        return value
    return _field(value, "id")


class StripeCheckoutGateway:
    """
    Thin wrapper around ``stripe.checkout.Session``.

    Configures the SDK once per instance with an 8 second HTTP timeout and a
    single network retry.
    """

    def __init__(self, api_key: Optional[str] = None, currency: Optional[str] = None):
        self.logger = logging.getLogger(__name__)
        self.currency = currency or settings.stripe_currency
        key = api_key if api_key is not None else settings.stripe_secret_key.get_secret_value()

        self.stripe_configured = bool(key)
        if self.stripe_configured:
            stripe.api_key = key
            # 8s overall timeout; 1 retry for transient failures
            stripe.default_http_client = stripe.RequestsClient(timeout=8)
            stripe.max_network_retries = 1
            self.logger.info("Stripe checkout gateway configured")
        else:
            self.logger.warning("Stripe secret key not configured - checkout calls will fail")

    def _check_stripe_configured(self) -> None:
        if not self.stripe_configured:
            raise ServiceException(
                "Stripe service not configured. Please check STRIPE_SECRET_KEY environment variable."
            )

    def create_checkout_session(
        self,
        *,
        tutor_id: str,
        tutor_email: Optional[str],
        expected_salary: Decimal,
        name: Optional[str],
        client_domain: Optional[str] = None,
    ) -> CheckoutSession:
        """
        Create a one-item card payment session for an application's expected salary.

        Raises:
            ServiceException: If Stripe is not configured or rejects the request
        """
        self._check_stripe_configured()
        domain = (client_domain or settings.client_domain).rstrip("/")

        params: Dict[str, Any] = {
            "mode": "payment",
            "payment_method_types": ["card"],
            "line_items": [
                {
                    "price_data": {
                        "currency": self.currency,
                        "product_data": {"name": f"Tuition Payment for {name}"},
                        "unit_amount": to_minor_units(expected_salary),
                    },
                    "quantity": 1,
                }
            ],
            "metadata": {"tutorId": tutor_id, "tutorEmail": tutor_email or ""},
            "success_url": f"{domain}{CHECKOUT_SUCCESS_PATH}",
            "cancel_url": f"{domain}{CHECKOUT_CANCEL_PATH}",
        }

        try:
            session = stripe.checkout.Session.create(**params)
        except stripe.StripeError as e:
            prometheus_metrics.inc_checkout_session("error")
            self.logger.error(f"Stripe error creating checkout session: {str(e)}")
            raise ServiceException(f"Failed to create checkout session: {str(e)}")

        prometheus_metrics.inc_checkout_session("created")
        return self._to_checkout_session(session)

    def retrieve_checkout_session(self, session_id: str) -> CheckoutSession:
        """
        Fetch the authoritative state of a checkout session.

        Raises:
            ServiceException: If Stripe is not configured or the lookup fails
        """
        self._check_stripe_configured()
        try:
            session = stripe.checkout.Session.retrieve(session_id)
        except stripe.StripeError as e:
            self.logger.error(f"Stripe error retrieving checkout session {session_id}: {str(e)}")
            raise ServiceException(f"Failed to retrieve checkout session: {str(e)}")
        return self._to_checkout_session(session)

    @staticmethod
    def _to_checkout_session(session: Any) -> CheckoutSession:
        details = _field(session, "customer_details")
        metadata = _field(session, "metadata") or {}
        return CheckoutSession(
            id=_field(session, "id"),
            url=_field(session, "url"),
            payment_status=_field(session, "payment_status"),
            payment_intent=_payment_intent_id(_field(session, "payment_intent")),
            amount_total=_field(session, "amount_total"),
            customer_email=_field(details, "email"),
            customer_name=_field(details, "name"),
            metadata={
                "tutorId": _field(metadata, "tutorId") or "",
                "tutorEmail": _field(metadata, "tutorEmail") or "",
            },
        )
