"""Payment processor boundary.

The checkout broker and payment recorder only talk to a ``PaymentProcessor``;
``StripePaymentProcessor`` is the production adapter built on the stripe SDK.
"""
from dataclasses import dataclass
from typing import Any, Optional, Protocol
import stripe

from storefront.application.errors import UpstreamUnavailable
from storefront.core import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CheckoutSession:
    id: str
    url: str


@dataclass(frozen=True)
class SessionResult:
    id: str
    payment_status: str
    payment_intent: Optional[str]
    customer_email: Optional[str]
    amount_total: Optional[int]
    currency: Optional[str]


class PaymentProcessor(Protocol):
    def create_checkout_session(self, **params: Any) -> CheckoutSession:
        ...

    def retrieve_session(self, session_id: str) -> SessionResult:
        ...


class StripePaymentProcessor:
    def __init__(self, api_key: str):
        self.api_key = api_key

    def create_checkout_session(self, **params: Any) -> CheckoutSession:
        try:
            session = stripe.checkout.Session.create(api_key=self.api_key, **params)
        except stripe.StripeError as e:
            logger.error(f"Checkout session creation failed: {e}", exc_info=True)
            raise UpstreamUnavailable("Could not create checkout session") from e
        return CheckoutSession(id=session.id, url=session.url)

    def retrieve_session(self, session_id: str) -> SessionResult:
        try:
            session = stripe.checkout.Session.retrieve(session_id, api_key=self.api_key)
        except stripe.StripeError as e:
            logger.error(f"Checkout session lookup failed: {e}", exc_info=True)
            raise UpstreamUnavailable("Could not retrieve checkout session") from e

        details = getattr(session, "customer_details", None)
        email = getattr(details, "email", None) if details else None
        payment_intent = getattr(session, "payment_intent", None)
        # payment_intent is an id unless the caller asked stripe to expand it
        if payment_intent is not None and not isinstance(payment_intent, str):
            payment_intent = payment_intent.id
        return SessionResult(
            id=session.id,
            payment_status=session.payment_status,
            payment_intent=payment_intent,
            customer_email=email or getattr(session, "customer_email", None),
            amount_total=getattr(session, "amount_total", None),
            currency=getattr(session, "currency", None),
        )
