from decimal import Decimal, ROUND_HALF_UP
from storefront.core_settings import Settings
from storefront.core import get_logger
from storefront.infrastructure.payment_processor import PaymentProcessor
from .schemas import CheckoutOrder
from .errors import UpstreamUnavailable

logger = get_logger(__name__)


def to_minor_units(amount) -> int:
    """Convert a decimal currency amount to integer minor units, rounding half up."""
    major = Decimal(str(amount))
    return int((major * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class CheckoutService:
    def __init__(self, processor: PaymentProcessor, settings: Settings):
        self.processor = processor
        self.settings = settings

    def build_session_params(self, order: CheckoutOrder) -> dict:
        site = self.settings.SITE_DOMAIN.rstrip("/")
        # The unit amount already covers the whole order, so quantity stays 1
        params = {
            "payment_method_types": ["card"],
            "line_items": [
                {
                    "price_data": {
                        "currency": self.settings.CHECKOUT_CURRENCY,
                        "product_data": {
                            "name": order.product_name or self.settings.DEFAULT_PRODUCT_NAME,
                        },
                        "unit_amount": to_minor_units(order.total_price),
                    },
                    "quantity": 1,
                }
            ],
            "mode": "payment",
            "success_url": f"{site}/dashboard/payment/success?session_id={{CHECKOUT_SESSION_ID}}&orderId={order.id}",
            "cancel_url": f"{site}/dashboard/payment/cancelled",
        }
        if order.email:
            params["customer_email"] = order.email
        return params

    def create_session(self, order: CheckoutOrder) -> str:
        params = self.build_session_params(order)
        try:
            session = self.processor.create_checkout_session(**params)
        except UpstreamUnavailable:
            raise
        except Exception as e:
            logger.error(f"Checkout session for order {order.id} failed", exc_info=True)
            raise UpstreamUnavailable("Could not create checkout session") from e
        logger.info(f"Checkout session {session.id} created for order {order.id}")
        return session.url
