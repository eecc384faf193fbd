"""Payment recording.

A confirmed checkout session becomes exactly one ``Payment`` row, keyed by
the processor's transaction id. Confirmation may be reported any number of
times; only the first report writes anything.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from storefront.domain.models import Order, Payment, PAYMENT_PAID, utcnow
from storefront.core import get_logger
from storefront.infrastructure.payment_processor import PaymentProcessor, SessionResult
from .orders import OrderService
from .schemas import InsertResult, PaymentSuccess, UpdateResult
from .errors import PaymentNotVerified, UpstreamUnavailable

logger = get_logger(__name__)

ALREADY_PROCESSED = "Payment already processed"


@dataclass
class PaymentOutcome:
    inserted_id: Optional[int]
    update_result: Optional[UpdateResult] = None
    message: Optional[str] = None

    @property
    def replayed(self) -> bool:
        return self.inserted_id is None

    def to_schema(self) -> PaymentSuccess:
        return PaymentSuccess(
            message=self.message,
            payment_result=InsertResult(inserted_id=self.inserted_id),
            update_result=self.update_result,
        )


class PaymentService:
    def __init__(self, db: Session, processor: PaymentProcessor):
        self.db = db
        self.processor = processor
        self.orders = OrderService(db)

    def _retrieve_session(self, session_id: str) -> SessionResult:
        try:
            return self.processor.retrieve_session(session_id)
        except UpstreamUnavailable:
            raise
        except Exception as e:
            logger.error(f"Payment processor lookup for {session_id} failed", exc_info=True)
            raise UpstreamUnavailable("Could not retrieve checkout session") from e

    def _find_order(self, order_id: str) -> Optional[Order]:
        try:
            return self.orders.get(int(order_id))
        except ValueError:
            return None

    def find_by_transaction(self, transaction_id: str) -> Optional[Payment]:
        return self.db.query(Payment).filter(Payment.transaction_id == transaction_id).first()

    def confirm_payment(self, session_id: str, order_id) -> PaymentOutcome:
        order_id = str(order_id)
        session = self._retrieve_session(session_id)
        if session.payment_status != "paid":
            logger.info(f"Session {session_id} not paid (status={session.payment_status})")
            raise PaymentNotVerified()

        transaction_id = session.payment_intent or session.id
        if self.find_by_transaction(transaction_id):
            logger.info(f"Payment {transaction_id} already recorded; replay ignored")
            return PaymentOutcome(inserted_id=None, message=ALREADY_PROCESSED)

        # A missing order leaves the denormalised fields empty; the payment is still recorded
        order = self._find_order(order_id)
        payment = Payment(
            order_id=order_id,
            email=session.customer_email,
            transaction_id=transaction_id,
            amount=Decimal(session.amount_total or 0) / 100,
            currency=session.currency,
            date=utcnow(),
            status=PAYMENT_PAID,
            product_name=order.product_name if order else None,
            product_image=order.product_image if order else None,
            quantity=order.quantity if order else None,
        )
        self.db.add(payment)
        update_result = self.orders.set_payment(order, PAYMENT_PAID, transaction_id)
        try:
            self.db.commit()
        except IntegrityError:
            # A concurrent confirmation recorded this transaction first
            self.db.rollback()
            logger.info(f"Payment {transaction_id} recorded concurrently; replay ignored")
            return PaymentOutcome(inserted_id=None, message=ALREADY_PROCESSED)

        logger.info(f"Payment {transaction_id} recorded for order {order_id}")
        return PaymentOutcome(inserted_id=payment.id, update_result=update_result)

    def list(self, email: Optional[str] = None):
        query = self.db.query(Payment)
        if email:
            query = query.filter(Payment.email == email)
        return query.order_by(Payment.date.desc()).all()
