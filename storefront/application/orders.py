from sqlalchemy.orm import Session
from storefront.domain.models import (
    Order,
    TrackingEvent,
    STATUS_PENDING,
    STATUS_APPROVED,
    INACTIVE_STATUSES,
    PAYMENT_UNPAID,
    PAYMENT_PAID,
    utcnow,
)
from storefront.core import get_logger
from .schemas import OrderCreate, TrackingCreate, UpdateResult
from .errors import NotFound
from typing import Optional

logger = get_logger(__name__)


class OrderService:
    def __init__(self, db: Session):
        self.db = db

    def create(self, data: OrderCreate, email: str) -> Order:
        # Payment and fulfillment fields always start from their defaults
        order = Order(
            **data.model_dump(exclude={"email"}),
            email=email,
            status=STATUS_PENDING,
            payment_status=PAYMENT_UNPAID,
        )
        self.db.add(order)
        self.db.commit()
        self.db.refresh(order)
        logger.info(f"Order {order.id} created for {email}")
        return order

    def get(self, order_id: int) -> Optional[Order]:
        return self.db.query(Order).filter(Order.id == order_id).first()

    def require(self, order_id: int) -> Order:
        order = self.get(order_id)
        if not order:
            raise NotFound("Order not found")
        return order

    def list(self, email: Optional[str] = None, status: Optional[str] = None):
        query = self.db.query(Order)
        if email:
            query = query.filter(Order.email == email)
        if status:
            query = query.filter(Order.status == status)
        return query.all()

    def list_pending(self):
        return self.list(status=STATUS_PENDING)

    def list_approved(self):
        """Active fulfillment queue: every status except the inactive ones, newest approval first."""
        return (
            self.db.query(Order)
            .filter(Order.status.notin_(INACTIVE_STATUSES))
            .order_by(Order.approved_at.desc().nulls_last(), Order.id.desc())
            .all()
        )

    def delete(self, order_id: int) -> int:
        order = self.require(order_id)
        self.db.delete(order)
        self.db.commit()
        logger.info(f"Order {order_id} deleted")
        return 1

    def set_status(self, order_id: int, status: str) -> UpdateResult:
        order = self.require(order_id)
        modified = order.status != status
        order.status = status
        if status == STATUS_APPROVED:
            order.approved_at = utcnow()
            modified = True
        self.db.commit()
        logger.info(f"Order {order_id} status set to {status}")
        return UpdateResult(matched_count=1, modified_count=int(modified))

    def append_tracking(self, order_id: int, event: TrackingCreate) -> UpdateResult:
        """Append a tracking event and move the order to the event's status in one commit."""
        order = self.require(order_id)
        order.tracking.append(TrackingEvent(**event.model_dump()))
        order.status = event.status
        self.db.commit()
        logger.info(f"Order {order_id} tracking appended: {event.status}")
        return UpdateResult(matched_count=1, modified_count=1)

    def set_payment(self, order: Optional[Order], payment_status: str, transaction_id: str) -> UpdateResult:
        """Stage the payment fields on ``order``; the caller owns the commit.

        Takes the loaded order rather than an id: the payment recorder has already
        read it for the denormalised payment fields, and ``None`` (order gone)
        reports zero matches. A paid order keeps the transaction id it was first
        paid with.
        """
        if order is None:
            return UpdateResult(matched_count=0, modified_count=0)
        if order.payment_status == PAYMENT_PAID and order.transaction_id and order.transaction_id != transaction_id:
            logger.warning(
                f"Order {order.id} already paid by {order.transaction_id}; ignoring {transaction_id}"
            )
            return UpdateResult(matched_count=1, modified_count=0)
        modified = order.payment_status != payment_status or order.transaction_id != transaction_id
        order.payment_status = payment_status
        order.transaction_id = transaction_id
        return UpdateResult(matched_count=1, modified_count=int(modified))
