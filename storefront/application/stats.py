from sqlalchemy import func
from sqlalchemy.orm import Session
from storefront.domain.models import User, Product, Order, Payment
from .schemas import AdminStats


class StatsService:
    def __init__(self, db: Session):
        self.db = db

    def summary(self) -> AdminStats:
        by_status = self.db.query(Order.status, func.count(Order.id)).group_by(Order.status).all()
        total_value = self.db.query(func.coalesce(func.sum(Order.total_price), 0)).scalar()
        return AdminStats(
            total_users=self.db.query(func.count(User.id)).scalar(),
            total_products=self.db.query(func.count(Product.id)).scalar(),
            total_orders=self.db.query(func.count(Order.id)).scalar(),
            total_payments=self.db.query(func.count(Payment.id)).scalar(),
            total_order_value=float(total_value),
            orders_by_status={status: count for status, count in by_status},
        )
