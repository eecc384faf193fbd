from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional
from storefront.infrastructure.db import get_db
from storefront.application.access import AccessPolicy, Rule
from storefront.application.errors import Forbidden
from storefront.application.orders import OrderService
from storefront.application.schemas import (
    OrderCreate,
    OrderRead,
    StatusUpdate,
    TrackingCreate,
    UpdateResult,
    DeleteResult,
)
from .deps import get_principal, get_policy

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("", response_model=OrderRead)
def create_order(
    payload: OrderCreate,
    db: Session = Depends(get_db),
    principal: str = Depends(get_principal),
    policy: AccessPolicy = Depends(get_policy),
):
    """Place an order; it belongs to the caller unless an admin names another buyer."""
    email = payload.email or principal
    policy.enforce(principal, Rule.SELF_OR_ADMIN, email)
    return OrderService(db).create(payload, email=email)


@router.get("", response_model=list[OrderRead])
def list_orders(
    email: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    principal: str = Depends(get_principal),
    policy: AccessPolicy = Depends(get_policy),
):
    # Without an email filter this is the admin's view of every order
    policy.enforce(principal, Rule.SELF_OR_ADMIN, email)
    return OrderService(db).list(email=email, status=status)


@router.get("/pending", response_model=list[OrderRead])
def list_pending_orders(
    db: Session = Depends(get_db),
    principal: str = Depends(get_principal),
    policy: AccessPolicy = Depends(get_policy),
):
    policy.enforce(principal, Rule.MANAGER_ONLY)
    return OrderService(db).list_pending()


@router.get("/approved", response_model=list[OrderRead])
def list_approved_orders(
    db: Session = Depends(get_db),
    principal: str = Depends(get_principal),
    policy: AccessPolicy = Depends(get_policy),
):
    policy.enforce(principal, Rule.MANAGER_ONLY)
    return OrderService(db).list_approved()


@router.patch("/status/{order_id}", response_model=UpdateResult)
def update_order_status(
    order_id: int,
    payload: StatusUpdate,
    db: Session = Depends(get_db),
    principal: str = Depends(get_principal),
    policy: AccessPolicy = Depends(get_policy),
):
    policy.enforce(principal, Rule.MANAGER_ONLY)
    return OrderService(db).set_status(order_id, payload.status)


@router.patch("/tracking/{order_id}", response_model=UpdateResult)
def add_tracking_event(
    order_id: int,
    payload: TrackingCreate,
    db: Session = Depends(get_db),
    principal: str = Depends(get_principal),
    policy: AccessPolicy = Depends(get_policy),
):
    policy.enforce(principal, Rule.MANAGER_ONLY)
    return OrderService(db).append_tracking(order_id, payload)


@router.get("/{order_id}", response_model=OrderRead)
def get_order(
    order_id: int,
    db: Session = Depends(get_db),
    principal: str = Depends(get_principal),
    policy: AccessPolicy = Depends(get_policy),
):
    order = OrderService(db).require(order_id)
    if not policy.can_view_order(principal, order.email):
        raise Forbidden()
    return order


@router.delete("/{order_id}", response_model=DeleteResult)
def delete_order(
    order_id: int,
    db: Session = Depends(get_db),
    principal: str = Depends(get_principal),
    policy: AccessPolicy = Depends(get_policy),
):
    service = OrderService(db)
    order = service.require(order_id)
    policy.enforce(principal, Rule.SELF_OR_ADMIN, order.email)
    return DeleteResult(deleted_count=service.delete(order_id))
