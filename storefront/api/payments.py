from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional
from storefront.core_settings import Settings
from storefront.infrastructure.db import get_db
from storefront.infrastructure.payment_processor import PaymentProcessor
from storefront.application.access import AccessPolicy, Rule
from storefront.application.checkout import CheckoutService
from storefront.application.payments import PaymentService
from storefront.application.schemas import (
    CheckoutRequest,
    CheckoutResponse,
    PaymentConfirm,
    PaymentSuccess,
    PaymentRead,
)
from .deps import get_principal, get_policy, get_processor, get_app_settings

router = APIRouter(tags=["payments"])


@router.post("/create-checkout-session", response_model=CheckoutResponse)
def create_checkout_session(
    payload: CheckoutRequest,
    principal: str = Depends(get_principal),
    policy: AccessPolicy = Depends(get_policy),
    processor: PaymentProcessor = Depends(get_processor),
    settings: Settings = Depends(get_app_settings),
):
    order = payload.order
    if order.email:
        policy.enforce(principal, Rule.SELF_OR_ADMIN, order.email)
    else:
        order = order.model_copy(update={"email": principal})
    url = CheckoutService(processor, settings).create_session(order)
    return CheckoutResponse(url=url)


@router.post("/payments/success", response_model=PaymentSuccess)
def payment_success(
    payload: PaymentConfirm,
    db: Session = Depends(get_db),
    principal: str = Depends(get_principal),
    processor: PaymentProcessor = Depends(get_processor),
):
    outcome = PaymentService(db, processor).confirm_payment(payload.session_id, payload.order_id)
    return outcome.to_schema()


@router.get("/payments", response_model=list[PaymentRead])
def list_payments(
    email: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    principal: str = Depends(get_principal),
    policy: AccessPolicy = Depends(get_policy),
    processor: PaymentProcessor = Depends(get_processor),
):
    policy.enforce(principal, Rule.SELF_OR_ADMIN, email)
    return PaymentService(db, processor).list(email=email)


@router.get("/payments/{email}", response_model=list[PaymentRead])
def list_payments_for(
    email: str,
    db: Session = Depends(get_db),
    principal: str = Depends(get_principal),
    policy: AccessPolicy = Depends(get_policy),
    processor: PaymentProcessor = Depends(get_processor),
):
    policy.enforce(principal, Rule.SELF_OR_ADMIN, email)
    return PaymentService(db, processor).list(email=email)
