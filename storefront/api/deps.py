from fastapi import Depends, Request
from sqlalchemy.orm import Session
from storefront.core import set_request_context
from storefront.core_settings import Settings
from storefront.infrastructure.db import get_db
from storefront.infrastructure.payment_processor import PaymentProcessor
from storefront.application.access import AccessPolicy
from storefront.application.errors import Unauthenticated

BEARER_SCHEME = "bearer"


async def get_principal(request: Request) -> str:
    """Verify the bearer credential and return the principal email."""
    auth_header = request.headers.get("Authorization")
    parts = (auth_header or "").split(None, 1)
    # Auth schemes are case-insensitive
    if len(parts) != 2 or parts[0].lower() != BEARER_SCHEME:
        raise Unauthenticated()
    token = parts[1].strip()
    email = request.app.state.verifier.verify(token)
    if not email:
        raise Unauthenticated()
    set_request_context(principal=email)
    return email


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_processor(request: Request) -> PaymentProcessor:
    return request.app.state.processor


def get_policy(db: Session = Depends(get_db)) -> AccessPolicy:
    return AccessPolicy(db)
