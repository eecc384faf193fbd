import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from storefront.core_settings import Settings
from storefront.domain.models import User, Order, ROLE_MANAGER, ROLE_ADMIN
from storefront.infrastructure.db import Database
from storefront.infrastructure.identity import JWTIdentityVerifier, create_access_token
from storefront.infrastructure.payment_processor import CheckoutSession, SessionResult
from storefront.main import create_app

JWT_SECRET = "test-secret"
BUYER = "buyer@example.com"
OTHER = "other@example.com"
MANAGER = "manager@example.com"
ADMIN = "admin@example.com"


class FakeProcessor:
    """In-memory stand-in for the payment processor."""

    def __init__(self):
        self.created = []
        self.sessions = {}
        self.fail = None

    def create_checkout_session(self, **params):
        if self.fail:
            raise self.fail
        self.created.append(params)
        session_id = f"cs_test_{len(self.created)}"
        return CheckoutSession(id=session_id, url=f"https://checkout.example/pay/{session_id}")

    def retrieve_session(self, session_id):
        if self.fail:
            raise self.fail
        return self.sessions[session_id]

    def add_session(self, session_id, payment_status="paid", payment_intent="pi_1", email=BUYER, amount_total=1999, currency="usd"):
        self.sessions[session_id] = SessionResult(
            id=session_id,
            payment_status=payment_status,
            payment_intent=payment_intent,
            customer_email=email,
            amount_total=amount_total,
            currency=currency,
        )


@pytest.fixture
def settings():
    return Settings(
        JWT_SECRET=JWT_SECRET,
        SITE_DOMAIN="https://shop.example",
        STRIPE_SECRET_KEY="sk_test_dummy",
    )


@pytest.fixture
def database():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    return Database(engine=engine)


@pytest.fixture
def processor():
    return FakeProcessor()


@pytest.fixture
def app(settings, database, processor):
    return create_app(
        settings=settings,
        database=database,
        verifier=JWTIdentityVerifier(JWT_SECRET),
        processor=processor,
    )


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db(client, database):
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def staff(db):
    db.add_all([User(email=MANAGER, role=ROLE_MANAGER), User(email=ADMIN, role=ROLE_ADMIN)])
    db.commit()


def auth(email):
    return {"Authorization": f"Bearer {create_access_token(email, JWT_SECRET)}"}


def make_order(client, email=BUYER, **fields):
    body = {"productName": "Linen Shirt", "productImage": "shirt.png", "quantity": 2, "totalPrice": 19.99}
    body.update(fields)
    resp = client.post("/orders", json=body, headers=auth(email))
    assert resp.status_code == 200, resp.text
    return resp.json()


def reload_order(db, order_id):
    db.expire_all()
    return db.get(Order, order_id)
