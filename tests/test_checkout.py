import pytest
from storefront.application.checkout import CheckoutService, to_minor_units
from storefront.application.schemas import CheckoutOrder
from conftest import auth, BUYER, OTHER


@pytest.mark.parametrize(
    "amount, expected",
    [(19.99, 1999), (0.1, 10), (1.005, 101), (250, 25000), (0.29, 29)],
)
def test_to_minor_units_rounds(amount, expected):
    assert to_minor_units(amount) == expected


def test_session_params(settings, processor):
    order = CheckoutOrder(id=7, email=BUYER, product_name="Denim Jacket", total_price=19.99)
    params = CheckoutService(processor, settings).build_session_params(order)

    assert params["mode"] == "payment"
    assert params["payment_method_types"] == ["card"]
    assert params["customer_email"] == BUYER
    (item,) = params["line_items"]
    assert item["quantity"] == 1
    assert item["price_data"]["unit_amount"] == 1999
    assert item["price_data"]["currency"] == "usd"
    assert item["price_data"]["product_data"]["name"] == "Denim Jacket"
    assert params["success_url"] == (
        "https://shop.example/dashboard/payment/success?session_id={CHECKOUT_SESSION_ID}&orderId=7"
    )
    assert params["cancel_url"] == "https://shop.example/dashboard/payment/cancelled"


def test_session_params_default_product_name(settings, processor):
    order = CheckoutOrder(id="abc", total_price=5)
    params = CheckoutService(processor, settings).build_session_params(order)
    assert params["line_items"][0]["price_data"]["product_data"]["name"] == "Garment Order"
    assert "customer_email" not in params


def test_checkout_endpoint_returns_processor_url(client, processor):
    body = {"order": {"_id": "42", "email": BUYER, "productName": "Silk Scarf", "totalPrice": 12.5}}
    resp = client.post("/create-checkout-session", json=body, headers=auth(BUYER))
    assert resp.status_code == 200
    assert resp.json() == {"url": "https://checkout.example/pay/cs_test_1"}
    (params,) = processor.created
    assert params["line_items"][0]["price_data"]["unit_amount"] == 1250
    assert params["success_url"].endswith("&orderId=42")


def test_checkout_defaults_email_to_principal(client, processor):
    resp = client.post("/create-checkout-session", json={"order": {"id": 1, "totalPrice": 3}}, headers=auth(BUYER))
    assert resp.status_code == 200
    assert processor.created[0]["customer_email"] == BUYER


def test_checkout_for_another_buyer_is_forbidden(client, processor):
    body = {"order": {"id": 1, "email": OTHER, "totalPrice": 3}}
    resp = client.post("/create-checkout-session", json=body, headers=auth(BUYER))
    assert resp.status_code == 403
    assert processor.created == []


def test_checkout_processor_failure(client, processor):
    processor.fail = ConnectionError("processor down")
    resp = client.post("/create-checkout-session", json={"order": {"id": 1, "totalPrice": 3}}, headers=auth(BUYER))
    assert resp.status_code == 502
    assert resp.json() == {"message": "Could not create checkout session"}


def test_checkout_requires_credential(client):
    resp = client.post("/create-checkout-session", json={"order": {"id": 1, "totalPrice": 3}})
    assert resp.status_code == 401
