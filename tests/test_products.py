from conftest import auth, BUYER, MANAGER, ADMIN

SHIRT = {"name": "Linen Shirt", "price": 24.5, "image": "shirt.png", "category": "Shirts", "availableQuantity": 40}


def create_product(client, body=SHIRT):
    resp = client.post("/products", json=body, headers=auth(MANAGER))
    assert resp.status_code == 200, resp.text
    return resp.json()


def test_catalog_is_public(client, staff):
    product = create_product(client)
    resp = client.get("/products")
    assert resp.status_code == 200
    assert [p["name"] for p in resp.json()] == ["Linen Shirt"]

    resp = client.get(f"/products/{product['id']}")
    assert resp.status_code == 200
    assert resp.json()["price"] == 24.5
    assert resp.json()["availableQuantity"] == 40
    assert resp.json()["createdBy"] == MANAGER


def test_missing_product(client):
    assert client.get("/products/77").status_code == 404


def test_create_requires_manager(client, staff):
    assert client.post("/products", json=SHIRT).status_code == 401
    assert client.post("/products", json=SHIRT, headers=auth(BUYER)).status_code == 403
    assert client.post("/products", json=SHIRT, headers=auth(ADMIN)).status_code == 403


def test_patch_updates_given_fields_only(client, staff):
    product = create_product(client)
    resp = client.patch(f"/products/{product['id']}", json={"price": 19.0}, headers=auth(MANAGER))
    assert resp.status_code == 200
    assert resp.json()["price"] == 19.0
    assert resp.json()["name"] == "Linen Shirt"


def test_write_policy_defaults_to_manager(client, staff):
    product = create_product(client)
    assert client.patch(f"/products/{product['id']}", json={"price": 1}, headers=auth(BUYER)).status_code == 403
    assert client.delete(f"/products/{product['id']}", headers=auth(BUYER)).status_code == 403
    resp = client.delete(f"/products/{product['id']}", headers=auth(MANAGER))
    assert resp.status_code == 200
    assert client.get(f"/products/{product['id']}").status_code == 404


def test_write_policy_can_open_to_any_user(client, staff, settings):
    settings.PRODUCT_WRITE_ROLE = "user"
    product = create_product(client)
    resp = client.patch(f"/products/{product['id']}", json={"name": "Shirt"}, headers=auth(BUYER))
    assert resp.status_code == 200
