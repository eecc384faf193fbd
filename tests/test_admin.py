from conftest import auth, make_order, BUYER, MANAGER, ADMIN


def test_admin_stats(client, staff, processor):
    make_order(client, totalPrice=10.5)
    second = make_order(client, totalPrice=20)
    client.patch(f"/orders/status/{second['id']}", json={"status": "Approved"}, headers=auth(MANAGER))
    processor.add_session("cs_1", payment_intent="pi_1")
    client.post("/payments/success", json={"sessionId": "cs_1", "orderId": second["id"]}, headers=auth(BUYER))

    resp = client.get("/admin-stats", headers=auth(ADMIN))
    assert resp.status_code == 200
    stats = resp.json()
    assert stats["totalUsers"] == 2
    assert stats["totalProducts"] == 0
    assert stats["totalOrders"] == 2
    assert stats["totalPayments"] == 1
    assert stats["totalOrderValue"] == 30.5
    assert stats["ordersByStatus"] == {"Pending": 1, "Approved": 1}


def test_admin_stats_is_admin_only(client, staff):
    assert client.get("/admin-stats").status_code == 401
    assert client.get("/admin-stats", headers=auth(MANAGER)).status_code == 403
