import json
import logging
from storefront.core.logging_config import StructuredFormatter, SecurityFilter


def test_root_and_health(client):
    assert client.get("/").json()["service"] == "storefront"
    assert client.get("/health").json()["status"] == "pass"
    assert client.get("/health/live").json() == {"status": "alive"}
    resp = client.get("/health/ready")
    assert resp.status_code in [200, 503]
    assert resp.json()["checks"]["database:connectivity"]["status"] == "pass"


def test_request_id_is_echoed(client):
    resp = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert resp.headers["X-Request-ID"] == "req-123"
    assert client.get("/health").headers["X-Request-ID"]


def _record(msg, *args):
    return logging.LogRecord("storefront.test", logging.INFO, __file__, 1, msg, args, None)


def test_security_filter_redacts_credentials():
    record = _record("Authorization: Bearer abc.def.ghi with api_key=sk_test_123")
    SecurityFilter().filter(record)
    message = record.getMessage()
    assert "abc.def.ghi" not in message
    assert "sk_test_123" not in message
    assert "***REDACTED***" in message


def test_structured_formatter_emits_json():
    payload = json.loads(StructuredFormatter().format(_record("Order %s created", 5)))
    assert payload["message"] == "Order 5 created"
    assert payload["level"] == "INFO"
    assert payload["service"] == "storefront"
