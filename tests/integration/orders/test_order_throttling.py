"""Rate limiting on the order creation endpoint."""

from __future__ import annotations

import pytest
from rest_framework.throttling import ScopedRateThrottle

pytestmark = pytest.mark.integration

URL = "/api/v1/orders/"


@pytest.fixture(autouse=True)
def _tight_rate(monkeypatch):
    monkeypatch.setitem(ScopedRateThrottle.THROTTLE_RATES, "order_creation", "3/minute")


def _payload(customer, product):
    return {
        "customer_id": str(customer.id),
        "items": [{"product_id": str(product.id), "quantity": 1}],
    }


def test_order_creation_is_throttled(api_client, customer, make_product):
    product = make_product(stock=10)
    payload = _payload(customer, product)

    for _ in range(3):
        response = api_client.post(URL, payload, format="json")
        assert response.status_code == 201

    response = api_client.post(URL, payload, format="json")
    assert response.status_code == 429
    assert response.json()["errors"][0]["code"] == "throttled"


def test_order_listing_is_not_throttled(api_client):
    for _ in range(5):
        assert api_client.get(URL).status_code == 200


def test_status_updates_are_not_throttled(api_client, customer, make_product):
    product = make_product(stock=10)
    order_ids = [
        api_client.post(URL, _payload(customer, product), format="json").json()["id"]
        for _ in range(3)
    ]

    for order_id in order_ids:
        response = api_client.patch(
            f"{URL}{order_id}/status/", {"status": "COMPLETED"}, format="json"
        )
        assert response.status_code == 200
