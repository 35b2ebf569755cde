"""Every error response shares one body shape."""

from __future__ import annotations

from uuid import uuid4

import pytest

pytestmark = pytest.mark.integration


def _assert_shape(body):
    assert set(body) == {"type", "errors"}
    assert body["errors"]
    for error in body["errors"]:
        assert set(error) == {"code", "detail", "attr"}


def test_not_found(api_client):
    response = api_client.get(f"/api/v1/orders/{uuid4()}/")

    assert response.status_code == 404
    _assert_shape(response.json())
    assert response.json()["type"] == "client_error"


def test_field_validation(api_client):
    response = api_client.post("/api/v1/orders/", {}, format="json")

    assert response.status_code == 400
    body = response.json()
    _assert_shape(body)
    assert body["type"] == "validation_error"
    assert {err["attr"] for err in body["errors"]} == {"customer_id", "items"}


def test_conflict(api_client, make_code):
    make_code(code="DUP")

    response = api_client.post(
        "/api/v1/codes/", {"code": "DUP", "discount": "1.00", "status": "active"}, format="json"
    )

    assert response.status_code == 409
    _assert_shape(response.json())


def test_method_not_allowed(api_client, product):
    response = api_client.delete(f"/api/v1/products/{product.id}/")

    assert response.status_code == 405
    _assert_shape(response.json())


def test_malformed_json(api_client):
    response = api_client.post(
        "/api/v1/orders/", data="{not json", content_type="application/json"
    )

    assert response.status_code == 400
    _assert_shape(response.json())
    assert response.json()["errors"][0]["code"] == "parse_error"
