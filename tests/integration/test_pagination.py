"""Page envelope shared by the list endpoints."""

from __future__ import annotations

import pytest

pytestmark = pytest.mark.integration


@pytest.fixture()
def many_products(make_product):
    return [make_product(name=f"Product {i:02d}") for i in range(25)]


def test_default_page(api_client, many_products):
    data = api_client.get("/api/v1/products/").json()

    assert data["page"] == 1
    assert data["limit"] == 10
    assert data["total"] == 25
    assert data["total_pages"] == 3
    assert len(data["data"]) == 10


def test_custom_limit_and_page(api_client, many_products):
    data = api_client.get("/api/v1/products/", {"page": 3, "limit": 10}).json()

    assert data["page"] == 3
    assert [row["name"] for row in data["data"]] == [f"Product {i:02d}" for i in range(20, 25)]


def test_limit_is_capped(api_client, many_products):
    data = api_client.get("/api/v1/products/", {"limit": 1000}).json()

    assert data["limit"] == 100
    assert data["total_pages"] == 1


def test_page_out_of_range(api_client, many_products):
    response = api_client.get("/api/v1/products/", {"page": 99})

    assert response.status_code == 404
    assert response.json()["type"] == "client_error"


def test_empty_list(api_client):
    data = api_client.get("/api/v1/orders/").json()

    assert data == {"page": 1, "limit": 10, "total": 0, "total_pages": 0, "data": []}
