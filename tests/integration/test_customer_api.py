"""Integration tests for the customer endpoints."""

from __future__ import annotations

from uuid import uuid4

import pytest

pytestmark = pytest.mark.integration

URL = "/api/v1/customers/"


class TestBalance:
    def test_returns_balance(self, api_client, make_customer):
        customer = make_customer(balance="250.75")

        response = api_client.get(f"{URL}{customer.id}/balance/")

        assert response.status_code == 200
        assert response.json() == {"id": str(customer.id), "balance": "250.75"}

    def test_reflects_order_debit(self, api_client, make_customer, product):
        customer = make_customer(balance="100.00")
        api_client.post(
            "/api/v1/orders/",
            {
                "customer_id": str(customer.id),
                "items": [{"product_id": str(product.id), "quantity": 2}],
            },
            format="json",
        )

        response = api_client.get(f"{URL}{customer.id}/balance/")

        assert response.json()["balance"] == "80.00"

    @pytest.mark.parametrize("customer_id", [str(uuid4()), "123"])
    def test_unknown_customer(self, api_client, customer_id):
        response = api_client.get(f"{URL}{customer_id}/balance/")

        assert response.status_code == 404
        assert response.json()["errors"][0]["code"] == "customer_not_found"


class TestSearch:
    def test_matches_first_or_last_name(self, api_client, make_customer):
        ana = make_customer(first_name="Ana", last_name="Souza")
        bruno = make_customer(first_name="Bruno", last_name="Anand")
        make_customer(first_name="Carla", last_name="Mendes")

        response = api_client.get(f"{URL}search/", {"term": "an"})

        assert response.status_code == 200
        assert {row["value"] for row in response.json()} == {str(ana.id), str(bruno.id)}
        assert {"value": str(ana.id), "label": "Ana Souza"} in response.json()

    def test_term_required(self, api_client):
        response = api_client.get(f"{URL}search/")

        assert response.status_code == 400
        assert response.json()["errors"][0]["detail"] == "Customer name is required for searching."
