"""Performance regression tests: constant query count (N+1 prevention).

List and retrieve endpoints must execute a bounded number of SQL queries
regardless of how many orders and items exist, proving that
``select_related`` / ``prefetch_related`` are applied.
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from modules.orders.models import Order, OrderItem

pytestmark = pytest.mark.integration


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def products(make_product):
    return [make_product(name=f"Product {i}", stock=1000) for i in range(5)]


@pytest.fixture()
def orders_with_items(customer, products):
    """Ten orders, three items each."""
    orders = []
    for _ in range(10):
        order = Order.objects.create(
            customer=customer,
            total_price=Decimal("30.00"),
            discount=Decimal("0.00"),
            final_price=Decimal("30.00"),
        )
        OrderItem.objects.bulk_create(
            [
                OrderItem(order=order, product=product, quantity=1, unit_price=product.price)
                for product in products[:3]
            ]
        )
        orders.append(order)
    return orders


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestOrderListQueryCount:
    def test_list_query_count_is_constant(
        self, api_client, orders_with_items, django_assert_max_num_queries
    ):
        """COUNT, orders JOIN customer, items, products."""
        with django_assert_max_num_queries(5):
            response = api_client.get("/api/v1/orders/")

        assert response.status_code == 200
        assert response.json()["total"] == 10
        assert all(len(row["items"]) == 3 for row in response.json()["data"])


class TestOrderRetrieveQueryCount:
    def test_retrieve_query_count_is_constant(
        self, api_client, orders_with_items, django_assert_max_num_queries
    ):
        """Order JOIN customer, items, products."""
        order = orders_with_items[0]

        with django_assert_max_num_queries(4):
            response = api_client.get(f"/api/v1/orders/{order.id}/")

        assert response.status_code == 200
        assert len(response.json()["items"]) == 3


class TestProductListQueryCount:
    def test_list_query_count(self, api_client, products, django_assert_max_num_queries):
        with django_assert_max_num_queries(3):
            response = api_client.get("/api/v1/products/")

        assert response.status_code == 200
