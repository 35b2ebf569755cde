from decimal import Decimal

import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from modules.customers.models import Customer
from modules.discounts.models import DiscountCode, DiscountCodeStatus
from modules.products.models import Product


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture(autouse=True)
def _clear_cache():
    """Throttle counters live in the cache; start every test from zero."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


# ---------------------------------------------------------------------------
# Entity factories
# ---------------------------------------------------------------------------


@pytest.fixture()
def make_customer():
    counter = {"n": 0}

    def _make(balance="100.00", first_name="Alice", last_name="Martin", email=None):
        counter["n"] += 1
        return Customer.objects.create(
            first_name=first_name,
            last_name=last_name,
            email=email or f"customer{counter['n']}@example.com",
            balance=Decimal(balance),
        )

    return _make


@pytest.fixture()
def make_product():
    def _make(name="Widget", price="10.00", stock=5, status=None):
        kwargs = {"name": name, "price": Decimal(price), "stock": stock}
        if status is not None:
            kwargs["status"] = status
        return Product.objects.create(**kwargs)

    return _make


@pytest.fixture()
def make_code():
    def _make(code="SAVE10", discount="10.00", status=DiscountCodeStatus.ACTIVE, expired_at=None):
        return DiscountCode.objects.create(
            code=code,
            discount=Decimal(discount),
            status=status,
            expired_at=expired_at,
        )

    return _make


@pytest.fixture()
def customer(make_customer):
    return make_customer()


@pytest.fixture()
def product(make_product):
    return make_product()
