"""Unit tests for CustomerService."""

from __future__ import annotations

from uuid import uuid4

import pytest

from modules.core.exceptions import InvalidRequest
from modules.customers.exceptions import CustomerNotFound
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.customers.services import CustomerService

pytestmark = pytest.mark.unit


@pytest.fixture()
def service():
    return CustomerService(repository=CustomerDjangoRepository())


def test_get_customer(service, customer):
    assert service.get_customer(str(customer.id)) == customer


@pytest.mark.parametrize("bad_id", [str(uuid4()), "not-a-uuid"])
def test_get_customer_missing(service, bad_id):
    with pytest.raises(CustomerNotFound):
        service.get_customer(bad_id)


def test_search_matches_first_or_last_name(service, make_customer):
    make_customer(first_name="Maria", last_name="Lopez")
    make_customer(first_name="Jon", last_name="Marino")
    make_customer(first_name="Zoe", last_name="King")

    names = sorted(c.full_name for c in service.search_customers("mar"))

    assert names == ["Jon Marino", "Maria Lopez"]


@pytest.mark.parametrize("term", [None, "", "  "])
def test_search_requires_term(service, term):
    with pytest.raises(InvalidRequest):
        service.search_customers(term)


def test_full_name_without_last_name(make_customer):
    assert make_customer(first_name="Cher", last_name="").full_name == "Cher"
