"""Unit tests for order DTOs."""

from __future__ import annotations

from uuid import uuid4

import pytest
from pydantic import ValidationError

from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO

pytestmark = pytest.mark.unit


def _item(product_id=None, quantity=1):
    return CreateOrderItemDTO(product_id=product_id or uuid4(), quantity=quantity)


def test_valid_order():
    dto = CreateOrderDTO(customer_id=uuid4(), items=[_item(), _item(quantity=3)])
    assert len(dto.items) == 2
    assert dto.redemption_code is None


def test_items_must_not_be_empty():
    with pytest.raises(ValidationError, match="at least one item"):
        CreateOrderDTO(customer_id=uuid4(), items=[])


@pytest.mark.parametrize("quantity", [0, -1])
def test_quantity_must_be_positive(quantity):
    with pytest.raises(ValidationError, match="Quantity must be at least 1"):
        _item(quantity=quantity)


def test_lines_for_the_same_product_are_merged():
    first, second = uuid4(), uuid4()
    dto = CreateOrderDTO(
        customer_id=uuid4(),
        items=[_item(first), _item(second, quantity=4), _item(first, quantity=2)],
    )

    assert [(item.product_id, item.quantity) for item in dto.items] == [
        (first, 3),
        (second, 4),
    ]


@pytest.mark.parametrize("code, expected", [("", None), ("   ", None), (" SAVE ", "SAVE")])
def test_redemption_code_normalised(code, expected):
    dto = CreateOrderDTO(customer_id=uuid4(), items=[_item()], redemption_code=code)
    assert dto.redemption_code == expected


def test_customer_id_must_be_uuid():
    with pytest.raises(ValidationError):
        CreateOrderDTO(customer_id="42", items=[_item()])
