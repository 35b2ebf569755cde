"""Unit tests for discount code DTOs."""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from modules.discounts.dtos import CreateDiscountCodeDTO, UpdateDiscountCodeDTO

pytestmark = pytest.mark.unit


def test_create_strips_code():
    dto = CreateDiscountCodeDTO(code="  SAVE5 ", discount=Decimal("5"), status="active")
    assert dto.code == "SAVE5"


@pytest.mark.parametrize(
    "kwargs, message",
    [
        ({"code": " ", "discount": Decimal("1"), "status": "active"}, "Code must not be empty"),
        ({"code": "X", "discount": Decimal("-1"), "status": "active"}, "Discount cannot be negative"),
        ({"code": "X", "discount": Decimal("1"), "status": "paused"}, "Invalid status"),
    ],
)
def test_create_rejects_invalid_input(kwargs, message):
    with pytest.raises(ValidationError, match=message):
        CreateDiscountCodeDTO(**kwargs)


def test_update_requires_a_field():
    with pytest.raises(ValidationError, match="At least one field"):
        UpdateDiscountCodeDTO()


def test_update_validates_supplied_fields():
    with pytest.raises(ValidationError, match="Invalid status"):
        UpdateDiscountCodeDTO(status="gone")
