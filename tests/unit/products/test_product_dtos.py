"""Unit tests for product DTOs."""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from modules.products.dtos import UpdateProductDTO

pytestmark = pytest.mark.unit


class TestUpdateProductDTO:
    def test_changes_contains_only_supplied_fields(self):
        dto = UpdateProductDTO(price=Decimal("12.50"))
        assert dto.changes() == {"price": Decimal("12.50")}

    def test_requires_at_least_one_field(self):
        with pytest.raises(ValidationError, match="At least one field"):
            UpdateProductDTO()

    def test_rejects_unknown_status(self):
        with pytest.raises(ValidationError, match="Invalid status"):
            UpdateProductDTO(status="ON-SALE")

    def test_rejects_negative_stock(self):
        with pytest.raises(ValidationError, match="Stock cannot be negative"):
            UpdateProductDTO(stock=-1)

    def test_rejects_negative_price(self):
        with pytest.raises(ValidationError, match="Price cannot be negative"):
            UpdateProductDTO(price=Decimal("-0.01"))

    def test_rejects_blank_name(self):
        with pytest.raises(ValidationError, match="Name must not be empty"):
            UpdateProductDTO(name="   ")

    def test_is_frozen(self):
        dto = UpdateProductDTO(name="Lamp")
        with pytest.raises(ValidationError):
            dto.name = "Other"
