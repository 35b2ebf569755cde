"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Serializers)
and the Service layer.  DTOs are immutable (``frozen=True``).

- ``CreateOrderItemDTO``: input for a single order line item.
- ``CreateOrderDTO``: input for order creation (nested items).
"""

from __future__ import annotations

from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator


class CreateOrderItemDTO(BaseModel):
    """Immutable DTO for a single line item in a creation request.

    ``unit_price`` is resolved by the Service Layer from the product catalog.
    """

    model_config = ConfigDict(frozen=True)

    product_id: UUID
    quantity: int

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1.")
        return v


class CreateOrderDTO(BaseModel):
    """Immutable DTO for order creation requests.

    Validates:
    - ``items`` must contain at least one item.
    - Lines naming the same product are merged into one line whose
      quantity is the sum, so stock is checked against the combined amount.
    - A blank ``redemption_code`` means no code.
    """

    model_config = ConfigDict(frozen=True)

    customer_id: UUID
    items: List[CreateOrderItemDTO]
    redemption_code: Optional[str] = None

    @field_validator("items")
    @classmethod
    def merge_lines_per_product(
        cls, v: List[CreateOrderItemDTO]
    ) -> List[CreateOrderItemDTO]:
        if not v:
            raise ValueError("Order must have at least one item.")
        merged: Dict[UUID, int] = {}
        for item in v:
            merged[item.product_id] = merged.get(item.product_id, 0) + item.quantity
        if len(merged) == len(v):
            return v
        return [
            CreateOrderItemDTO(product_id=product_id, quantity=quantity)
            for product_id, quantity in merged.items()
        ]

    @field_validator("redemption_code")
    @classmethod
    def blank_code_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return v.strip()
