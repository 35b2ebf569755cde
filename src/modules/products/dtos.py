"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
DTOs are immutable (``frozen=True``).

- ``UpdateProductDTO``: input for partial product updates.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from modules.products.models import ProductStatus

UPDATABLE_FIELDS = ("name", "price", "stock", "status")


class UpdateProductDTO(BaseModel):
    """Immutable DTO for product update requests.

    All fields are optional, but at least one must be supplied.  Only
    supplied fields are updated.
    """

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    price: Optional[Decimal] = None
    stock: Optional[int] = None
    status: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Name must not be empty.")
        return v.strip() if v is not None else v

    @field_validator("price")
    @classmethod
    def price_must_not_be_negative(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        if v is not None and v < 0:
            raise ValueError("Price cannot be negative.")
        return v

    @field_validator("stock")
    @classmethod
    def stock_must_not_be_negative(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 0:
            raise ValueError("Stock cannot be negative.")
        return v

    @field_validator("status")
    @classmethod
    def status_must_be_known(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and v not in ProductStatus.values:
            raise ValueError(
                "Invalid status. Valid statuses are: "
                + ", ".join(ProductStatus.values)
            )
        return v

    @model_validator(mode="after")
    def at_least_one_field(self):
        if all(getattr(self, field) is None for field in UPDATABLE_FIELDS):
            raise ValueError(
                "At least one field (name, price, stock, or status) is required to update."
            )
        return self

    def changes(self) -> dict:
        """The supplied fields only."""
        return self.model_dump(exclude_none=True)
