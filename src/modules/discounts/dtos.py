"""Discount code DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
DTOs are immutable (``frozen=True``).
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from modules.discounts.models import DiscountCodeStatus


class _DiscountCodeFields(BaseModel):
    model_config = ConfigDict(frozen=True)

    @field_validator("code", check_fields=False)
    @classmethod
    def code_must_not_be_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        if not v.strip():
            raise ValueError("Code must not be empty.")
        return v.strip()

    @field_validator("discount", check_fields=False)
    @classmethod
    def discount_must_not_be_negative(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        if v is not None and v < 0:
            raise ValueError("Discount cannot be negative.")
        return v

    @field_validator("status", check_fields=False)
    @classmethod
    def status_must_be_known(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and v not in DiscountCodeStatus.values:
            raise ValueError(
                "Invalid status. Valid statuses are: "
                + ", ".join(DiscountCodeStatus.values)
            )
        return v


class CreateDiscountCodeDTO(_DiscountCodeFields):
    code: str
    discount: Decimal
    status: str
    expired_at: Optional[datetime] = None


class UpdateDiscountCodeDTO(_DiscountCodeFields):
    """Partial update: only supplied fields change, at least one is required."""

    code: Optional[str] = None
    discount: Optional[Decimal] = None
    status: Optional[str] = None
    expired_at: Optional[datetime] = None

    @model_validator(mode="after")
    def at_least_one_field(self):
        if not self.changes():
            raise ValueError(
                "At least one field (code, discount, status, or expired_at) "
                "is required to update."
            )
        return self

    def changes(self) -> dict:
        """The supplied fields only."""
        return self.model_dump(exclude_none=True)
