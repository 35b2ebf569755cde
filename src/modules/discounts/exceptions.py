"""Discount code domain exceptions."""

from __future__ import annotations

from modules.core.exceptions import Conflict, InvalidRequest, NotFound


class DiscountCodeNotFound(NotFound):
    code = "discount_code_not_found"


class InvalidDiscountCode(InvalidRequest):
    """The code exists but is not redeemable (inactive, expired, or unknown
    when resolved by the order workflow)."""

    code = "invalid_discount_code"


class DiscountCodeAlreadyExists(Conflict):
    """Another code with the same value (ignoring case) exists."""

    code = "discount_code_exists"
