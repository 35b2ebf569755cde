"""Discount validator: turns a redemption code into a discount amount."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING

import structlog

from modules.discounts.exceptions import InvalidDiscountCode

if TYPE_CHECKING:
    from modules.discounts.repositories.interfaces import IDiscountCodeRepository

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ResolvedDiscount:
    code: str
    amount: Decimal


class DiscountValidator:
    """Read-only resolution of redemption codes.

    Look-up ignores case.  Only ``active`` codes resolve; ``expired_at``
    is checked only when ``enforce_expiry`` is set.
    """

    def __init__(self, repository: IDiscountCodeRepository, enforce_expiry: bool = False) -> None:
        self._repo = repository
        self._enforce_expiry = enforce_expiry

    def resolve(self, code: str) -> ResolvedDiscount:
        """Return the discount for *code*.

        Raises:
            InvalidDiscountCode: unknown, not active, or (when enforced)
                past its expiry.
        """
        log = logger.bind(redemption_code=code)

        discount_code = self._repo.get_by_code(code.strip()) if code else None
        if discount_code is None:
            log.info("discount.code_unknown")
            raise InvalidDiscountCode("Invalid redemption code.")
        if not discount_code.is_active:
            log.info("discount.code_inactive", status=discount_code.status)
            raise InvalidDiscountCode("Invalid redemption code.")
        if self._enforce_expiry and discount_code.has_expired():
            log.info("discount.code_expired", expired_at=discount_code.expired_at.isoformat())
            raise InvalidDiscountCode("Redemption code has expired.")

        return ResolvedDiscount(code=discount_code.code, amount=discount_code.discount)
