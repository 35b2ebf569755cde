"""Discount code repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.discounts.models import DiscountCode


class IDiscountCodeRepository(IRepository["DiscountCode"]):
    """Repository contract for discount codes."""

    @abstractmethod
    def get_by_code(self, code: str) -> Optional[DiscountCode]:
        """Case-insensitive look-up by code value."""

    @abstractmethod
    def code_exists(self, code: str, exclude_id: Optional[str] = None) -> bool:
        """Whether *code* is taken (ignoring case), optionally by another row."""
