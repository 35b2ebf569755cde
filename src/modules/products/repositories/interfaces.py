"""Product repository interface.

Extends ``IRepository[Product]`` with the look-ups used by the search
endpoint and the conditional stock decrement used by the stock ledger.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Optional

from django.db import models

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def get_for_update(self, id: str) -> Optional[Product]:
        """Retrieve a product with a row-level lock (SELECT FOR UPDATE)."""

    @abstractmethod
    def search_in_stock(self, term: str) -> "models.QuerySet[Product]":
        """IN-STOCK products whose name contains *term* (case-insensitive)."""

    @abstractmethod
    def decrement_stock(self, id: str, quantity: int) -> Optional[Product]:
        """Atomically subtract *quantity* if at least that much is in stock.

        Returns the updated product, or ``None`` when no row matched
        (unknown product or not enough stock).  Must run inside the
        caller's transaction.
        """
