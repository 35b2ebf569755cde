"""Order repository interface.

Extends ``IRepository[Order]`` with the methods the Order aggregate
needs: atomic creation with items and a locking read for status
transitions.  The Service Layer depends exclusively on this contract.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional

from django.db import models

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.models import Order


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root.

    The Order aggregate includes its OrderItem children.  Mutations must
    be atomic and must run inside the caller's transaction.
    """

    @abstractmethod
    def create(self, data: Dict[str, Any]) -> Order:
        """Insert an order with its items.

        ``data`` must include ``customer_id``, ``total_price``,
        ``discount``, ``final_price``, ``items`` (list of dicts with
        ``product_id``, ``quantity``, ``unit_price``) and optionally
        ``redemption_code``.
        """

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[Order]:
        """Retrieve an order with its customer and items (with products)."""

    @abstractmethod
    def get_for_update(self, id: str) -> Optional[Order]:
        """Retrieve an order with a row-level lock (SELECT FOR UPDATE)."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> "models.QuerySet[Order]":
        """List orders with optional filters."""
