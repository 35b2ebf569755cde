"""Generic repository interface (Dependency Inversion Principle).

Provides ``IRepository[T]``, the base that the product, customer,
discount code and order repositories extend.  Services and ledgers
depend on these abstractions, never on the Django ORM directly.  Nothing
is ever deleted through a repository: products, customers and codes are
referenced by historical orders.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, Optional, TypeVar

from django.db import models

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """Base generic repository contract.

    Type parameter ``T`` represents the domain entity managed by the
    repository (``Product``, ``Customer``, ``DiscountCode``, ``Order``).
    Look-ups by a malformed id return ``None`` rather than raising.
    """

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[T]:
        """Retrieve an entity by its primary key."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> "models.QuerySet":
        """Return a lazily evaluated, optionally filtered queryset."""

    @abstractmethod
    def save(self, entity: T) -> T:
        """Persist (create or update) an entity."""
