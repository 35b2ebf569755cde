"""Customer repository interface.

Extends ``IRepository[Customer]`` with the name search used by the
autocomplete endpoint and the atomic debit used by the balance ledger.
"""

from __future__ import annotations

from abc import abstractmethod
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from django.db import models

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.customers.models import Customer


class ICustomerRepository(IRepository["Customer"]):
    """Repository contract for the Customer aggregate."""

    @abstractmethod
    def search_by_name(self, term: str) -> "models.QuerySet[Customer]":
        """Customers whose first or last name contains *term*."""

    @abstractmethod
    def debit_balance(
        self, id: str, amount: Decimal, floor: Optional[Decimal] = None
    ) -> Optional[Customer]:
        """Subtract *amount* from the balance in one statement.

        With a *floor*, the update only applies while
        ``balance - amount >= floor``.  Returns the updated customer, or
        ``None`` when no row matched.
        """
