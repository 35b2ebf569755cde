"""Customer service layer (Use Cases).

Read-side operations used by the order form: balance look-up and the
name search behind the customer autocomplete.  Debits go through
``BalanceLedger``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import structlog
from django.db import models

from modules.core.exceptions import InvalidRequest
from modules.customers.exceptions import CustomerNotFound

if TYPE_CHECKING:
    from modules.customers.models import Customer
    from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


class CustomerService:
    """Application service for Customer use-cases.

    Receives an ``ICustomerRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: ICustomerRepository) -> None:
        self._repo = repository

    def get_customer(self, id: str) -> Customer:
        """Retrieve a single customer by ID.

        Raises:
            CustomerNotFound: if the customer does not exist.
        """
        customer = self._repo.get_by_id(id)
        if not customer:
            raise CustomerNotFound(f"Customer with ID {id} not found.")
        logger.info("customer.retrieved", customer_id=str(id))
        return customer

    def search_customers(self, term: Optional[str]) -> "models.QuerySet[Customer]":
        """Customers whose first or last name contains *term*.

        Raises:
            InvalidRequest: if no search term is given.
        """
        if not term or not term.strip():
            raise InvalidRequest("Customer name is required for searching.")
        return self._repo.search_by_name(term.strip())
