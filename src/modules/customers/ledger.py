"""Balance ledger: owns the customer's monetary balance."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

import structlog
from django.db import transaction

from modules.core.exceptions import InvalidRequest
from modules.customers.exceptions import CustomerNotFound, InsufficientBalance

if TYPE_CHECKING:
    from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)

ZERO = Decimal("0.00")


class BalanceLedger:
    """Applies debits to customer balances.

    ``allow_negative`` decides whether a debit may take the balance below
    zero.  When it is off, the floor is part of the UPDATE's WHERE clause
    so the check cannot race with another debit.
    """

    def __init__(self, repository: ICustomerRepository, allow_negative: bool = True) -> None:
        self._repo = repository
        self._allow_negative = allow_negative

    @transaction.atomic
    def debit(self, customer_id, amount: Decimal) -> Decimal:
        """Subtract *amount* and return the new balance.

        Raises:
            InvalidRequest: amount is negative.
            CustomerNotFound: the customer does not exist.
            InsufficientBalance: the balance would go negative and the
                ledger does not allow it.
        """
        if amount < 0:
            raise InvalidRequest("Debit amount cannot be negative.")

        log = logger.bind(customer_id=str(customer_id), amount=str(amount))
        floor = None if self._allow_negative else ZERO

        customer = self._repo.debit_balance(str(customer_id), amount, floor=floor)
        if customer is None:
            current = self._repo.get_by_id(str(customer_id))
            if current is None:
                raise CustomerNotFound(f"Customer with ID {customer_id} not found.")
            log.warning("balance.debit_rejected", balance=str(current.balance))
            raise InsufficientBalance(
                f"Customer {customer_id} has insufficient balance "
                f"({current.balance}) for a debit of {amount}."
            )

        log.info("balance.debited", balance=str(customer.balance))
        return customer.balance
