"""Customer domain exceptions.

Raised by the service layer and the balance ledger.  The API exception
handler maps them to HTTP status codes through the core taxonomy.
"""

from __future__ import annotations

from modules.core.exceptions import InvalidRequest, NotFound


class CustomerNotFound(NotFound):
    """The requested customer does not exist."""

    code = "customer_not_found"


class InsufficientBalance(InvalidRequest):
    """The debit would take the balance below zero and that is not allowed."""

    code = "insufficient_balance"
