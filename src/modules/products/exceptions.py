"""Product domain exceptions.

Raised by the service layer and the stock ledger.  The API exception
handler maps them to HTTP status codes through the core taxonomy.
"""

from __future__ import annotations

from modules.core.exceptions import InvalidRequest, NotFound


class ProductNotFound(NotFound):
    """The requested product does not exist."""

    code = "product_not_found"


class InsufficientStock(InvalidRequest):
    """The requested quantity exceeds the product's current stock."""

    code = "insufficient_stock"


class InvalidProductUpdate(InvalidRequest):
    """A partial update carries no fields or an inconsistent status."""
