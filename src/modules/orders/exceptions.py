"""Order domain exceptions.

Raised by the service layer.  The API exception handler maps them to
HTTP status codes through the core taxonomy.
"""

from __future__ import annotations

from modules.core.exceptions import Conflict, InvalidRequest, NotFound


class OrderNotFound(NotFound):
    """The requested order does not exist."""

    code = "order_not_found"


class InvalidOrderStatus(Conflict):
    """The transition is not allowed from the order's current status."""

    code = "invalid_status_transition"


class UnknownOrderStatus(InvalidRequest):
    """The requested status is not one of the order statuses."""

    code = "unknown_status"
