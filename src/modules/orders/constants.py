"""Order domain constants.

Status choices and the transitions the order state machine allows.
An order is created in PROCESSING and moves once, to COMPLETED or
FAILED; both are terminal.
"""

from django.db import models


class OrderStatus(models.TextChoices):
    PROCESSING = "PROCESSING", "Processing"
    COMPLETED = "COMPLETED", "Completed"
    FAILED = "FAILED", "Failed"


VALID_TRANSITIONS: dict[str, set[str]] = {
    OrderStatus.PROCESSING: {OrderStatus.COMPLETED, OrderStatus.FAILED},
    OrderStatus.COMPLETED: set(),
    OrderStatus.FAILED: set(),
}

TERMINAL_STATES: set[str] = {OrderStatus.COMPLETED, OrderStatus.FAILED}


class DebitBasis(models.TextChoices):
    """Which order amount is taken from the customer's balance."""

    TOTAL_PRICE = "total_price", "Total price (before discount)"
    FINAL_PRICE = "final_price", "Final price (after discount)"
