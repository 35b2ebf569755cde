"""Stock ledger: owns per-product quantity and its derived status."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING
from uuid import UUID

import structlog
from django.db import transaction

from modules.core.exceptions import InvalidRequest
from modules.products.exceptions import InsufficientStock, ProductNotFound

if TYPE_CHECKING:
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class StockReservation:
    """Outcome of a successful reservation."""

    product_id: UUID
    quantity: int
    stock: int
    status: str


class StockLedger:
    """Validates and applies stock decrements.

    ``reserve`` never checks and writes in two steps; the repository's
    conditional update is the check.  Callers that need several
    reservations to succeed or fail together wrap them in one
    ``transaction.atomic`` block (the order workflow does).
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    @transaction.atomic
    def reserve(self, product_id: UUID, quantity: int) -> StockReservation:
        """Take *quantity* units of a product.

        Raises:
            InvalidRequest: quantity is not positive.
            ProductNotFound: the product does not exist.
            InsufficientStock: fewer than *quantity* units are left.
        """
        if quantity < 1:
            raise InvalidRequest("Quantity must be at least 1.")

        log = logger.bind(product_id=str(product_id), quantity=quantity)

        product = self._repo.decrement_stock(str(product_id), quantity)
        if product is None:
            current = self._repo.get_by_id(str(product_id))
            if current is None:
                raise ProductNotFound(f"Product with ID {product_id} not found.")
            log.warning("stock.reservation_rejected", available=current.stock)
            raise InsufficientStock(
                f"Requested quantity ({quantity}) for product ID {product_id} "
                f"exceeds available stock ({current.stock})."
            )

        log.info("stock.reserved", remaining=product.stock, status=product.status)
        return StockReservation(
            product_id=product.id,
            quantity=quantity,
            stock=product.stock,
            status=product.status,
        )
