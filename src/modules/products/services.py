"""Product service layer (Use Cases).

Covers the catalogue operations around the stock ledger: listing,
keyword search, and partial updates.  Status is never set independently
of stock: updates go through ``derive_status`` via ``Product.save()``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

import structlog
from django.db import models, transaction

from modules.core.exceptions import InvalidRequest
from modules.products.exceptions import InvalidProductUpdate, ProductNotFound
from modules.products.models import ProductStatus

if TYPE_CHECKING:
    from modules.products.dtos import UpdateProductDTO
    from modules.products.models import Product
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def update_product(self, id: str, dto: UpdateProductDTO) -> Product:
        """Apply the supplied fields to an existing product.

        The row is locked first so a concurrent order cannot have its
        stock decrement overwritten by this write.  ``stock == 0`` always
        ends as SOLD; asking for SOLD while stock remains is rejected.

        Raises:
            ProductNotFound: if the product does not exist.
            InvalidProductUpdate: SOLD requested with stock left.
        """
        product = self._repo.get_for_update(id)
        if not product:
            raise ProductNotFound(f"Product {id} not found.")

        log = logger.bind(product_id=str(id))
        changes = dto.changes()

        resulting_stock = changes.get("stock", product.stock)
        if changes.get("status") == ProductStatus.SOLD and resulting_stock > 0:
            log.warning("product.sold_with_stock_rejected", stock=resulting_stock)
            raise InvalidProductUpdate(
                "Status SOLD is only valid when stock is 0."
            )

        for field, value in changes.items():
            setattr(product, field, value)

        product = self._repo.save(product)
        log.info("product.updated", fields=sorted(changes), status=product.status)
        return product

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[Product]":
        """Return products, optionally filtered."""
        return self._repo.list(filters)

    def search_products(self, term: Optional[str]) -> "models.QuerySet[Product]":
        """Keyword search over IN-STOCK products.

        Raises:
            InvalidRequest: if no search term is given.
        """
        if not term or not term.strip():
            raise InvalidRequest("Product name is required for searching.")
        return self._repo.search_in_stock(term.strip())

    def get_product(self, id: str) -> Product:
        """Retrieve a single product by ID.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound(f"Product {id} not found.")
        return product
