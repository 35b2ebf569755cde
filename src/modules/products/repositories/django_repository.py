"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: methods return ``None``
instead of raising, and the caller decides what a missing row means.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import models, transaction
from django.db.models import F
from django.utils import timezone

from modules.products.models import Product, ProductStatus, derive_status
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Product]:
        """Retrieve a product by primary key.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return Product.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_for_update(self, id: str) -> Optional[Product]:
        try:
            return Product.objects.select_for_update().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> "models.QuerySet[Product]":
        """List products with optional Django ORM look-ups.

        Examples of valid filters::

            {"status": "IN-STOCK"}
            {"name__icontains": "widget"}
        """
        queryset = Product.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    def search_in_stock(self, term: str) -> "models.QuerySet[Product]":
        return Product.objects.filter(
            name__icontains=term, status=ProductStatus.IN_STOCK
        ).order_by("name")

    @transaction.atomic
    def save(self, entity: Product) -> Product:
        """Persist (create or update) a product."""
        entity.save()
        logger.info("product.saved", product_id=str(entity.id))
        return entity

    @transaction.atomic
    def decrement_stock(self, id: str, quantity: int) -> Optional[Product]:
        """Conditional decrement: ``stock = stock - q WHERE stock >= q``.

        The check and the write are a single statement, so two concurrent
        orders can never both consume the last units.  The status is then
        re-derived on the locked row inside the same transaction.
        """
        try:
            matched = Product.objects.filter(id=id, stock__gte=quantity).update(
                stock=F("stock") - quantity,
                updated_at=timezone.now(),
            )
        except (ValueError, ValidationError):
            return None
        if not matched:
            return None

        product = Product.objects.select_for_update().get(id=id)
        if product.status != derive_status(product.stock, product.status):
            product.save(update_fields=["status"])
        return product
