"""Product model and stock-derived status.

Business rules implemented:
- Price cannot be negative.
- Stock cannot be negative (``PositiveIntegerField`` + check constraint).
- ``status`` is SOLD if and only if ``stock`` is zero.  ``derive_status``
  is the only place that rule lives; ``Product.save()`` and the stock
  ledger both go through it.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

import structlog
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel

logger = structlog.get_logger(__name__)


class ProductStatus(models.TextChoices):
    IN_STOCK = "IN-STOCK", "In stock"
    RESERVED = "RESERVED", "Reserved"
    SOLD = "SOLD", "Sold"


def derive_status(stock: int, current: Optional[str] = None) -> str:
    """Return the status a product with *stock* units must carry.

    Zero stock is always SOLD.  With stock left, RESERVED is kept when it
    is the current (or requested) status; anything else becomes IN-STOCK.
    """
    if stock <= 0:
        return ProductStatus.SOLD
    if current == ProductStatus.RESERVED:
        return ProductStatus.RESERVED
    return ProductStatus.IN_STOCK


class Product(BaseModel):
    """Product aggregate root."""

    name = models.CharField(max_length=255)
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    stock = models.PositiveIntegerField(default=0)
    status = models.CharField(
        max_length=20,
        choices=ProductStatus.choices,
        default=ProductStatus.SOLD,
    )

    class Meta:
        db_table = "products"
        ordering = ["name"]
        indexes = [
            models.Index(fields=["status"], name="products_status_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gte=0),
                name="products_price_non_negative",
            ),
            models.CheckConstraint(
                condition=models.Q(stock__gte=0),
                name="products_stock_non_negative",
            ),
        ]

    def clean(self) -> None:
        super().clean()
        if self.price is not None and self.price < 0:
            raise ValidationError({"price": "Price cannot be negative."})

    def save(self, *args, **kwargs) -> None:
        is_new = self._state.adding
        self.status = derive_status(self.stock, self.status)
        super().save(*args, **kwargs)
        if is_new:
            logger.info(
                "product.created",
                product_id=str(self.id),
                name=self.name,
                stock=self.stock,
            )

    def __str__(self) -> str:
        return f"{self.name} ({self.status})"
