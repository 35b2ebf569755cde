"""Discount code model.

Business rules implemented:
- ``code`` is unique case-insensitively (``UniqueConstraint`` on
  ``Lower("code")``), so ``SAVE10`` and ``save10`` cannot coexist.
- ``discount`` is a fixed non-negative amount.
- Only ``active`` codes are redeemable; ``expired_at`` is stored and
  only enforced when the workflow policy asks for it.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.db.models.functions import Lower
from django.utils import timezone

from modules.core.models import BaseModel


class DiscountCodeStatus(models.TextChoices):
    ACTIVE = "active", "Active"
    INACTIVE = "inactive", "Inactive"
    EXPIRED = "expired", "Expired"


class DiscountCode(BaseModel):
    code = models.CharField(max_length=64)
    discount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    status = models.CharField(
        max_length=20,
        choices=DiscountCodeStatus.choices,
        default=DiscountCodeStatus.ACTIVE,
    )
    expired_at = models.DateTimeField(null=True, blank=True, default=None)

    class Meta:
        db_table = "discount_codes"
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                Lower("code"),
                name="discount_codes_code_ci_unique",
            ),
            models.CheckConstraint(
                condition=models.Q(discount__gte=0),
                name="discount_codes_discount_non_negative",
            ),
        ]

    @property
    def is_active(self) -> bool:
        return self.status == DiscountCodeStatus.ACTIVE

    def has_expired(self, now=None) -> bool:
        if self.expired_at is None:
            return False
        return self.expired_at <= (now or timezone.now())

    def __str__(self) -> str:
        return f"{self.code} ({self.status})"
