"""Django ORM implementation of the discount code repository."""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import models, transaction

from modules.discounts.models import DiscountCode
from modules.discounts.repositories.interfaces import IDiscountCodeRepository

logger = structlog.get_logger(__name__)


class DiscountCodeDjangoRepository(IDiscountCodeRepository):
    """Concrete discount code repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[DiscountCode]:
        try:
            return DiscountCode.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_by_code(self, code: str) -> Optional[DiscountCode]:
        return DiscountCode.objects.filter(code__iexact=code).first()

    def code_exists(self, code: str, exclude_id: Optional[str] = None) -> bool:
        queryset = DiscountCode.objects.filter(code__iexact=code)
        if exclude_id is not None:
            queryset = queryset.exclude(id=exclude_id)
        return queryset.exists()

    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[DiscountCode]":
        queryset = DiscountCode.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    @transaction.atomic
    def save(self, entity: DiscountCode) -> DiscountCode:
        is_new = entity._state.adding
        entity.save()
        logger.info("discount_code.saved", discount_code_id=str(entity.id), is_new=is_new)
        return entity
