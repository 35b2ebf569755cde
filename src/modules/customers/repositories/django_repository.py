"""Django ORM implementation of the Customer repository.

Satisfies ``ICustomerRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: methods return ``None``
instead of raising, and the caller decides what a missing row means.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import models, transaction
from django.db.models import F, Q
from django.utils import timezone

from modules.customers.models import Customer
from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


class CustomerDjangoRepository(ICustomerRepository):
    """Concrete Customer repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Customer]:
        """Retrieve a customer by primary key.

        Returns ``None`` for non-existent or invalid IDs (e.g. malformed UUID).
        """
        try:
            return Customer.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[Customer]":
        queryset = Customer.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    def search_by_name(self, term: str) -> "models.QuerySet[Customer]":
        return Customer.objects.filter(
            Q(first_name__icontains=term) | Q(last_name__icontains=term)
        )

    @transaction.atomic
    def save(self, entity: Customer) -> Customer:
        """Persist (create or update) a customer."""
        is_new = entity._state.adding
        entity.save()
        logger.info("customer.saved", customer_id=str(entity.id), is_new=is_new)
        return entity

    @transaction.atomic
    def debit_balance(
        self, id: str, amount: Decimal, floor: Optional[Decimal] = None
    ) -> Optional[Customer]:
        """``balance = balance - amount`` as a single UPDATE.

        Concurrent debits on the same customer serialize on the row lock
        the UPDATE takes, so none of them is lost.
        """
        try:
            queryset = Customer.objects.filter(id=id)
            if floor is not None:
                queryset = queryset.filter(balance__gte=floor + amount)
            matched = queryset.update(
                balance=F("balance") - amount,
                updated_at=timezone.now(),
            )
        except (ValueError, ValidationError):
            return None
        if not matched:
            return None
        return Customer.objects.get(id=id)
