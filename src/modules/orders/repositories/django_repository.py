"""Django ORM implementation of the Order repository.

Satisfies ``IOrderRepository`` using Django's QuerySet API.  Pending
domain events are written to the outbox by ``save()`` in the same
transaction as the order row, so an event exists only if the order does.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import models, transaction

from modules.core.models import OutboxEvent
from modules.orders.models import Order, OrderItem
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)

OUTBOX_TOPIC = "orders"


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Create (aggregate root + children)
    # ------------------------------------------------------------------

    @transaction.atomic
    def create(self, data: Dict[str, Any]) -> Order:
        """Insert an order and its items in one transaction."""
        order = Order(
            customer_id=data["customer_id"],
            total_price=data["total_price"],
            discount=data["discount"],
            final_price=data["final_price"],
            redemption_code=data.get("redemption_code"),
        )
        order.save()

        items = data.get("items", [])
        OrderItem.objects.bulk_create(
            [
                OrderItem(
                    order=order,
                    product_id=item_data["product_id"],
                    quantity=item_data["quantity"],
                    unit_price=item_data["unit_price"],
                )
                for item_data in items
            ]
        )

        logger.info("order.inserted", order_id=str(order.id), item_count=len(items))
        return order

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def _with_relations(self) -> "models.QuerySet[Order]":
        return Order.objects.select_related("customer").prefetch_related("items__product")

    def get_by_id(self, id: str) -> Optional[Order]:
        """Retrieve an order with eager-loaded relations.

        ``select_related`` for the customer FK (single JOIN) and
        ``prefetch_related`` for items and item products.  Returns
        ``None`` for non-existent or invalid IDs.
        """
        try:
            return self._with_relations().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_for_update(self, id: str) -> Optional[Order]:
        """Retrieve an order with a row-level lock (SELECT FOR UPDATE)."""
        try:
            return Order.objects.select_for_update().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> "models.QuerySet[Order]":
        """List orders with optional filters and eager-loaded relations.

        Supported filter keys include ``status`` and ``customer_id``.
        """
        queryset = self._with_relations()
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    # ------------------------------------------------------------------
    # Save (IRepository contract)
    # ------------------------------------------------------------------

    @transaction.atomic
    def save(self, entity: Order) -> Order:
        """Persist an order and flush its pending domain events to the outbox."""
        entity.save()

        events = entity.domain_events
        OutboxEvent.objects.bulk_create(
            [
                OutboxEvent(
                    event_type=event.event_name,
                    aggregate_id=str(event.aggregate_id),
                    payload=event.to_payload(),
                    topic=OUTBOX_TOPIC,
                )
                for event in events
            ]
        )
        entity.clear_domain_events()

        logger.info("order.saved", order_id=str(entity.id), event_count=len(events))
        return entity
