"""Domain events, their outbox payloads and the in-memory bus."""

from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

import pytest

from modules.orders.constants import OrderStatus
from modules.orders.events import OrderCreated, OrderStatusChanged
from modules.orders.models import Order
from shared.infrastructure.bus import InMemoryEventBus, UnknownEventType

pytestmark = pytest.mark.unit


class _Recorder:
    def __init__(self):
        self.events = []

    def handle(self, event):
        self.events.append(event)


def test_order_registers_and_clears_domain_events():
    order = Order(
        customer_id=uuid4(),
        total_price=Decimal("10.00"),
        discount=Decimal("0.00"),
        final_price=Decimal("10.00"),
    )

    assert order.domain_events == []

    event = OrderCreated(aggregate_id=order.id)
    order.add_domain_event(event)

    assert order.domain_events == [event]
    assert event.event_name == "OrderCreated"

    order.clear_domain_events()
    assert order.domain_events == []


def test_payload_is_json_safe_and_round_trips():
    event = OrderCreated(
        aggregate_id=uuid4(),
        customer_id=str(uuid4()),
        total_price="30.00",
        final_price="30.00",
        items=[{"product_id": str(uuid4()), "quantity": 3, "unit_price": "10.00"}],
    )

    payload = event.to_payload()

    assert payload["aggregate_id"] == str(event.aggregate_id)
    assert payload["event_id"] == str(event.event_id)
    assert payload["occurred_on"] == event.occurred_on.isoformat()
    assert payload["event_name"] == "OrderCreated"
    assert OrderCreated.from_payload(payload) == event


def test_bus_publishes_to_subscribers_of_the_event_type():
    bus = InMemoryEventBus()
    created, changed = _Recorder(), _Recorder()
    bus.subscribe(OrderCreated, created)
    bus.subscribe(OrderStatusChanged, changed)

    event = OrderStatusChanged(
        aggregate_id=uuid4(),
        old_status=OrderStatus.PROCESSING,
        new_status=OrderStatus.FAILED,
    )
    bus.publish(event)

    assert created.events == []
    assert changed.events == [event]


def test_subscribing_twice_does_not_duplicate_delivery():
    bus = InMemoryEventBus()
    recorder = _Recorder()
    bus.subscribe(OrderCreated, recorder)
    bus.subscribe(OrderCreated, recorder)

    bus.publish(OrderCreated(aggregate_id=uuid4()))

    assert len(recorder.events) == 1


def test_publish_payload_rebuilds_typed_event():
    bus = InMemoryEventBus()
    recorder = _Recorder()
    bus.subscribe(OrderStatusChanged, recorder)
    original = OrderStatusChanged(
        aggregate_id=uuid4(), old_status="PROCESSING", new_status="COMPLETED"
    )

    bus.publish_payload("OrderStatusChanged", original.to_payload())

    assert recorder.events == [original]


def test_publish_payload_unknown_type():
    with pytest.raises(UnknownEventType):
        InMemoryEventBus().publish_payload("OrderShipped", {})
