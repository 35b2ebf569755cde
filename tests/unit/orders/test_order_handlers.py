"""Unit tests for Orders event handlers."""

from __future__ import annotations

import logging
from uuid import uuid4

import pytest

from modules.orders.events import OrderCreated, OrderStatusChanged
from modules.orders.handlers import OrderCreatedHandler, OrderStatusChangedHandler

pytestmark = pytest.mark.unit


def test_order_created_handler_logs_order_id(caplog):
    order_id = uuid4()
    with caplog.at_level(logging.INFO):
        OrderCreatedHandler().handle(OrderCreated(aggregate_id=order_id, final_price="9.00"))

    assert any(str(order_id) in record.getMessage() for record in caplog.records)


def test_status_changed_handler_logs_transition(caplog):
    order_id = uuid4()
    event = OrderStatusChanged(aggregate_id=order_id, old_status="PROCESSING", new_status="FAILED")
    with caplog.at_level(logging.INFO):
        OrderStatusChangedHandler().handle(event)

    messages = " ".join(record.getMessage() for record in caplog.records)
    assert str(order_id) in messages
    assert "FAILED" in messages
