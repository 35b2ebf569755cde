"""Unit tests for the OutboxEvent model.

Covers:
- Default status, counters and UUIDv7 id.
- JSON payload round-trip through the database.
- mark_as_published() and mark_as_failed(error).
"""

from __future__ import annotations

import uuid

import pytest

from modules.core.models import EventStatus, OutboxEvent

pytestmark = pytest.mark.unit


def _make_event(**overrides) -> OutboxEvent:
    defaults = {
        "event_type": "OrderCreated",
        "payload": {"aggregate_id": "abc-123", "final_price": "99.90"},
        "aggregate_id": "abc-123",
        "topic": "orders",
    }
    defaults.update(overrides)
    return OutboxEvent.objects.create(**defaults)


class TestOutboxEventCreation:
    def test_defaults(self):
        event = _make_event()
        event.refresh_from_db()

        assert event.status == EventStatus.PENDING
        assert event.processed_at is None
        assert event.error_message is None
        assert event.retry_count == 0

    def test_id_is_uuid7(self):
        event = _make_event()
        assert isinstance(event.id, uuid.UUID)
        assert event.id.version == 7

    def test_payload_persisted(self):
        payload = {"items": [{"product_id": "p1", "quantity": 2}], "discount": "0.00"}
        event = _make_event(payload=payload)
        event.refresh_from_db()
        assert event.payload == payload

    def test_str(self):
        event = _make_event()
        assert str(event) == "OrderCreated [PENDING] (abc-123)"


class TestOutboxEventTransitions:
    def test_mark_as_published(self):
        event = _make_event()
        original_updated_at = event.updated_at

        event.mark_as_published()
        event.refresh_from_db()

        assert event.status == EventStatus.PUBLISHED
        assert event.processed_at is not None
        assert event.updated_at >= original_updated_at

    def test_mark_as_failed_counts_retries(self):
        event = _make_event()

        event.mark_as_failed("handler exploded")
        event.mark_as_failed("handler exploded again")
        event.refresh_from_db()

        assert event.status == EventStatus.FAILED
        assert event.error_message == "handler exploded again"
        assert event.retry_count == 2
