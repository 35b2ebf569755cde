"""Asynchronous tasks for the core module."""

from __future__ import annotations

import structlog
from celery import shared_task
from django.db import transaction

from modules.core.models import EventStatus, OutboxEvent

logger = structlog.get_logger(__name__)

OUTBOX_BATCH_SIZE = 100


@shared_task(name="core.publish_outbox_events")
def publish_outbox_events(batch_size: int = OUTBOX_BATCH_SIZE) -> dict:
    """Deliver pending outbox rows to the in-process event bus.

    Each row is locked while it is handled so two workers never publish
    the same event.  A handler failure marks only that row as FAILED.
    """
    from shared.infrastructure.bus import event_bus

    published = failed = 0
    with transaction.atomic():
        pending = list(
            OutboxEvent.objects.select_for_update(skip_locked=True)
            .filter(status=EventStatus.PENDING)
            .order_by("created_at")[:batch_size]
        )
        for outbox_event in pending:
            log = logger.bind(
                outbox_event_id=str(outbox_event.id),
                event_type=outbox_event.event_type,
            )
            try:
                event_bus.publish_payload(outbox_event.event_type, outbox_event.payload)
            except Exception as exc:
                log.exception("outbox.publish_failed")
                outbox_event.mark_as_failed(str(exc))
                failed += 1
                continue
            outbox_event.mark_as_published()
            published += 1

    logger.info("outbox.batch_processed", published=published, failed=failed)
    return {"published": published, "failed": failed}
