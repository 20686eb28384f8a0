"""
Outbox Dispatch Tasks

This module provides the Celery tasks that deliver outbox events:
- dispatch_outbox_event: deliver a single event, retrying with backoff
- dispatch_pending_events: periodic sweep re-queuing undelivered events

A handler failure never affects the mutation that produced the event;
the event stays in the outbox until a later attempt succeeds.
"""

import logging
from datetime import timedelta
from typing import Any, Dict

from celery import shared_task
from django.conf import settings
from django.db.models import Q
from django.utils import timezone

from core import outbox
from core.models import OutboxEvent

logger = logging.getLogger(__name__)

# Events failing this many times are left for manual inspection
MAX_DELIVERY_ATTEMPTS = 10


@shared_task(
    bind=True,
    name='core.tasks.dispatch_outbox_event',
    max_retries=5,
    default_retry_delay=30,
    retry_backoff=True,
    retry_backoff_max=600,
    retry_jitter=True,
    acks_late=True,
)
def dispatch_outbox_event(self, event_id: int) -> Dict[str, Any]:
    """
    Deliver one outbox event.

    Args:
        event_id: Primary key of the OutboxEvent

    Returns:
        dict: Delivery status
    """
    event = OutboxEvent.objects.filter(pk=event_id).first()

    if event is None:
        # The producing transaction may not have committed yet
        logger.warning(f"Outbox event {event_id} not visible yet, retrying")
        raise self.retry(countdown=5)

    if event.status == OutboxEvent.Status.DISPATCHED:
        return {'status': 'already_dispatched', 'event_id': event_id}

    try:
        outbox.deliver(event)
    except outbox.UnknownEventType as e:
        logger.error(f"No handler registered for outbox event type {e}")
        event.mark_failed(f"No handler for {event.event_type}")
        return {'status': 'failed', 'event_id': event_id, 'error': 'unknown_event_type'}
    except Exception as e:
        logger.exception(f"Outbox event {event_id} ({event.event_type}) failed: {e}")
        event.mark_failed(str(e))
        raise self.retry(exc=e)

    return {'status': 'dispatched', 'event_id': event_id}


@shared_task(name='core.tasks.dispatch_pending_events')
def dispatch_pending_events(batch_size: int = 500) -> Dict[str, Any]:
    """
    Re-queue events that are still pending or failed after the grace period.

    Returns:
        dict: Number of events queued
    """
    grace = getattr(settings, 'OUTBOX_RETRY_GRACE_SECONDS', 60)
    cutoff = timezone.now() - timedelta(seconds=grace)

    stale = OutboxEvent.objects.filter(
        Q(status=OutboxEvent.Status.PENDING) | Q(status=OutboxEvent.Status.FAILED),
        created_at__lte=cutoff,
        attempts__lt=MAX_DELIVERY_ATTEMPTS,
    ).order_by('created_at').values_list('pk', flat=True)[:batch_size]

    queued = 0
    for event_id in stale:
        dispatch_outbox_event.delay(event_id)
        queued += 1

    if queued:
        logger.info(f"Outbox sweep queued {queued} events")

    return {'queued': queued}
