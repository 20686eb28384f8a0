"""
Outbox - side effects recorded with the mutation that caused them.

Services call ``record()`` inside their transaction, so an event exists if
and only if the primary change committed. Once the transaction has closed
they call ``dispatch()``, which hands each event to the Celery dispatcher.
Delivery is at-least-once: a failed or lost dispatch leaves the event
pending/failed and the periodic sweep picks it up again.

Handlers are registered per event type by the app that owns the side
effect:

    from core import outbox

    @outbox.register_handler('notification.create')
    def create_notification(payload):
        ...

Every payload handed to a handler carries ``event_id``, the event's UUID,
which handlers use as an idempotency key.
"""

import logging
from typing import Callable, Dict, Iterable

from django.db import transaction

from .models import OutboxEvent

logger = logging.getLogger(__name__)

NOTIFICATION_CREATE = 'notification.create'
ACTIVITY_RECORD = 'activity.record'

_handlers: Dict[str, Callable[[dict], None]] = {}


class UnknownEventType(Exception):
    """Raised when no handler is registered for an event type."""


def register_handler(event_type: str):
    """Decorator registering ``func(payload)`` as the handler for ``event_type``."""
    def decorator(func):
        _handlers[event_type] = func
        return func
    return decorator


def get_handler(event_type: str) -> Callable[[dict], None]:
    try:
        return _handlers[event_type]
    except KeyError:
        raise UnknownEventType(event_type)


def record(event_type: str, **payload) -> OutboxEvent:
    """Persist a side effect. Call inside the transaction of the mutation."""
    return OutboxEvent.objects.create(event_type=event_type, payload=payload)


def dispatch(events: Iterable[OutboxEvent]) -> None:
    """Queue delivery of ``events``."""
    from .tasks import dispatch_outbox_event

    for event in events:
        dispatch_outbox_event.delay(event.pk)


def deliver(event: OutboxEvent) -> None:
    """
    Run the handler for ``event`` and mark it dispatched.

    The handler and the status change commit together; a handler error
    rolls back both and propagates to the caller.
    """
    handler = get_handler(event.event_type)
    payload = dict(event.payload, event_id=str(event.uuid))
    with transaction.atomic():
        handler(payload)
        event.mark_dispatched()
    logger.debug(f"Outbox event delivered: {event.event_type} ({event.uuid})")
