"""
Outbox handlers owned by the notifications app.
"""

from core import outbox

from .services import notification_service


@outbox.register_handler(outbox.NOTIFICATION_CREATE)
def create_notification(payload: dict) -> None:
    notification_service.create(
        recipient_id=payload['recipient_id'],
        notification_type=payload['notification_type'],
        message=payload['message'],
        entity_type=payload.get('entity_type') or '',
        entity_id=payload.get('entity_id'),
        metadata=payload.get('metadata'),
        priority=payload.get('priority') or 'normal',
        source_event=payload.get('event_id'),
    )
