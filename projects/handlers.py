"""
Outbox handlers owned by the projects app.
"""

import logging

from core import outbox

from .models import Activity, Comment, Project

logger = logging.getLogger(__name__)


@outbox.register_handler(outbox.ACTIVITY_RECORD)
def record_activity(payload: dict) -> None:
    """
    Write one Activity entry.

    Idempotent on the event id. References to rows deleted since the event
    was recorded are stored as null.
    """
    event_id = payload.get('event_id')
    if event_id and Activity.objects.filter(source_event=event_id).exists():
        return

    project_id = payload.get('project_id')
    if project_id and not Project.objects.filter(pk=project_id).exists():
        project_id = None

    comment_id = payload.get('comment_id')
    if comment_id and not Comment.objects.filter(pk=comment_id).exists():
        comment_id = None

    Activity.objects.create(
        user_id=payload['user_id'],
        activity_type=payload['activity_type'],
        project_id=project_id,
        comment_id=comment_id,
        target_user_id=payload.get('target_user_id'),
        metadata=payload.get('metadata') or {},
        source_event=event_id,
    )
    logger.debug(f"Activity recorded: {payload['activity_type']} user={payload['user_id']}")
