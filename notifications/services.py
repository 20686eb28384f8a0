"""
Notification Services for the in-app notification inbox.

Producers never write notifications directly. They call
``notification_service.enqueue()`` inside their transaction, which records a
``notification.create`` outbox event; the outbox dispatcher later runs
``notification_service.create()``, the single write path for notifications.
"""

import logging
from typing import Optional

from django.db.models import QuerySet
from django.utils import timezone

from core import outbox
from core.exceptions import InvalidInputError, ResourceNotFoundError

from .models import Notification

logger = logging.getLogger(__name__)

NOTIFICATION_TYPE_VALUES = {value for value, _ in Notification.NOTIFICATION_TYPES}
ENTITY_TYPE_VALUES = {value for value, _ in Notification.ENTITY_TYPES}
PRIORITY_VALUES = {value for value, _ in Notification.PRIORITY_CHOICES}


class NotificationService:
    """
    Main notification service.

    Handles:
    - Queuing notifications through the outbox
    - Creating notifications (the delivery sink)
    - Recipient inbox operations: list, read state, delete
    """

    def enqueue(
        self,
        recipient_id: int,
        notification_type: str,
        message: str,
        entity_type: Optional[str] = None,
        entity_id: Optional[int] = None,
        metadata: Optional[dict] = None,
        priority: str = 'normal',
    ):
        """Record a ``notification.create`` event. Call inside the mutation's transaction."""
        if notification_type not in NOTIFICATION_TYPE_VALUES:
            raise ValueError(f"Unknown notification type: {notification_type}")

        return outbox.record(
            outbox.NOTIFICATION_CREATE,
            recipient_id=recipient_id,
            notification_type=notification_type,
            message=message,
            entity_type=entity_type or '',
            entity_id=entity_id,
            metadata=metadata or {},
            priority=priority,
        )

    def create(
        self,
        recipient_id: int,
        notification_type: str,
        message: str,
        entity_type: str = '',
        entity_id: Optional[int] = None,
        metadata: Optional[dict] = None,
        priority: str = 'normal',
        source_event: Optional[str] = None,
    ) -> Notification:
        """
        Write one notification.

        Args:
            recipient_id: User receiving the notification
            notification_type: One of Notification.NOTIFICATION_TYPES
            message: Display text
            entity_type: Kind of the referenced entity, if any
            entity_id: Id of the referenced entity, if any
            metadata: Free-form extra data
            priority: low, normal or high
            source_event: Outbox event id; a second delivery of the same
                event returns the existing notification

        Returns:
            The notification
        """
        if notification_type not in NOTIFICATION_TYPE_VALUES:
            raise ValueError(f"Unknown notification type: {notification_type}")
        if entity_type and entity_type not in ENTITY_TYPE_VALUES:
            raise ValueError(f"Unknown entity type: {entity_type}")
        if priority not in PRIORITY_VALUES:
            raise ValueError(f"Unknown priority: {priority}")

        if source_event:
            existing = Notification.objects.filter(source_event=source_event).first()
            if existing is not None:
                return existing

        notification = Notification.objects.create(
            recipient_id=recipient_id,
            notification_type=notification_type,
            message=message,
            entity_type=entity_type or '',
            entity_id=entity_id,
            metadata=metadata or {},
            priority=priority,
            source_event=source_event,
        )
        logger.info(
            f"Notification created: {notification_type} -> user {recipient_id} "
            f"(id={notification.pk})"
        )
        return notification

    # ------------------------------------------------------------------
    # Recipient operations
    # ------------------------------------------------------------------

    def list_for(self, user, read_filter: Optional[str] = None) -> QuerySet:
        """The user's notifications, newest first, optionally by read state."""
        queryset = Notification.objects.filter(recipient=user)
        if read_filter in (None, '', 'all'):
            return queryset
        if read_filter == 'unread':
            return queryset.filter(is_read=False)
        if read_filter == 'read':
            return queryset.filter(is_read=True)
        raise InvalidInputError('Invalid filter', field='filter')

    def get_for(self, user, notification_id) -> Notification:
        """Other users' notifications are reported as missing."""
        try:
            return Notification.objects.get(pk=notification_id, recipient=user)
        except (Notification.DoesNotExist, ValueError, TypeError):
            raise ResourceNotFoundError('Notification', notification_id)

    def get_unread_count(self, user) -> int:
        """Get the count of unread notifications for a user."""
        return Notification.objects.filter(recipient=user, is_read=False).count()

    def mark_read(self, user, notification_id) -> Notification:
        notification = self.get_for(user, notification_id)
        notification.mark_as_read()
        return notification

    def mark_unread(self, user, notification_id) -> Notification:
        notification = self.get_for(user, notification_id)
        notification.mark_as_unread()
        return notification

    def mark_all_as_read(self, user) -> int:
        """Mark all notifications as read for a user."""
        updated = Notification.objects.filter(
            recipient=user,
            is_read=False,
        ).update(
            is_read=True,
            read_at=timezone.now(),
        )
        return updated

    def delete(self, user, notification_id) -> None:
        notification = self.get_for(user, notification_id)
        notification.delete()
        logger.info(f"Notification deleted: id={notification_id} by user {user.pk}")


# Singleton instance
notification_service = NotificationService()
