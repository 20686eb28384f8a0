"""
Notification Models for the in-app notification inbox.

A notification is written once by the delivery sink and afterwards only has
its read state flipped, or is deleted by its recipient. The subject of a
notification is a weak reference (entity_type + entity_id) so notifications
survive deletion of the thing they point at.
"""

import uuid

from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class Notification(models.Model):
    """
    Individual in-app notification for one recipient.
    """
    NOTIFICATION_TYPES = [
        ('new_message', _('New Message')),
        ('proposal_received', _('Proposal Received')),
        ('proposal_accepted', _('Proposal Accepted')),
        ('contract_created', _('Contract Created')),
        ('payment_received', _('Payment Received')),
        ('milestone_approved', _('Milestone Approved')),
        ('project_completed', _('Project Completed')),
        ('review_received', _('Review Received')),
        ('project_invitation', _('Project Invitation')),
        ('system', _('System')),
        ('new_project', _('New Project')),
        ('new_application', _('New Application')),
        ('application_pending', _('Application Pending')),
        ('application_shortlisted', _('Application Shortlisted')),
        ('application_accepted', _('Application Accepted')),
        ('application_rejected', _('Application Rejected')),
        ('new_comment', _('New Comment')),
    ]

    ENTITY_TYPES = [
        ('project', _('Project')),
        ('application', _('Application')),
        ('proposal', _('Proposal')),
        ('contract', _('Contract')),
        ('message', _('Message')),
        ('payment', _('Payment')),
        ('review', _('Review')),
        ('comment', _('Comment')),
    ]

    PRIORITY_CHOICES = [
        ('low', _('Low')),
        ('normal', _('Normal')),
        ('high', _('High')),
    ]

    # Identification
    uuid = models.UUIDField(default=uuid.uuid4, editable=False, unique=True)

    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='notifications',
        help_text=_("User who receives this notification")
    )
    notification_type = models.CharField(
        max_length=50,
        choices=NOTIFICATION_TYPES,
        default='system',
        db_index=True
    )

    # Content
    message = models.TextField()
    metadata = models.JSONField(default=dict, blank=True)

    # Weak reference to the subject
    entity_type = models.CharField(max_length=20, choices=ENTITY_TYPES, blank=True)
    entity_id = models.PositiveBigIntegerField(null=True, blank=True)

    priority = models.CharField(
        max_length=10,
        choices=PRIORITY_CHOICES,
        default='normal'
    )

    # Read tracking
    is_read = models.BooleanField(default=False, db_index=True)
    read_at = models.DateTimeField(null=True, blank=True)

    # Idempotency key: the outbox event that produced this row
    source_event = models.UUIDField(null=True, blank=True, unique=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['recipient', '-created_at'], name='notif_recipient_created_idx'),
            models.Index(fields=['recipient', 'is_read'], name='notif_recipient_read_idx'),
            models.Index(fields=['notification_type', 'created_at'], name='notif_type_created_idx'),
        ]
        verbose_name = _('Notification')
        verbose_name_plural = _('Notifications')

    def __str__(self):
        return f"{self.notification_type} -> {self.recipient}"

    def mark_as_read(self):
        """Mark notification as read."""
        if not self.is_read:
            self.is_read = True
            self.read_at = timezone.now()
            self.save(update_fields=['is_read', 'read_at'])

    def mark_as_unread(self):
        """Mark notification as unread."""
        if self.is_read:
            self.is_read = False
            self.read_at = None
            self.save(update_fields=['is_read', 'read_at'])
