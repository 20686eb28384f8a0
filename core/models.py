"""
Core Models - Base classes for all apps

This module provides reusable base model classes used across the application:
- TimestampedModel: Adds created_at/updated_at timestamps
- OutboxEvent: Persisted side effects awaiting delivery by the dispatcher
"""

import uuid

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class TimestampedModel(models.Model):
    """
    Abstract base class that adds timestamp fields.

    Provides:
    - created_at: Automatically set on creation
    - updated_at: Automatically updated on save

    Usage:
        class MyModel(TimestampedModel):
            # your fields here
            pass
    """

    created_at = models.DateTimeField(
        auto_now_add=True,
        db_index=True,
        help_text='Timestamp when record was created'
    )

    updated_at = models.DateTimeField(
        auto_now=True,
        help_text='Timestamp when record was last updated'
    )

    class Meta:
        abstract = True
        get_latest_by = 'created_at'
        ordering = ['-created_at']


class OutboxEvent(models.Model):
    """
    A side effect (notification, activity entry) recorded in the same
    transaction as the mutation that caused it.

    The dispatcher delivers each event at least once; handlers must
    tolerate being run again for an event that already succeeded.
    """

    class Status(models.TextChoices):
        PENDING = 'pending', _('Pending')
        DISPATCHED = 'dispatched', _('Dispatched')
        FAILED = 'failed', _('Failed')

    uuid = models.UUIDField(default=uuid.uuid4, editable=False, unique=True)
    event_type = models.CharField(max_length=100, db_index=True)
    payload = models.JSONField(default=dict, blank=True)

    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True
    )
    attempts = models.PositiveIntegerField(default=0)
    last_error = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    dispatched_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        verbose_name = _('Outbox Event')
        verbose_name_plural = _('Outbox Events')
        ordering = ['created_at']
        indexes = [
            models.Index(fields=['status', 'created_at'], name='outbox_status_created_idx'),
        ]

    def __str__(self):
        return f"{self.event_type} [{self.status}]"

    def mark_dispatched(self):
        """Mark event as delivered."""
        self.status = self.Status.DISPATCHED
        self.dispatched_at = timezone.now()
        self.attempts += 1
        self.last_error = ''
        self.save(update_fields=['status', 'dispatched_at', 'attempts', 'last_error'])

    def mark_failed(self, error_message: str):
        """Record a failed delivery attempt."""
        self.status = self.Status.FAILED
        self.attempts += 1
        self.last_error = error_message
        self.save(update_fields=['status', 'attempts', 'last_error'])
