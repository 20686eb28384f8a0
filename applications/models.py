"""
Applications Models - Freelancer applications to projects.

This module defines:
- Application: a freelancer's bid on a project, reviewed by the owner
- ApplicationAttachment: files uploaded with an application

Applications are never hard-deleted on their own; they go away only with
their project.
"""

import os
import uuid

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _

from core.models import TimestampedModel
from core.storage import private_storage
from core.validators import application_upload_to


class Application(TimestampedModel):
    """
    Freelancer application to a project.

    One application per (project, freelancer), enforced by a unique
    constraint.
    """

    class ApplicationStatus(models.TextChoices):
        PENDING = 'pending', _('Pending')
        SHORTLISTED = 'shortlisted', _('Shortlisted')
        ACCEPTED = 'accepted', _('Accepted')
        REJECTED = 'rejected', _('Rejected')

    uuid = models.UUIDField(default=uuid.uuid4, editable=False, unique=True)

    project = models.ForeignKey(
        'projects.Project',
        on_delete=models.CASCADE,
        related_name='applications'
    )
    freelancer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='project_applications'
    )

    # Proposal
    cover_letter = models.TextField()
    proposed_budget = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(0)]
    )
    estimated_duration = models.CharField(max_length=100, blank=True)

    # Review
    status = models.CharField(
        max_length=20,
        choices=ApplicationStatus.choices,
        default=ApplicationStatus.PENDING,
        db_index=True
    )
    status_changed_at = models.DateTimeField(null=True, blank=True)
    client_notes = models.TextField(
        blank=True,
        help_text=_('Private notes of the project owner')
    )
    is_archived = models.BooleanField(default=False)

    class Meta:
        verbose_name = _('Application')
        verbose_name_plural = _('Applications')
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['project', 'freelancer'],
                name='unique_application_per_project'
            ),
        ]
        indexes = [
            models.Index(fields=['project', '-created_at'], name='app_project_created_idx'),
            models.Index(fields=['freelancer', '-created_at'], name='app_freelancer_created_idx'),
        ]

    def __str__(self):
        return f"{self.freelancer} -> {self.project}"

    def is_visible_to(self, user) -> bool:
        """The applicant and the project owner may see an application."""
        return user is not None and user.pk in (self.freelancer_id, self.project.client_id)


class ApplicationAttachment(models.Model):
    """File uploaded with an application."""

    application = models.ForeignKey(
        Application,
        on_delete=models.CASCADE,
        related_name='attachments'
    )
    filename = models.CharField(max_length=255, db_index=True, help_text=_('Stored filename'))
    original_name = models.CharField(max_length=255)
    file = models.FileField(upload_to=application_upload_to, storage=private_storage, max_length=500)
    mimetype = models.CharField(max_length=100)
    size = models.PositiveIntegerField(help_text=_('File size in bytes'))
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _('Application Attachment')
        verbose_name_plural = _('Application Attachments')
        ordering = ['created_at']

    def __str__(self):
        return self.original_name

    def save(self, *args, **kwargs):
        super().save(*args, **kwargs)
        stored = os.path.basename(self.file.name) if self.file else ''
        if stored and stored != self.filename:
            self.filename = stored
            super().save(update_fields=['filename'])
