"""
Projects Models - Client-posted work and its engagement.

This module defines models for the project feed:
- Skills: Normalized skill tags for filtering
- Projects: Units of work posted by clients with budget and deadline
- Attachments: Files uploaded with a project
- Likes / Saves: Per-user engagement join rows
- Comments: Threaded discussion on a project
- Activity: Append-only engagement log

Engagement membership (likes, saves, comment likes) is stored as one row
per (entity, user) pair with a unique constraint, never as arrays.
"""

import uuid

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone
from django.utils.text import slugify
from django.utils.translation import gettext_lazy as _

from core.models import TimestampedModel
from core.validators import project_upload_to


# ============================================================================
# SKILLS
# ============================================================================

class SkillManager(models.Manager):

    def get_or_create_by_name(self, name: str):
        """Get or create a skill, matching names case-insensitively."""
        name = name.strip()
        skill, _ = self.get_or_create(slug=slugify(name), defaults={'name': name})
        return skill


class Skill(models.Model):
    """Skill keyword a project can require (e.g. "React", "Copywriting")."""

    name = models.CharField(max_length=100)
    slug = models.SlugField(max_length=120, unique=True)

    objects = SkillManager()

    class Meta:
        verbose_name = _('Skill')
        verbose_name_plural = _('Skills')
        ordering = ['name']

    def __str__(self):
        return self.name


# ============================================================================
# PROJECTS
# ============================================================================

class Project(TimestampedModel):
    """
    Unit of work posted by a client.

    Freelancers discover open projects through the feed and apply to them.
    Counters (views, shares, application_count) are only ever changed with
    atomic F() updates.
    """

    class Status(models.TextChoices):
        DRAFT = 'draft', _('Draft')
        OPEN = 'open', _('Open')
        IN_PROGRESS = 'in_progress', _('In Progress')
        COMPLETED = 'completed', _('Completed')
        CANCELLED = 'cancelled', _('Cancelled')

    class Visibility(models.TextChoices):
        PUBLIC = 'public', _('Public')
        PRIVATE = 'private', _('Private')
        INVITE_ONLY = 'invite_only', _('Invite Only')

    uuid = models.UUIDField(default=uuid.uuid4, editable=False, unique=True)

    # Basic info
    title = models.CharField(max_length=255)
    description = models.TextField()
    client = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='posted_projects'
    )

    # Classification
    category = models.CharField(max_length=100, db_index=True)
    skills = models.ManyToManyField(Skill, blank=True, related_name='projects')

    # Budget and timeline
    budget = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(0)]
    )
    deadline = models.DateField()

    # Status and visibility
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.OPEN
    )
    visibility = models.CharField(
        max_length=20,
        choices=Visibility.choices,
        default=Visibility.PUBLIC
    )
    location = models.CharField(max_length=200, blank=True)

    # Counters
    views = models.PositiveIntegerField(default=0)
    shares = models.PositiveIntegerField(default=0)
    application_count = models.PositiveIntegerField(default=0)

    # Assignment
    assigned_freelancer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='assigned_projects'
    )

    # Promotion
    featured_until = models.DateTimeField(null=True, blank=True)

    class Meta:
        verbose_name = _('Project')
        verbose_name_plural = _('Projects')
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status', 'category'], name='project_status_cat_idx'),
            models.Index(fields=['client'], name='project_client_idx'),
            models.Index(fields=['-created_at'], name='project_created_idx'),
            models.Index(fields=['status', 'budget'], name='project_status_budget_idx'),
        ]

    def __str__(self):
        return self.title

    @property
    def is_open(self):
        return self.status == self.Status.OPEN

    @property
    def is_featured(self):
        """Check if project is currently promoted."""
        return bool(self.featured_until and self.featured_until > timezone.now())

    def is_owned_by(self, user) -> bool:
        return user is not None and self.client_id == user.pk


class ProjectAttachment(TimestampedModel):
    """File uploaded with a project (brief, mockups, specs)."""

    project = models.ForeignKey(
        Project,
        on_delete=models.CASCADE,
        related_name='attachments'
    )
    name = models.CharField(max_length=255, help_text=_('Original filename'))
    file = models.FileField(upload_to=project_upload_to, max_length=500)
    content_type = models.CharField(max_length=100)
    size = models.PositiveIntegerField(help_text=_('File size in bytes'))

    class Meta:
        verbose_name = _('Project Attachment')
        verbose_name_plural = _('Project Attachments')
        ordering = ['created_at']

    def __str__(self):
        return f"{self.project.title} - {self.name}"


# ============================================================================
# ENGAGEMENT
# ============================================================================

class ProjectLike(models.Model):
    """A user's like on a project."""

    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name='likes')
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='project_likes'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _('Project Like')
        verbose_name_plural = _('Project Likes')
        ordering = ['created_at']
        constraints = [
            models.UniqueConstraint(fields=['project', 'user'], name='unique_project_like'),
        ]

    def __str__(self):
        return f"{self.user} likes {self.project}"


class ProjectSave(models.Model):
    """A user's bookmark on a project."""

    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name='saves')
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='saved_projects'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _('Saved Project')
        verbose_name_plural = _('Saved Projects')
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(fields=['project', 'user'], name='unique_project_save'),
        ]

    def __str__(self):
        return f"{self.user} saved {self.project}"


# ============================================================================
# COMMENTS
# ============================================================================

class Comment(TimestampedModel):
    """
    Comment on a project.

    Threading is one level deep: a reply always points at a top-level
    comment.
    """

    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name='comments')
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='project_comments'
    )
    content = models.TextField()
    parent = models.ForeignKey(
        'self',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='replies'
    )

    # Moderation
    is_hidden = models.BooleanField(default=False)

    class Meta:
        verbose_name = _('Comment')
        verbose_name_plural = _('Comments')
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['project', '-created_at'], name='comment_project_created_idx'),
            models.Index(fields=['parent'], name='comment_parent_idx'),
        ]

    def __str__(self):
        return f"Comment by {self.user} on {self.project}"


class CommentLike(models.Model):
    """A user's like on a comment."""

    comment = models.ForeignKey(Comment, on_delete=models.CASCADE, related_name='likes')
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='comment_likes'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _('Comment Like')
        verbose_name_plural = _('Comment Likes')
        constraints = [
            models.UniqueConstraint(fields=['comment', 'user'], name='unique_comment_like'),
        ]


# ============================================================================
# ACTIVITY LOG
# ============================================================================

class Activity(models.Model):
    """
    Append-only engagement log entry.

    Rows are written once and never updated. References use SET_NULL so
    the log outlives deleted projects and comments.
    """

    class ActivityType(models.TextChoices):
        LIKE = 'like', _('Like')
        COMMENT = 'comment', _('Comment')
        SHARE = 'share', _('Share')
        SAVE = 'save', _('Save')
        APPLY = 'apply', _('Apply')
        POST = 'post', _('Post')

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='activities'
    )
    activity_type = models.CharField(max_length=20, choices=ActivityType.choices)
    project = models.ForeignKey(
        Project,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='activities'
    )
    comment = models.ForeignKey(
        Comment,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='activities'
    )
    target_user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='targeted_activities'
    )
    metadata = models.JSONField(default=dict, blank=True)

    # Idempotency key: the outbox event that produced this row
    source_event = models.UUIDField(null=True, blank=True, unique=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        verbose_name = _('Activity')
        verbose_name_plural = _('Activities')
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', '-created_at'], name='activity_user_created_idx'),
            models.Index(fields=['project', 'activity_type'], name='activity_project_type_idx'),
        ]

    def __str__(self):
        return f"{self.user} {self.activity_type} {self.project_id}"

    def save(self, *args, **kwargs):
        """Insert only; existing entries are immutable."""
        if not self._state.adding:
            raise ValueError('Activity entries are append-only')
        super().save(*args, **kwargs)
