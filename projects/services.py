"""
Projects Services - Business Logic Layer

This module provides service classes that encapsulate business logic
for the project feed:

- FeedService: Filtered, sorted, paginated feed and view counting
- EngagementService: Likes, saves, shares and comments
- ProjectService: Project lifecycle for the owning client
- ActivityLog: Recording and reading the activity log

Services raise the exceptions in ``core.exceptions`` on failure. Side
effects (notifications, activity entries) are recorded as outbox events in
the same transaction as the mutation and dispatched once it has closed.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from django.conf import settings
from django.db import IntegrityError, transaction
from django.db.models import F, Prefetch, QuerySet
from django.utils.dateparse import parse_date
from django.utils.text import slugify

from core import outbox
from core.exceptions import InvalidInputError, PermissionDeniedError, ResourceNotFoundError
from core.services import ServiceResult
from core.validators import parse_amount, validate_upload_batch
from notifications.services import notification_service

from .models import (
    Activity,
    Comment,
    CommentLike,
    Project,
    ProjectAttachment,
    ProjectLike,
    ProjectSave,
    Skill,
)
from .validators import (
    CommentValidator,
    ProjectValidator,
    parse_budget_bound,
    parse_skills,
)

logger = logging.getLogger(__name__)

RECENT_COMMENTS_LIMIT = 5


# =============================================================================
# ACTIVITY LOG
# =============================================================================

class ActivityLog:
    """Append-only log of engagement, written through the outbox."""

    @staticmethod
    def record(
        user,
        activity_type: str,
        project: Optional[Project] = None,
        comment: Optional[Comment] = None,
        target_user=None,
        **metadata
    ):
        """Record an ``activity.record`` event. Call inside the mutation's transaction."""
        return outbox.record(
            outbox.ACTIVITY_RECORD,
            user_id=user.pk,
            activity_type=activity_type,
            project_id=project.pk if project else None,
            comment_id=comment.pk if comment else None,
            target_user_id=target_user.pk if target_user else None,
            metadata=metadata,
        )

    @staticmethod
    def for_user(user) -> QuerySet:
        return Activity.objects.filter(user=user).select_related('project', 'comment')


# =============================================================================
# FEED SERVICE
# =============================================================================

@dataclass
class FeedPage:
    """One page of the project feed."""
    projects: List[Project]
    has_more: bool
    total: int


class FeedService:
    """
    Service for browsing open projects.

    Handles:
    - Filtering by category, skills and budget range
    - Sorting and offset pagination
    - Single project reads and view counting
    """

    SORT_ORDERS = {
        'newest': ('-created_at', '-id'),
        'budget_high': ('-budget', '-id'),
        'budget_low': ('budget', '-id'),
        'deadline': ('deadline', '-id'),
        'popular': ('-views', '-id'),
    }
    DEFAULT_SORT = 'newest'

    @staticmethod
    def with_related(queryset: QuerySet) -> QuerySet:
        """Attach owner, skills and the latest visible comments."""
        recent_comments = (
            Comment.objects
            .filter(is_hidden=False)
            .select_related('user')
            .order_by('-created_at', '-id')
        )
        return queryset.select_related('client').prefetch_related(
            'skills',
            'attachments',
            Prefetch('likes', queryset=ProjectLike.objects.only('project_id', 'user_id')),
            Prefetch('saves', queryset=ProjectSave.objects.only('project_id', 'user_id')),
            Prefetch(
                'comments',
                queryset=recent_comments,
                to_attr='all_visible_comments'
            ),
        )

    @staticmethod
    def _page_params(page, limit):
        default_limit = getattr(settings, 'FEED_DEFAULT_PAGE_SIZE', 10)
        max_limit = getattr(settings, 'FEED_MAX_PAGE_SIZE', 100)

        try:
            page = int(page)
        except (TypeError, ValueError):
            page = 1
        try:
            limit = int(limit)
        except (TypeError, ValueError):
            limit = default_limit

        if page < 1:
            page = 1
        if limit < 1:
            limit = default_limit
        return page, min(limit, max_limit)

    @classmethod
    def list(
        cls,
        category: Optional[str] = None,
        skills=None,
        min_budget=None,
        max_budget=None,
        sort: Optional[str] = None,
        page=None,
        limit=None,
    ) -> FeedPage:
        """
        List open projects.

        Args:
            category: Exact category match
            skills: Skill names; a project matches if it requires any of them
            min_budget: Inclusive lower budget bound
            max_budget: Inclusive upper budget bound
            sort: One of SORT_ORDERS; unknown keys fall back to newest
            page: 1-based page number
            limit: Page size, capped at FEED_MAX_PAGE_SIZE

        Returns:
            FeedPage with the projects of the requested page
        """
        queryset = Project.objects.filter(status=Project.Status.OPEN)

        if category:
            queryset = queryset.filter(category=category)

        skill_names = parse_skills(skills)
        if skill_names:
            slugs = [slugify(name) for name in skill_names]
            matching = Skill.objects.filter(slug__in=slugs).values('pk')
            queryset = queryset.filter(skills__in=matching).distinct()

        low = parse_budget_bound(min_budget, 'minBudget')
        high = parse_budget_bound(max_budget, 'maxBudget')
        if low is not None:
            queryset = queryset.filter(budget__gte=low)
        if high is not None:
            queryset = queryset.filter(budget__lte=high)

        ordering = cls.SORT_ORDERS.get(sort or cls.DEFAULT_SORT, cls.SORT_ORDERS[cls.DEFAULT_SORT])
        queryset = queryset.order_by(*ordering)

        page, limit = cls._page_params(page, limit)
        skip = (page - 1) * limit

        total = queryset.count()
        projects = list(cls.with_related(queryset)[skip:skip + limit])

        return FeedPage(
            projects=projects,
            has_more=total > skip + len(projects),
            total=total,
        )

    @classmethod
    def get(cls, project_id) -> Project:
        """Read a single project. Does not count a view."""
        try:
            project = cls.with_related(Project.objects.filter(pk=project_id)).first()
        except (ValueError, TypeError):
            project = None
        if project is None:
            raise ResourceNotFoundError('Project', project_id)
        return project

    @staticmethod
    def record_view(project_id) -> int:
        """Atomically count one view and return the new total."""
        try:
            updated = Project.objects.filter(pk=project_id).update(views=F('views') + 1)
        except (ValueError, TypeError):
            updated = 0
        if not updated:
            raise ResourceNotFoundError('Project', project_id)
        return Project.objects.values_list('views', flat=True).get(pk=project_id)


# =============================================================================
# ENGAGEMENT SERVICE
# =============================================================================

class EngagementService:
    """
    Service for user engagement with projects.

    Likes, saves and comment likes are toggles over unique join rows. An
    activity entry is recorded only when a like or save is added.
    """

    @staticmethod
    def _toggle(model, lookup: dict, activity=None):
        """
        Flip membership of ``lookup`` in ``model``.

        Returns:
            (added, events) tuple
        """
        events = []
        with transaction.atomic():
            deleted, _ = model.objects.filter(**lookup).delete()
            if deleted:
                return False, events
            try:
                with transaction.atomic():
                    model.objects.create(**lookup)
            except IntegrityError:
                # Concurrent add won the race; the row is present either way
                return True, events
            if activity is not None:
                events.append(activity())
        outbox.dispatch(events)
        return True, events

    @classmethod
    def toggle_like(cls, project: Project, user) -> ServiceResult:
        liked, events = cls._toggle(
            ProjectLike,
            {'project': project, 'user': user},
            activity=lambda: ActivityLog.record(
                user, Activity.ActivityType.LIKE, project=project, target_user=project.client
            ),
        )
        likes = list(
            ProjectLike.objects.filter(project=project)
            .order_by('created_at')
            .values_list('user_id', flat=True)
        )
        return ServiceResult(
            success=True,
            data={'liked': liked, 'likes': likes, 'like_count': len(likes)},
            events=events,
        )

    @classmethod
    def toggle_save(cls, project: Project, user) -> ServiceResult:
        saved, events = cls._toggle(
            ProjectSave,
            {'project': project, 'user': user},
            activity=lambda: ActivityLog.record(
                user, Activity.ActivityType.SAVE, project=project
            ),
        )
        saved_by = list(
            ProjectSave.objects.filter(project=project)
            .order_by('created_at')
            .values_list('user_id', flat=True)
        )
        return ServiceResult(
            success=True,
            data={'saved': saved, 'saved_by': saved_by, 'save_count': len(saved_by)},
            events=events,
        )

    @staticmethod
    def share(project: Project, user) -> ServiceResult:
        with transaction.atomic():
            Project.objects.filter(pk=project.pk).update(shares=F('shares') + 1)
            events = [
                ActivityLog.record(user, Activity.ActivityType.SHARE, project=project)
            ]
        outbox.dispatch(events)

        shares = Project.objects.values_list('shares', flat=True).get(pk=project.pk)
        return ServiceResult(success=True, data={'shares': shares}, events=events)

    @staticmethod
    def comment(project: Project, user, content, parent_id=None) -> ServiceResult:
        """
        Add a comment to a project.

        The project owner is notified unless they wrote the comment.

        Returns:
            ServiceResult with the created Comment
        """
        content = CommentValidator.clean_content(content)
        parent = CommentValidator.resolve_parent(project, parent_id)

        with transaction.atomic():
            comment = Comment.objects.create(
                project=project,
                user=user,
                content=content,
                parent=parent,
            )
            events = [
                ActivityLog.record(
                    user, Activity.ActivityType.COMMENT,
                    project=project, comment=comment, target_user=project.client
                )
            ]
            if not project.is_owned_by(user):
                events.append(notification_service.enqueue(
                    recipient_id=project.client_id,
                    notification_type='new_comment',
                    message=f'{user.get_username()} commented on your project "{project.title}"',
                    entity_type='project',
                    entity_id=project.pk,
                    metadata={'comment_id': comment.pk, 'commenter_id': user.pk},
                ))
        outbox.dispatch(events)

        logger.info(f"Comment created: user={user.pk} project={project.pk}")
        return ServiceResult(success=True, data=comment, events=events)

    @classmethod
    def toggle_comment_like(cls, comment: Comment, user) -> ServiceResult:
        liked, events = cls._toggle(CommentLike, {'comment': comment, 'user': user})
        return ServiceResult(
            success=True,
            data={'liked': liked, 'like_count': comment.likes.count()},
            events=events,
        )

    @staticmethod
    def hide_comment(comment: Comment, user) -> ServiceResult:
        """Toggle a comment's visibility. Only the project owner may moderate."""
        if not comment.project.is_owned_by(user):
            logger.warning(f"Comment moderation denied: user={user.pk} comment={comment.pk}")
            raise PermissionDeniedError('You are not authorized to moderate this comment')

        Comment.objects.filter(pk=comment.pk).update(is_hidden=not comment.is_hidden)
        comment.refresh_from_db(fields=['is_hidden'])
        return ServiceResult(success=True, data={'hidden': comment.is_hidden})

    @staticmethod
    def list_comments(project: Project) -> QuerySet:
        """Visible top-level comments, newest first, with their visible replies."""
        replies = (
            Comment.objects.filter(is_hidden=False)
            .select_related('user')
            .order_by('created_at', 'id')
        )
        return (
            Comment.objects
            .filter(project=project, parent__isnull=True, is_hidden=False)
            .select_related('user')
            .prefetch_related(Prefetch('replies', queryset=replies), 'likes')
            .order_by('-created_at', '-id')
        )


# =============================================================================
# PROJECT SERVICE
# =============================================================================

class ProjectService:
    """
    Service for the project lifecycle.

    Handles:
    - Posting projects with attachments
    - Owner-only updates with status transition checks
    - Owner-only deletion with cascade
    """

    EDITABLE_FIELDS = ('title', 'description', 'category', 'location', 'visibility')

    @staticmethod
    def _parse_deadline(value):
        if hasattr(value, 'isoformat'):
            return value
        try:
            deadline = parse_date(str(value))
        except ValueError:
            deadline = None
        if deadline is None:
            raise InvalidInputError('Deadline must be a date (YYYY-MM-DD)', field='deadline')
        return deadline

    @staticmethod
    def _set_skills(project: Project, skills) -> None:
        names = parse_skills(skills)
        project.skills.set([Skill.objects.get_or_create_by_name(name) for name in names])

    @staticmethod
    def _attach(project: Project, files: Iterable) -> None:
        for upload in files:
            ProjectAttachment.objects.create(
                project=project,
                name=upload.name,
                file=upload,
                content_type=getattr(upload, 'content_type', '') or '',
                size=upload.size,
            )

    @classmethod
    def create(cls, client, data: dict, files: Iterable = ()) -> ServiceResult:
        """
        Post a new project.

        Args:
            client: The posting user
            data: title, description, category, budget, deadline and
                optional skills, location, visibility, status
            files: Uploaded attachments

        Returns:
            ServiceResult with the created project
        """
        ProjectValidator.validate_required(data)
        budget = parse_amount(data['budget'], 'budget', 'Budget')
        deadline = cls._parse_deadline(data['deadline'])
        files = validate_upload_batch(files, file_type='project')

        status = data.get('status') or Project.Status.OPEN
        if status not in (Project.Status.DRAFT, Project.Status.OPEN):
            raise InvalidInputError('Invalid status', field='status')

        visibility = data.get('visibility') or Project.Visibility.PUBLIC
        if visibility not in Project.Visibility.values:
            raise InvalidInputError('Invalid visibility', field='visibility')

        with transaction.atomic():
            project = Project.objects.create(
                client=client,
                title=data['title'].strip(),
                description=data['description'].strip(),
                category=data['category'].strip(),
                budget=budget,
                deadline=deadline,
                status=status,
                visibility=visibility,
                location=(data.get('location') or '').strip(),
            )
            cls._set_skills(project, data.get('skills'))
            cls._attach(project, files)

            events = [
                ActivityLog.record(client, Activity.ActivityType.POST, project=project),
                notification_service.enqueue(
                    recipient_id=client.pk,
                    notification_type='new_project',
                    message=f'Your project "{project.title}" has been posted',
                    entity_type='project',
                    entity_id=project.pk,
                ),
            ]
        outbox.dispatch(events)

        logger.info(f"Project created: {project.title} (id={project.pk}, client={client.pk})")
        return ServiceResult(
            success=True,
            message='Project created successfully',
            data=project,
            events=events,
        )

    @classmethod
    def update(cls, project: Project, user, data: dict, files: Iterable = ()) -> ServiceResult:
        """Partially update a project. Only provided fields change."""
        if not project.is_owned_by(user):
            logger.warning(f"Project update denied: user={user.pk} project={project.pk}")
            raise PermissionDeniedError('You are not authorized to update this project')

        files = validate_upload_batch(files, file_type='project')

        for name in cls.EDITABLE_FIELDS:
            if name in data and data[name] is not None:
                value = data[name].strip() if isinstance(data[name], str) else data[name]
                if name in ('title', 'description', 'category') and not value:
                    raise InvalidInputError('Missing required fields', field=name)
                setattr(project, name, value)

        if project.visibility not in Project.Visibility.values:
            raise InvalidInputError('Invalid visibility', field='visibility')
        if data.get('budget') not in (None, ''):
            project.budget = parse_amount(data['budget'], 'budget', 'Budget')
        if data.get('deadline') not in (None, ''):
            project.deadline = cls._parse_deadline(data['deadline'])

        new_status = data.get('status')
        if new_status not in (None, ''):
            ProjectValidator.validate_transition(project, new_status)
            project.status = new_status

        with transaction.atomic():
            project.save()
            if 'skills' in data and data['skills'] is not None:
                cls._set_skills(project, data['skills'])
            cls._attach(project, files)

        logger.info(f"Project updated: id={project.pk} status={project.status}")
        return ServiceResult(success=True, message='Project updated successfully', data=project)

    @staticmethod
    def delete(project: Project, user) -> ServiceResult:
        """
        Delete a project with its applications and comments.

        Activity entries survive with their project reference cleared;
        stored files are removed once the rows are gone.
        """
        from applications.models import ApplicationAttachment

        if not project.is_owned_by(user):
            logger.warning(f"Project delete denied: user={user.pk} project={project.pk}")
            raise PermissionDeniedError('You are not authorized to delete this project')
        ProjectValidator.validate_deletable(project)

        stored_files = [
            attachment.file
            for attachment in ApplicationAttachment.objects.filter(application__project=project)
        ]
        stored_files += [attachment.file for attachment in project.attachments.all()]

        project_id = project.pk
        with transaction.atomic():
            project.applications.all().delete()
            project.comments.all().delete()
            project.delete()

        for stored in stored_files:
            if stored:
                stored.storage.delete(stored.name)

        logger.info(f"Project deleted: id={project_id} by user={user.pk}")
        return ServiceResult(success=True, message='Project deleted successfully')

    @staticmethod
    def mine(client) -> QuerySet:
        """All of the client's projects, any status, newest first."""
        return FeedService.with_related(
            Project.objects.filter(client=client)
        ).order_by('-created_at', '-id')
