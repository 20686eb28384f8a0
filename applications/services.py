"""
Applications Services - Business Logic Layer

This module provides the ApplicationService, which handles the
application lifecycle:

- Submission with attachments and bid consumption
- Listing for the project owner and for the freelancer
- Status review by the project owner
- Archiving and attachment download

Security Notes:
- Every read and write verifies the requester is the applicant or the
  project owner, as the operation requires
- Denied attempts are logged at WARNING
"""

import logging
from decimal import Decimal
from typing import Iterable, Optional

from django.conf import settings
from django.db import IntegrityError, transaction
from django.db.models import F, QuerySet
from django.utils import timezone

from core import outbox
from core.exceptions import (
    BusinessRuleViolationError,
    PermissionDeniedError,
    ResourceAlreadyExistsError,
    ResourceNotFoundError,
)
from core.services import ServiceResult
from core.validators import parse_amount, validate_upload_batch
from memberships.services import MembershipService
from notifications.services import notification_service
from projects.models import Activity, Project
from projects.services import ActivityLog

from .models import Application, ApplicationAttachment
from .validators import ApplicationValidator, status_message

logger = logging.getLogger(__name__)

ALREADY_APPLIED = 'You have already applied to this project'


class ApplicationService:
    """
    Service for managing project applications.

    Handles:
    - Submitting applications
    - Owner review (status changes, notes, archiving)
    - Access-checked reads and attachment downloads
    """

    @staticmethod
    def _get_project(project_id) -> Project:
        try:
            return Project.objects.get(pk=project_id)
        except (Project.DoesNotExist, ValueError, TypeError):
            raise ResourceNotFoundError('Project', project_id)

    @staticmethod
    def _get_application(application_id) -> Application:
        try:
            return Application.objects.select_related(
                'project', 'project__client', 'freelancer'
            ).get(pk=application_id)
        except (Application.DoesNotExist, ValueError, TypeError):
            raise ResourceNotFoundError('Application', application_id)

    @staticmethod
    def _has_applied(project, freelancer) -> bool:
        return Application.objects.filter(project=project, freelancer=freelancer).exists()

    @staticmethod
    def _parse_budget(value, default: Decimal) -> Decimal:
        if value in (None, ''):
            return default
        return parse_amount(value, 'proposedBudget', 'Proposed budget')

    @classmethod
    def submit(
        cls,
        project_id,
        freelancer,
        cover_letter,
        proposed_budget=None,
        estimated_duration: Optional[str] = None,
        files: Iterable = (),
    ) -> ServiceResult:
        """
        Submit an application to a project.

        Args:
            project_id: The project applied to
            freelancer: The applying user
            cover_letter: Required cover letter text
            proposed_budget: Defaults to the project's budget
            estimated_duration: Free-form duration estimate
            files: Uploaded attachments

        Returns:
            ServiceResult with the created application
        """
        cover_letter = ApplicationValidator.clean_cover_letter(cover_letter)
        project = cls._get_project(project_id)

        if not project.is_open or project.is_owned_by(freelancer):
            raise BusinessRuleViolationError(
                'This project is not accepting applications',
                rule_name='project_not_open'
            )

        if cls._has_applied(project, freelancer):
            raise ResourceAlreadyExistsError(ALREADY_APPLIED)

        budget = cls._parse_budget(proposed_budget, project.budget)
        files = validate_upload_batch(
            files,
            file_type='application',
            max_files=getattr(settings, 'APPLICATION_MAX_ATTACHMENTS', 5),
            max_size=getattr(settings, 'APPLICATION_MAX_ATTACHMENT_SIZE', None),
        )

        try:
            with transaction.atomic():
                if getattr(settings, 'MEMBERSHIP_ENFORCE_BIDS', True):
                    MembershipService.consume_bid(freelancer)

                application = Application.objects.create(
                    project=project,
                    freelancer=freelancer,
                    cover_letter=cover_letter,
                    proposed_budget=budget,
                    estimated_duration=(estimated_duration or '').strip(),
                )
                for upload in files:
                    ApplicationAttachment.objects.create(
                        application=application,
                        original_name=upload.name,
                        file=upload,
                        mimetype=getattr(upload, 'content_type', '') or '',
                        size=upload.size,
                    )

                Project.objects.filter(pk=project.pk).update(
                    application_count=F('application_count') + 1
                )

                events = [
                    notification_service.enqueue(
                        recipient_id=project.client_id,
                        notification_type='new_application',
                        message=f'You have a new application for "{project.title}"',
                        entity_type='application',
                        entity_id=application.pk,
                        metadata={'project_id': project.pk},
                    ),
                    ActivityLog.record(
                        freelancer, Activity.ActivityType.APPLY,
                        project=project, target_user=project.client,
                        application_id=application.pk,
                    ),
                ]
        except IntegrityError:
            # Only a concurrent submit by the same freelancer is a duplicate
            if cls._has_applied(project, freelancer):
                raise ResourceAlreadyExistsError(ALREADY_APPLIED)
            raise

        outbox.dispatch(events)

        logger.info(
            f"Application created: user={freelancer.pk} -> project={project.pk} "
            f"(id={application.pk})"
        )
        return ServiceResult(
            success=True,
            message='Application submitted successfully',
            data=application,
            events=events,
        )

    @classmethod
    def list_for_project(cls, project_id, requester, include_archived: bool = False) -> QuerySet:
        """Applications to the requester's project, newest first."""
        project = cls._get_project(project_id)
        if not project.is_owned_by(requester):
            logger.warning(
                f"Application list denied: user={requester.pk} project={project.pk}"
            )
            raise PermissionDeniedError('You are not authorized to view these applications')

        queryset = project.applications.select_related('freelancer', 'project').prefetch_related('attachments')
        if not include_archived:
            queryset = queryset.filter(is_archived=False)
        return queryset.order_by('-created_at', '-id')

    @staticmethod
    def list_mine(freelancer) -> QuerySet:
        return (
            Application.objects
            .filter(freelancer=freelancer)
            .select_related('project')
            .prefetch_related('attachments')
            .order_by('-created_at', '-id')
        )

    @classmethod
    def get(cls, application_id, requester) -> Application:
        application = cls._get_application(application_id)
        if not application.is_visible_to(requester):
            logger.warning(
                f"Application read denied: user={requester.pk} application={application.pk}"
            )
            raise PermissionDeniedError('You are not authorized to view this application')
        return application

    @classmethod
    def set_status(
        cls,
        application_id,
        requester,
        new_status,
        client_notes: Optional[str] = None,
    ) -> ServiceResult:
        """
        Change an application's status. Only the project owner may do this.

        Exactly one notification is sent to the freelancer.
        """
        ApplicationValidator.validate_status(new_status)
        application = cls._get_application(application_id)
        project = application.project

        if not project.is_owned_by(requester):
            logger.warning(
                f"Application status change denied: user={requester.pk} "
                f"application={application.pk}"
            )
            raise PermissionDeniedError('You are not authorized to update this application')

        ApplicationValidator.validate_transition(application, new_status)

        previous = application.status
        with transaction.atomic():
            application.status = new_status
            application.status_changed_at = timezone.now()
            update_fields = ['status', 'status_changed_at', 'updated_at']
            if client_notes is not None:
                application.client_notes = client_notes
                update_fields.append('client_notes')
            application.save(update_fields=update_fields)

            events = [
                notification_service.enqueue(
                    recipient_id=application.freelancer_id,
                    notification_type=f'application_{new_status}',
                    message=status_message(new_status, project.title),
                    entity_type='application',
                    entity_id=application.pk,
                    metadata={'project_id': project.pk, 'previous_status': previous},
                    priority='high' if new_status == Application.ApplicationStatus.ACCEPTED else 'normal',
                )
            ]
        outbox.dispatch(events)

        logger.info(
            f"Application status changed: id={application.pk} {previous} -> {new_status}"
        )
        return ServiceResult(
            success=True,
            message='Application status updated successfully',
            data=application,
            events=events,
        )

    @classmethod
    def archive(cls, application_id, requester, archived: bool = True) -> ServiceResult:
        application = cls._get_application(application_id)
        if not application.project.is_owned_by(requester):
            logger.warning(
                f"Application archive denied: user={requester.pk} application={application.pk}"
            )
            raise PermissionDeniedError('You are not authorized to update this application')

        application.is_archived = bool(archived)
        application.save(update_fields=['is_archived', 'updated_at'])
        return ServiceResult(
            success=True,
            message='Application archived' if archived else 'Application restored',
            data=application,
        )

    @classmethod
    def download_attachment(cls, application_id, filename: str, requester) -> ApplicationAttachment:
        """
        Resolve an attachment for download by the applicant or project owner.

        Returns:
            The ApplicationAttachment; its ``original_name`` is the download name
        """
        try:
            application = cls._get_application(application_id)
        except ResourceNotFoundError:
            raise ResourceNotFoundError(detail='Application not found')

        if not application.is_visible_to(requester):
            logger.warning(
                f"Attachment download denied: user={requester.pk} application={application.pk}"
            )
            raise PermissionDeniedError('You are not authorized to access this file')

        attachment = application.attachments.filter(filename=filename).first()
        if attachment is None or not attachment.file.storage.exists(attachment.file.name):
            raise ResourceNotFoundError(detail='Attachment not found')
        return attachment
