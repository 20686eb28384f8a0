"""
Tests for the application service: submission, review and downloads.
"""

import os
from decimal import Decimal

import pytest
from django.db import IntegrityError

from applications.models import Application, ApplicationAttachment
from applications.services import ApplicationService
from applications.validators import ApplicationValidator, status_message
from conftest import (
    HTML_BYTES,
    PNG_BYTES,
    ApplicationFactory,
    DraftProjectFactory,
    MembershipFactory,
    ProjectFactory,
    UserFactory,
    make_upload,
)
from core.storage import PrivateFileSystemStorage
from core.exceptions import (
    BusinessRuleViolationError,
    InvalidInputError,
    PermissionDeniedError,
    ResourceAlreadyExistsError,
    ResourceNotFoundError,
)
from memberships.models import Membership
from notifications.models import Notification
from projects.models import Activity, Project


# ============================================================================
# SUBMIT
# ============================================================================

@pytest.mark.django_db
class TestSubmit:

    def test_submit(self, project, freelancer):
        result = ApplicationService.submit(project.pk, freelancer, 'I can build this.')

        application = result.data
        assert application.status == Application.ApplicationStatus.PENDING
        assert application.proposed_budget == project.budget
        assert application.cover_letter == 'I can build this.'

        project.refresh_from_db()
        assert project.application_count == 1

        notification = Notification.objects.get(recipient=project.client)
        assert notification.notification_type == 'new_application'
        assert notification.entity_type == 'application'
        assert notification.entity_id == application.pk
        assert Activity.objects.filter(
            user=freelancer, activity_type='apply', project=project
        ).exists()

    def test_proposed_budget_and_duration(self, project, freelancer):
        application = ApplicationService.submit(
            project.pk, freelancer, 'Proposal', proposed_budget='850', estimated_duration='3 weeks'
        ).data

        assert application.proposed_budget == Decimal('850')
        assert application.estimated_duration == '3 weeks'

    @pytest.mark.parametrize('budget', ['NaN', 'Infinity', '-Infinity', '1e20'])
    def test_unusable_proposed_budget(self, project, freelancer, budget):
        with pytest.raises(InvalidInputError, match='Proposed budget must'):
            ApplicationService.submit(project.pk, freelancer, 'Proposal', proposed_budget=budget)
        assert not Application.objects.exists()

    def test_blank_cover_letter(self, project, freelancer):
        with pytest.raises(InvalidInputError, match='Cover letter is required'):
            ApplicationService.submit(project.pk, freelancer, '   ')
        assert not Application.objects.exists()

    def test_missing_project(self, freelancer):
        with pytest.raises(ResourceNotFoundError) as exc_info:
            ApplicationService.submit(999999, freelancer, 'Hello')
        assert str(exc_info.value.detail) == 'Project not found'

    def test_project_not_open(self, freelancer):
        project = DraftProjectFactory()
        with pytest.raises(BusinessRuleViolationError, match='not accepting applications'):
            ApplicationService.submit(project.pk, freelancer, 'Hello')

    def test_owner_cannot_apply(self, project):
        with pytest.raises(BusinessRuleViolationError, match='not accepting applications'):
            ApplicationService.submit(project.pk, project.client, 'Hello')

    def test_second_submit_is_rejected(self, project, freelancer):
        ApplicationService.submit(project.pk, freelancer, 'First')

        with pytest.raises(ResourceAlreadyExistsError) as exc_info:
            ApplicationService.submit(project.pk, freelancer, 'Second')

        assert str(exc_info.value.detail) == 'You have already applied to this project'
        assert Application.objects.filter(project=project, freelancer=freelancer).count() == 1
        project.refresh_from_db()
        assert project.application_count == 1

    def test_unique_constraint_race_is_reported_as_duplicate(self, project, freelancer, monkeypatch):
        # Nothing on the first check, the competing row once the insert fails
        checks = iter([False, True])
        monkeypatch.setattr(
            ApplicationService, '_has_applied', staticmethod(lambda *args: next(checks))
        )

        def racing_create(**kwargs):
            raise IntegrityError('UNIQUE constraint failed')

        monkeypatch.setattr(Application.objects, 'create', racing_create)

        with pytest.raises(ResourceAlreadyExistsError, match='already applied'):
            ApplicationService.submit(project.pk, freelancer, 'Hello')

    def test_other_integrity_errors_are_not_reported_as_duplicate(self, project, freelancer, monkeypatch):
        def failing_create(**kwargs):
            raise IntegrityError('UNIQUE constraint failed: memberships_membership.user_id')

        monkeypatch.setattr(Application.objects, 'create', failing_create)

        with pytest.raises(IntegrityError):
            ApplicationService.submit(project.pk, freelancer, 'Hello')
        assert not Application.objects.exists()

    def test_attachments_are_stored_with_random_names(self, project, freelancer):
        application = ApplicationService.submit(
            project.pk,
            freelancer,
            'See attached',
            files=[make_upload('My CV.pdf'), make_upload('shot.png', PNG_BYTES, 'image/png')],
        ).data

        attachments = list(application.attachments.order_by('id'))
        assert [a.original_name for a in attachments] == ['My CV.pdf', 'shot.png']
        assert attachments[0].filename.startswith('attachments-')
        assert attachments[0].filename.endswith('.pdf')
        assert attachments[0].file.name.startswith('uploads/applications/')
        assert attachments[0].mimetype == 'application/pdf'

    def test_too_many_attachments(self, project, freelancer):
        files = [make_upload(f'cv{i}.pdf') for i in range(6)]

        with pytest.raises(InvalidInputError, match='maximum of 5'):
            ApplicationService.submit(project.pk, freelancer, 'Hello', files=files)
        assert not Application.objects.exists()

    def test_disallowed_mime_type(self, project, freelancer):
        with pytest.raises(InvalidInputError, match='Invalid file type'):
            ApplicationService.submit(
                project.pk, freelancer, 'Hello',
                files=[make_upload('page.html', HTML_BYTES, 'text/html')],
            )

    def test_oversized_attachment(self, project, freelancer, settings):
        settings.APPLICATION_MAX_ATTACHMENT_SIZE = 10

        with pytest.raises(InvalidInputError, match='exceeds maximum'):
            ApplicationService.submit(
                project.pk, freelancer, 'Hello', files=[make_upload(content=b'x' * 11)]
            )


@pytest.mark.django_db
class TestSubmitBids:

    def test_submit_consumes_one_bid(self, project, freelancer):
        MembershipFactory(user=freelancer, bids_remaining=3)

        ApplicationService.submit(project.pk, freelancer, 'Hello')

        assert Membership.objects.get(user=freelancer).bids_remaining == 2

    def test_no_bids_left(self, project, freelancer):
        MembershipFactory(user=freelancer, bids_remaining=0)

        with pytest.raises(PermissionDeniedError, match='No project bids remaining'):
            ApplicationService.submit(project.pk, freelancer, 'Hello')

        assert not Application.objects.exists()
        project.refresh_from_db()
        assert project.application_count == 0

    def test_failed_submit_keeps_the_bid(self, project, freelancer, monkeypatch):
        MembershipFactory(user=freelancer, bids_remaining=3)

        def failing_create(**kwargs):
            raise IntegrityError('UNIQUE constraint failed')

        monkeypatch.setattr(Application.objects, 'create', failing_create)

        with pytest.raises(ResourceAlreadyExistsError):
            ApplicationService.submit(project.pk, freelancer, 'Hello')

        assert Membership.objects.get(user=freelancer).bids_remaining == 3

    def test_enforcement_can_be_disabled(self, project, freelancer, settings):
        settings.MEMBERSHIP_ENFORCE_BIDS = False
        MembershipFactory(user=freelancer, bids_remaining=0)

        ApplicationService.submit(project.pk, freelancer, 'Hello')

        assert Application.objects.filter(freelancer=freelancer).exists()


# ============================================================================
# LISTING AND READS
# ============================================================================

@pytest.mark.django_db
class TestListingAndAccess:

    def test_list_for_project_newest_first(self, project):
        first = ApplicationFactory(project=project)
        second = ApplicationFactory(project=project)
        ApplicationFactory()

        applications = list(ApplicationService.list_for_project(project.pk, project.client))

        assert applications == [second, first]

    def test_list_for_project_owner_only(self, project, freelancer):
        with pytest.raises(PermissionDeniedError, match='not authorized to view these applications'):
            ApplicationService.list_for_project(project.pk, freelancer)

    def test_archived_are_hidden_unless_requested(self, project):
        kept = ApplicationFactory(project=project)
        archived = ApplicationFactory(project=project, is_archived=True)

        default = list(ApplicationService.list_for_project(project.pk, project.client))
        everything = list(ApplicationService.list_for_project(
            project.pk, project.client, include_archived=True
        ))

        assert default == [kept]
        assert set(everything) == {kept, archived}

    def test_list_mine(self, freelancer):
        mine = ApplicationFactory(freelancer=freelancer)
        ApplicationFactory()

        assert list(ApplicationService.list_mine(freelancer)) == [mine]

    def test_get_by_applicant_and_owner(self, application):
        assert ApplicationService.get(application.pk, application.freelancer) == application
        assert ApplicationService.get(application.pk, application.project.client) == application

    def test_get_by_stranger(self, application, user):
        with pytest.raises(PermissionDeniedError, match='not authorized to view this application'):
            ApplicationService.get(application.pk, user)


# ============================================================================
# STATUS REVIEW
# ============================================================================

@pytest.mark.django_db
class TestSetStatus:

    def test_accept_notifies_freelancer_once(self, application):
        project = application.project

        result = ApplicationService.set_status(application.pk, project.client, 'accepted')

        assert result.data.status == 'accepted'
        assert result.data.status_changed_at is not None
        notifications = Notification.objects.filter(recipient=application.freelancer)
        assert notifications.count() == 1
        notification = notifications.get()
        assert notification.notification_type == 'application_accepted'
        assert notification.message == f'Your application for "{project.title}" has been accepted!'
        assert notification.priority == 'high'

    def test_project_status_is_not_changed_on_accept(self, application):
        ApplicationService.set_status(application.pk, application.project.client, 'accepted')

        project = Project.objects.get(pk=application.project_id)
        assert project.status == Project.Status.OPEN

    def test_reject_message(self, application):
        ApplicationService.set_status(application.pk, application.project.client, 'rejected')

        notification = Notification.objects.get(recipient=application.freelancer)
        assert notification.notification_type == 'application_rejected'
        assert 'declined' in notification.message

    def test_client_notes(self, application):
        ApplicationService.set_status(
            application.pk, application.project.client, 'shortlisted', client_notes='Strong portfolio'
        )

        application.refresh_from_db()
        assert application.client_notes == 'Strong portfolio'

    def test_invalid_status(self, application):
        with pytest.raises(InvalidInputError, match='Invalid status'):
            ApplicationService.set_status(application.pk, application.project.client, 'hired')
        assert not Notification.objects.exists()

    def test_non_owner(self, application):
        with pytest.raises(PermissionDeniedError, match='not authorized to update this application'):
            ApplicationService.set_status(application.pk, application.freelancer, 'accepted')

    def test_final_states_are_final(self, application):
        owner = application.project.client
        ApplicationService.set_status(application.pk, owner, 'rejected')

        with pytest.raises(InvalidInputError) as exc_info:
            ApplicationService.set_status(application.pk, owner, 'accepted')

        assert str(exc_info.value.detail) == 'Cannot change application status from rejected to accepted'
        assert Notification.objects.filter(recipient=application.freelancer).count() == 1

    def test_shortlisted_can_return_to_pending(self, application):
        owner = application.project.client
        ApplicationService.set_status(application.pk, owner, 'shortlisted')
        ApplicationService.set_status(application.pk, owner, 'pending')

        application.refresh_from_db()
        assert application.status == 'pending'

    def test_transition_policy_from_settings(self, application, settings):
        settings.APPLICATION_STATUS_TRANSITIONS = {
            'pending': ['shortlisted'],
            'shortlisted': ['accepted'],
            'accepted': [],
            'rejected': [],
        }

        with pytest.raises(InvalidInputError):
            ApplicationService.set_status(application.pk, application.project.client, 'accepted')


class TestStatusMessages:

    @pytest.mark.parametrize('new_status, text', [
        ('accepted', 'has been accepted!'),
        ('rejected', 'has been declined.'),
        ('shortlisted', 'has been shortlisted.'),
        ('pending', 'has been updated.'),
    ])
    def test_message_per_status(self, new_status, text):
        message = status_message(new_status, 'Logo design')
        assert '"Logo design"' in message
        assert message.endswith(text)

    def test_default_policy(self):
        assert ApplicationValidator.can_transition('pending', 'accepted')
        assert not ApplicationValidator.can_transition('accepted', 'pending')


# ============================================================================
# ARCHIVE AND DOWNLOAD
# ============================================================================

@pytest.mark.django_db
class TestArchive:

    def test_owner_archives_and_restores(self, application):
        owner = application.project.client

        ApplicationService.archive(application.pk, owner)
        application.refresh_from_db()
        assert application.is_archived

        ApplicationService.archive(application.pk, owner, archived=False)
        application.refresh_from_db()
        assert not application.is_archived

    def test_applicant_cannot_archive(self, application):
        with pytest.raises(PermissionDeniedError):
            ApplicationService.archive(application.pk, application.freelancer)


@pytest.mark.django_db
class TestDownloadAttachment:

    @pytest.fixture
    def submitted(self, project, freelancer):
        return ApplicationService.submit(
            project.pk, freelancer, 'Attached', files=[make_upload('Portfolio.pdf')]
        ).data

    def test_files_are_kept_out_of_public_media(self, submitted, settings):
        attachment = submitted.attachments.get()
        path = os.path.realpath(attachment.file.path)

        assert path.startswith(os.path.realpath(settings.PRIVATE_MEDIA_ROOT))
        assert not path.startswith(os.path.realpath(settings.MEDIA_ROOT))
        assert isinstance(attachment.file.storage, PrivateFileSystemStorage)
        with pytest.raises(ValueError):
            attachment.file.url

    def test_applicant_and_owner_can_download(self, submitted):
        attachment = submitted.attachments.get()

        for requester in (submitted.freelancer, submitted.project.client):
            found = ApplicationService.download_attachment(submitted.pk, attachment.filename, requester)
            assert found == attachment
            assert found.original_name == 'Portfolio.pdf'

    def test_stranger_cannot_download(self, submitted):
        attachment = submitted.attachments.get()

        with pytest.raises(PermissionDeniedError, match='not authorized to access this file'):
            ApplicationService.download_attachment(submitted.pk, attachment.filename, UserFactory())

    def test_unknown_application(self, user):
        with pytest.raises(ResourceNotFoundError, match='Application not found'):
            ApplicationService.download_attachment(999999, 'x.pdf', user)

    def test_unknown_filename(self, submitted):
        with pytest.raises(ResourceNotFoundError, match='Attachment not found'):
            ApplicationService.download_attachment(submitted.pk, 'nope.pdf', submitted.freelancer)

    def test_file_missing_from_storage(self, submitted):
        attachment = submitted.attachments.get()
        attachment.file.storage.delete(attachment.file.name)

        with pytest.raises(ResourceNotFoundError, match='Attachment not found'):
            ApplicationService.download_attachment(submitted.pk, attachment.filename, submitted.freelancer)

    def test_project_delete_removes_files(self, submitted):
        attachment = submitted.attachments.get()
        storage, name = attachment.file.storage, attachment.file.name
        project = submitted.project

        from projects.services import ProjectService
        ProjectService.delete(project, project.client)

        assert not storage.exists(name)
        assert not ApplicationAttachment.objects.exists()
