"""
API tests for application endpoints.
"""

import pytest
from rest_framework import status
from rest_framework.test import APIClient

from applications.models import Application
from conftest import PDF_BYTES, PNG_BYTES, ApplicationFactory, UserFactory, make_upload


def apply_url(project_id):
    return f'/api/v1/projects/{project_id}/apply/'


def project_applications_url(project_id):
    return f'/api/v1/projects/{project_id}/applications/'


def application_url(application_id, suffix=''):
    return f'/api/v1/applications/{application_id}/{suffix}'


@pytest.mark.django_db
class TestApplyAPI:

    def test_apply_multipart(self, freelancer_api, freelancer, project):
        response = freelancer_api.post(
            apply_url(project.pk),
            {
                'coverLetter': 'I have shipped five similar projects.',
                'proposedBudget': '900',
                'estimatedDuration': '10 days',
                'attachments': [make_upload('cv.pdf'), make_upload('work.png', PNG_BYTES, 'image/png')],
            },
            format='multipart',
        )

        assert response.status_code == status.HTTP_201_CREATED
        application = Application.objects.get(pk=response.data['applicationId'])
        assert application.freelancer == freelancer
        assert application.attachments.count() == 2
        assert application.proposed_budget == 900
        assert application.estimated_duration == '10 days'

    def test_apply_with_json_fields(self, freelancer_api, project):
        response = freelancer_api.post(
            apply_url(project.pk),
            {'coverLetter': 'I can do it', 'proposedBudget': '700'},
            format='json',
        )

        assert response.status_code == status.HTTP_201_CREATED
        application = Application.objects.get(pk=response.data['applicationId'])
        assert application.cover_letter == 'I can do it'
        assert application.proposed_budget == 700

    def test_snake_case_field_aliases(self, freelancer_api, project):
        response = freelancer_api.post(
            apply_url(project.pk),
            {'cover_letter': 'Aliased', 'estimated_duration': '2 weeks'},
            format='json',
        )

        assert response.status_code == status.HTTP_201_CREATED
        application = Application.objects.get(pk=response.data['applicationId'])
        assert application.proposed_budget == project.budget
        assert application.estimated_duration == '2 weeks'

    def test_non_numeric_budget(self, freelancer_api, project):
        response = freelancer_api.post(
            apply_url(project.pk),
            {'coverLetter': 'Hi', 'proposedBudget': 'NaN'},
            format='json',
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error_code'] == 'VALIDATION_ERROR'
        assert not Application.objects.exists()

    def test_apply_twice(self, freelancer_api, project):
        freelancer_api.post(apply_url(project.pk), {'cover_letter': 'First'}, format='json')
        response = freelancer_api.post(apply_url(project.pk), {'cover_letter': 'Again'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['message'] == 'You have already applied to this project'
        assert response.data['error_code'] == 'ALREADY_EXISTS'

    def test_apply_without_cover_letter(self, freelancer_api, project):
        response = freelancer_api.post(apply_url(project.pk), {}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['message'] == 'Cover letter is required'

    def test_apply_to_missing_project(self, freelancer_api):
        response = freelancer_api.post(apply_url(999999), {'cover_letter': 'Hi'}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['message'] == 'Project not found'

    def test_apply_requires_authentication(self, api_client, project):
        response = api_client.post(apply_url(project.pk), {'cover_letter': 'Hi'}, format='json')

        assert response.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN)


@pytest.mark.django_db
class TestApplicationReadAPI:

    def test_owner_lists_project_applications(self, client_api, project, application):
        response = client_api.get(project_applications_url(project.pk))

        assert response.status_code == status.HTTP_200_OK
        assert [a['id'] for a in response.data] == [application.pk]
        assert response.data[0]['freelancer']['id'] == application.freelancer_id
        assert 'client_notes' in response.data[0]

    def test_non_owner_cannot_list(self, freelancer_api, project):
        response = freelancer_api.get(project_applications_url(project.pk))

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['message'] == 'You are not authorized to view these applications'

    def test_include_archived(self, client_api, project):
        ApplicationFactory(project=project, is_archived=True)

        assert client_api.get(project_applications_url(project.pk)).data == []
        response = client_api.get(project_applications_url(project.pk), {'include_archived': 'true'})
        assert len(response.data) == 1

    def test_my_applications(self, freelancer_api, application):
        ApplicationFactory()

        response = freelancer_api.get('/api/v1/my-applications/')

        assert response.status_code == status.HTTP_200_OK
        assert [a['id'] for a in response.data] == [application.pk]
        project_summary = response.data[0]['project']
        assert set(project_summary) >= {'title', 'budget', 'deadline', 'status'}
        assert 'client_notes' not in response.data[0]

    def test_retrieve_access(self, freelancer_api, client_api, application):
        stranger = APIClient()
        stranger.force_authenticate(user=UserFactory())

        assert freelancer_api.get(application_url(application.pk)).status_code == status.HTTP_200_OK
        assert client_api.get(application_url(application.pk)).status_code == status.HTTP_200_OK
        denied = stranger.get(application_url(application.pk))
        assert denied.status_code == status.HTTP_403_FORBIDDEN
        assert denied.data['message'] == 'You are not authorized to view this application'


@pytest.mark.django_db
class TestApplicationReviewAPI:

    def test_set_status(self, client_api, application):
        response = client_api.patch(
            application_url(application.pk, 'status/'),
            {'status': 'shortlisted', 'clientNotes': 'Call on Monday'},
            format='json',
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['application']['status'] == 'shortlisted'
        assert response.data['application']['client_notes'] == 'Call on Monday'

    def test_set_status_by_applicant(self, freelancer_api, application):
        response = freelancer_api.patch(
            application_url(application.pk, 'status/'), {'status': 'accepted'}, format='json'
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_invalid_status(self, client_api, application):
        response = client_api.patch(
            application_url(application.pk, 'status/'), {'status': 'maybe'}, format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['message'] == 'Invalid status'

    def test_archive(self, client_api, application):
        response = client_api.post(application_url(application.pk, 'archive/'), {}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['application']['is_archived'] is True


@pytest.mark.django_db
class TestAttachmentDownloadAPI:

    def test_download_uses_original_name(self, freelancer_api, client_api, project):
        freelancer_api.post(
            apply_url(project.pk),
            {'cover_letter': 'Attached', 'attachments': [make_upload('Resume 2024.pdf')]},
            format='multipart',
        )
        application = Application.objects.get(project=project)
        attachment = application.attachments.get()

        response = client_api.get(application_url(application.pk, f'attachments/{attachment.filename}/'))

        assert response.status_code == status.HTTP_200_OK
        assert 'attachment' in response['Content-Disposition']
        assert 'Resume 2024.pdf' in response['Content-Disposition']
        assert b''.join(response.streaming_content) == PDF_BYTES

    def test_download_by_stranger(self, project, freelancer):
        from applications.services import ApplicationService

        application = ApplicationService.submit(
            project.pk, freelancer, 'Attached', files=[make_upload('cv.pdf')]
        ).data
        attachment = application.attachments.get()
        stranger = APIClient()
        stranger.force_authenticate(user=UserFactory())

        response = stranger.get(application_url(application.pk, f'attachments/{attachment.filename}/'))

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['message'] == 'You are not authorized to access this file'

    def test_download_unknown_file(self, freelancer_api, application):
        response = freelancer_api.get(application_url(application.pk, 'attachments/missing.pdf/'))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['message'] == 'Attachment not found'
