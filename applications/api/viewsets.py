"""
Applications API Views - REST API endpoints.

- apply: POST /api/v1/projects/{project_id}/apply/ (multipart)
- project applications: GET /api/v1/projects/{project_id}/applications/
- my applications: GET /api/v1/my-applications/
- retrieve: GET /api/v1/applications/{id}/
- status: PATCH /api/v1/applications/{id}/status/
- archive: POST /api/v1/applications/{id}/archive/
- attachment: GET /api/v1/applications/{id}/attachments/{filename}/

API URL namespace: api:v1:applications:*
"""

from django.http import FileResponse
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.viewsets import ServiceViewSet, field_value

from ..services import ApplicationService
from .serializers import ApplicationSerializer


def _truthy(value) -> bool:
    return str(value).lower() in ('1', 'true', 'yes', 'on')


class ApplicationViewSet(ServiceViewSet):
    """
    ViewSet for a single application.

    The applicant and the project owner can read an application and
    download its attachments; only the project owner can review it.
    """

    serializer_class = ApplicationSerializer
    permission_classes = [IsAuthenticated]
    resource_name = 'Application'

    def retrieve(self, request, pk=None):
        application = ApplicationService.get(pk, request.user)
        return Response(self.get_serializer(application).data)

    @action(detail=True, methods=['patch'])
    def status(self, request, pk=None):
        """
        Change the application status.

        PATCH /api/v1/applications/{id}/status/ {status, clientNotes}

        Returns:
            200: {message, application}
            400: Invalid status or transition
            403: Requester is not the project owner
        """
        result = ApplicationService.set_status(
            pk,
            request.user,
            request.data.get('status'),
            client_notes=field_value(request.data, 'clientNotes', 'client_notes'),
        )
        return Response({
            'message': result.message,
            'application': self.get_serializer(result.data).data,
        })

    @action(detail=True, methods=['post'])
    def archive(self, request, pk=None):
        archived = _truthy(request.data.get('archived', True))
        result = ApplicationService.archive(pk, request.user, archived=archived)
        return Response({
            'message': result.message,
            'application': self.get_serializer(result.data).data,
        })

    @action(
        detail=True,
        methods=['get'],
        url_path=r'attachments/(?P<filename>[^/]+)',
        url_name='attachment',
    )
    def attachment(self, request, pk=None, filename=None):
        """Stream an attachment under its original filename."""
        attachment = ApplicationService.download_attachment(pk, filename, request.user)
        return FileResponse(
            attachment.file.open('rb'),
            as_attachment=True,
            filename=attachment.original_name,
            content_type=attachment.mimetype or None,
        )


class ProjectApplicationViewSet(viewsets.ViewSet):
    """Applications nested under a project."""

    permission_classes = [IsAuthenticated]
    parser_classes = [JSONParser, MultiPartParser, FormParser]

    def create(self, request, project_pk=None):
        """
        Apply to a project.

        POST /api/v1/projects/{project_id}/apply/
        Fields: coverLetter, proposedBudget, estimatedDuration,
        attachments (up to 5 files). snake_case names are also accepted.

        Returns:
            201: {applicationId}
        """
        result = ApplicationService.submit(
            project_pk,
            request.user,
            field_value(request.data, 'coverLetter', 'cover_letter'),
            proposed_budget=field_value(request.data, 'proposedBudget', 'proposed_budget'),
            estimated_duration=field_value(request.data, 'estimatedDuration', 'estimated_duration'),
            files=request.FILES.getlist('attachments'),
        )
        return Response(
            {'message': result.message, 'applicationId': result.data.pk},
            status=status.HTTP_201_CREATED,
        )

    def list(self, request, project_pk=None):
        applications = ApplicationService.list_for_project(
            project_pk,
            request.user,
            include_archived=_truthy(request.query_params.get('include_archived', '')),
        )
        serializer = ApplicationSerializer(applications, many=True, context={'request': request})
        return Response(serializer.data)


class MyApplicationViewSet(viewsets.ViewSet):
    """The caller's own applications, newest first."""

    permission_classes = [IsAuthenticated]

    def list(self, request):
        applications = ApplicationService.list_mine(request.user)
        serializer = ApplicationSerializer(applications, many=True, context={'request': request})
        return Response(serializer.data)
