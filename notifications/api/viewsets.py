"""
Notifications API Views.

The inbox of the authenticated user:
- list: GET /api/v1/notifications/?filter=unread|read
- destroy: DELETE /api/v1/notifications/{id}/
- read / unread: POST /api/v1/notifications/{id}/read/ , unread/
- mark_all_read: POST /api/v1/notifications/mark-all-read/
- unread_count: GET /api/v1/notifications/unread-count/

Notifications of other users are reported as not found.
"""

from rest_framework import mixins, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.viewsets import ServiceViewSet

from ..serializers import NotificationSerializer
from ..services import notification_service


class NotificationViewSet(mixins.ListModelMixin, ServiceViewSet):
    """ViewSet for the caller's notifications."""

    serializer_class = NotificationSerializer
    permission_classes = [IsAuthenticated]
    resource_name = 'Notification'

    def get_queryset(self):
        return notification_service.list_for(
            self.request.user,
            self.request.query_params.get('filter'),
        )

    def retrieve(self, request, pk=None):
        notification = notification_service.get_for(request.user, pk)
        return Response(self.get_serializer(notification).data)

    def destroy(self, request, pk=None):
        notification_service.delete(request.user, pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['post'])
    def read(self, request, pk=None):
        notification = notification_service.mark_read(request.user, pk)
        return Response(self.get_serializer(notification).data)

    @action(detail=True, methods=['post'])
    def unread(self, request, pk=None):
        notification = notification_service.mark_unread(request.user, pk)
        return Response(self.get_serializer(notification).data)

    @action(detail=False, methods=['post'], url_path='mark-all-read')
    def mark_all_read(self, request):
        updated = notification_service.mark_all_as_read(request.user)
        return Response({'updated': updated})

    @action(detail=False, methods=['get'], url_path='unread-count')
    def unread_count(self, request):
        return Response({'count': notification_service.get_unread_count(request.user)})
