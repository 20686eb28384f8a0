"""
Projects API Views - REST API endpoints.

This module provides REST API views using Django Rest Framework:
- The open project feed with filtering, sorting and pagination
- Project lifecycle for the owning client
- Engagement actions (view, like, save, share, comment)
- Comment moderation and the caller's activity log

All views return JSON responses.
API URL namespace: api:v1:projects:*
"""

from rest_framework import mixins, permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated, IsAuthenticatedOrReadOnly
from rest_framework.response import Response

from core.viewsets import ServiceViewSet, field_value

from ..models import Comment, Project
from ..services import ActivityLog, EngagementService, FeedService, ProjectService
from .serializers import (
    ActivitySerializer,
    CommentSerializer,
    CommentThreadSerializer,
    ProjectSerializer,
)


# ============================================================================
# PROJECT VIEWSET
# ============================================================================

class ProjectViewSet(ServiceViewSet):
    """
    ViewSet for projects.

    Provides:
    - list: GET /api/v1/projects/
    - create: POST /api/v1/projects/
    - retrieve: GET /api/v1/projects/{id}/ (counts one view)
    - update: PUT/PATCH /api/v1/projects/{id}/
    - destroy: DELETE /api/v1/projects/{id}/

    Custom actions:
    - mine: GET /api/v1/projects/mine/
    - view: POST /api/v1/projects/{id}/view/
    - like: POST /api/v1/projects/{id}/like/
    - save: POST /api/v1/projects/{id}/save/
    - share: POST /api/v1/projects/{id}/share/
    - comments: GET/POST /api/v1/projects/{id}/comments/

    Filtering:
    - ?category=Design
    - ?skills=React&skills=Python or ?skills=React,Python
    - ?minBudget=100&maxBudget=500 (min_budget/max_budget also accepted)

    Ordering:
    - ?sort=newest|budget_high|budget_low|deadline|popular

    Pagination:
    - ?page=1&limit=10
    """

    queryset = Project.objects.all()
    serializer_class = ProjectSerializer
    permission_classes = [IsAuthenticatedOrReadOnly]
    parser_classes = [JSONParser, MultiPartParser, FormParser]
    pagination_class = None
    resource_name = 'Project'
    list_fields = ('skills',)

    def list(self, request):
        params = request.query_params
        page = FeedService.list(
            category=params.get('category'),
            skills=params.getlist('skills'),
            min_budget=field_value(params, 'minBudget', 'min_budget'),
            max_budget=field_value(params, 'maxBudget', 'max_budget'),
            sort=params.get('sort'),
            page=params.get('page'),
            limit=params.get('limit'),
        )
        serializer = self.get_serializer(page.projects, many=True)
        return Response({
            'projects': serializer.data,
            'hasMore': page.has_more,
            'total': page.total,
        })

    def create(self, request):
        result = ProjectService.create(
            request.user,
            self.request_payload(request),
            files=self.uploaded_files(request),
        )
        return Response(
            {'projectId': result.data.pk, 'message': result.message},
            status=status.HTTP_201_CREATED
        )

    def retrieve(self, request, pk=None):
        project = FeedService.get(pk)
        project.views = FeedService.record_view(project.pk)
        serializer = self.get_serializer(project)
        return Response(serializer.data)

    def update(self, request, pk=None):
        project = self.get_object()
        result = ProjectService.update(
            project,
            request.user,
            self.request_payload(request),
            files=self.uploaded_files(request),
        )
        serializer = self.get_serializer(FeedService.get(result.data.pk))
        return Response(serializer.data)

    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk)

    def destroy(self, request, pk=None):
        project = self.get_object()
        result = ProjectService.delete(project, request.user)
        return Response({'message': result.message})

    @action(detail=False, methods=['get'], permission_classes=[IsAuthenticated])
    def mine(self, request):
        """
        The caller's own projects, any status.

        GET /api/v1/projects/mine/
        """
        serializer = self.get_serializer(ProjectService.mine(request.user), many=True)
        return Response(serializer.data)

    @action(detail=True, methods=['post'], permission_classes=[permissions.AllowAny])
    def view(self, request, pk=None):
        """
        Count one view.

        POST /api/v1/projects/{id}/view/
        """
        return Response({'views': FeedService.record_view(pk)})

    @action(detail=True, methods=['post'], permission_classes=[IsAuthenticated])
    def like(self, request, pk=None):
        """
        Toggle the caller's like.

        POST /api/v1/projects/{id}/like/

        Returns:
            200: {liked, likes, like_count}
        """
        result = EngagementService.toggle_like(self.get_object(), request.user)
        return Response(result.data)

    @action(detail=True, methods=['post'], permission_classes=[IsAuthenticated])
    def save(self, request, pk=None):
        """
        Toggle the caller's bookmark.

        POST /api/v1/projects/{id}/save/

        Returns:
            200: {saved, saved_by, save_count}
        """
        result = EngagementService.toggle_save(self.get_object(), request.user)
        return Response(result.data)

    @action(detail=True, methods=['post'], permission_classes=[IsAuthenticated])
    def share(self, request, pk=None):
        result = EngagementService.share(self.get_object(), request.user)
        return Response(result.data)

    @action(detail=True, methods=['get', 'post'])
    def comments(self, request, pk=None):
        """
        List visible comment threads or add a comment.

        GET /api/v1/projects/{id}/comments/
        POST /api/v1/projects/{id}/comments/ {content, parent}

        Returns:
            200: Comment threads, newest first
            201: The created comment
        """
        project = self.get_object()

        if request.method == 'GET':
            threads = EngagementService.list_comments(project)
            return Response(CommentThreadSerializer(threads, many=True).data)

        result = EngagementService.comment(
            project,
            request.user,
            request.data.get('content'),
            parent_id=request.data.get('parent'),
        )
        return Response(CommentSerializer(result.data).data, status=status.HTTP_201_CREATED)


# ============================================================================
# COMMENT VIEWSET
# ============================================================================

class CommentViewSet(ServiceViewSet):
    """
    Engagement on individual comments.

    - like: POST /api/v1/comments/{id}/like/
    - hide: POST /api/v1/comments/{id}/hide/ (project owner only)
    """

    queryset = Comment.objects.select_related('project')
    serializer_class = CommentSerializer
    permission_classes = [IsAuthenticated]
    resource_name = 'Comment'

    @action(detail=True, methods=['post'])
    def like(self, request, pk=None):
        result = EngagementService.toggle_comment_like(self.get_object(), request.user)
        return Response(result.data)

    @action(detail=True, methods=['post'])
    def hide(self, request, pk=None):
        result = EngagementService.hide_comment(self.get_object(), request.user)
        return Response(result.data)


# ============================================================================
# ACTIVITY VIEWSET
# ============================================================================

class ActivityViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """
    The caller's activity log, newest first.

    GET /api/v1/activity/

    Filtering:
    - ?activity_type=like
    - ?project=12
    """

    serializer_class = ActivitySerializer
    permission_classes = [IsAuthenticated]
    filterset_fields = ['activity_type', 'project']

    def get_queryset(self):
        return ActivityLog.for_user(self.request.user)
