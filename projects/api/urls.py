"""
Projects API URLs
"""

from rest_framework.routers import DefaultRouter

from .viewsets import ActivityViewSet, CommentViewSet, ProjectViewSet

app_name = 'projects'

router = DefaultRouter()

router.register(r'projects', ProjectViewSet, basename='project')
router.register(r'comments', CommentViewSet, basename='comment')
router.register(r'activity', ActivityViewSet, basename='activity')

urlpatterns = router.urls
