"""
Applications API URLs
"""

from django.urls import path
from rest_framework.routers import SimpleRouter

from .viewsets import ApplicationViewSet, MyApplicationViewSet, ProjectApplicationViewSet

app_name = 'applications'

router = SimpleRouter()
router.register(r'applications', ApplicationViewSet, basename='application')

urlpatterns = [
    path(
        'projects/<str:project_pk>/apply/',
        ProjectApplicationViewSet.as_view({'post': 'create'}),
        name='project-apply',
    ),
    path(
        'projects/<str:project_pk>/applications/',
        ProjectApplicationViewSet.as_view({'get': 'list'}),
        name='project-applications',
    ),
    path(
        'my-applications/',
        MyApplicationViewSet.as_view({'get': 'list'}),
        name='my-applications',
    ),
] + router.urls
