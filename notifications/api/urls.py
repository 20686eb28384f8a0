"""
Notifications API URLs
"""

from rest_framework.routers import SimpleRouter

from .viewsets import NotificationViewSet

app_name = 'notifications'

router = SimpleRouter()
router.register(r'', NotificationViewSet, basename='notification')

urlpatterns = router.urls
