"""
Memberships API URLs
"""

from rest_framework.routers import SimpleRouter

from .viewsets import MembershipViewSet

app_name = 'memberships'

router = SimpleRouter()
router.register(r'', MembershipViewSet, basename='membership')

urlpatterns = router.urls
