"""
Memberships API Views.

- plans: GET /api/v1/memberships/plans/
- me: GET /api/v1/memberships/me/
- upgrade: POST /api/v1/memberships/upgrade/ {plan, duration}
- commission: GET /api/v1/memberships/commission/?amount=
"""

from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from ..services import MembershipService
from .serializers import MembershipStatusSerializer, MembershipUpgradeSerializer


class MembershipViewSet(viewsets.ViewSet):
    """Plans catalogue and the caller's membership."""

    permission_classes = [IsAuthenticated]

    @action(detail=False, methods=['get'], permission_classes=[AllowAny])
    def plans(self, request):
        return Response(MembershipService.plans())

    @action(detail=False, methods=['get'])
    def me(self, request):
        status_data = MembershipService.status(request.user)
        return Response(MembershipStatusSerializer(status_data).data)

    @action(detail=False, methods=['post'])
    def upgrade(self, request):
        serializer = MembershipUpgradeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = MembershipService.upgrade(
            request.user,
            serializer.validated_data['plan'],
            duration=serializer.validated_data['duration'],
            auto_renew=serializer.validated_data.get('auto_renew'),
        )
        status_data = MembershipService.status(request.user)
        return Response({
            'message': result.message,
            'membership': MembershipStatusSerializer(status_data).data,
        })

    @action(detail=False, methods=['get'])
    def commission(self, request):
        return Response(
            MembershipService.calculate_commission(
                request.user,
                request.query_params.get('amount'),
            )
        )
