"""
Dashboard API Views - aggregated data for the client and freelancer dashboards.
"""

from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from ..services import DashboardService
from .serializers import ClientDashboardSerializer, FreelancerDashboardSerializer


class ClientDashboardView(APIView):
    """
    API endpoint for the client dashboard.

    GET /api/v1/dashboard/client/
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        overview = DashboardService.client_overview(request.user)
        serializer = ClientDashboardSerializer(overview, context={'request': request})
        return Response(serializer.data)


class FreelancerDashboardView(APIView):
    """
    API endpoint for the freelancer dashboard.

    GET /api/v1/dashboard/freelancer/
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        overview = DashboardService.freelancer_overview(request.user)
        serializer = FreelancerDashboardSerializer(overview, context={'request': request})
        return Response(serializer.data)
