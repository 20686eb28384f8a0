"""
Dashboard Serializers.
"""

from rest_framework import serializers

from applications.api.serializers import ApplicationSerializer
from memberships.api.serializers import MembershipStatusSerializer
from projects.api.serializers import ProjectSummarySerializer


class ClientDashboardSerializer(serializers.Serializer):
    projects_by_status = serializers.DictField(child=serializers.IntegerField())
    total_projects = serializers.IntegerField()
    total_applications = serializers.IntegerField()
    pending_applications = serializers.IntegerField()
    recent_applications = ApplicationSerializer(many=True)


class FreelancerDashboardSerializer(serializers.Serializer):
    applications_by_status = serializers.DictField(child=serializers.IntegerField())
    total_applications = serializers.IntegerField()
    saved_projects = ProjectSummarySerializer(many=True)
    membership = MembershipStatusSerializer()
