"""
Dashboard Services - read-only aggregates for the dashboard endpoints.
"""

from typing import Any, Dict

from django.db.models import Count

from applications.models import Application
from memberships.services import MembershipService
from projects.models import Project, ProjectSave

RECENT_LIMIT = 5


def _counts_by_status(queryset, choices) -> Dict[str, int]:
    counts = {value: 0 for value in choices.values}
    for row in queryset.order_by().values('status').annotate(count=Count('id')):
        counts[row['status']] = row['count']
    return counts


class DashboardService:

    @staticmethod
    def client_overview(user) -> Dict[str, Any]:
        """
        Overview for a client.

        Returns:
            dict with project counts by status, application totals and the
            most recent applications received
        """
        projects = Project.objects.filter(client=user)
        received = Application.objects.filter(project__client=user)

        return {
            'projects_by_status': _counts_by_status(projects, Project.Status),
            'total_projects': projects.count(),
            'total_applications': received.count(),
            'pending_applications': received.filter(
                status=Application.ApplicationStatus.PENDING,
                is_archived=False,
            ).count(),
            'recent_applications': list(
                received.select_related('project', 'freelancer', 'project__client')
                .prefetch_related('attachments')
                .order_by('-created_at', '-id')[:RECENT_LIMIT]
            ),
        }

    @staticmethod
    def freelancer_overview(user) -> Dict[str, Any]:
        """
        Overview for a freelancer.

        Returns:
            dict with application counts by status, the newest saved
            projects and the membership status
        """
        applications = Application.objects.filter(freelancer=user)
        saved = (
            ProjectSave.objects.filter(user=user)
            .select_related('project')
            .order_by('-created_at', '-id')[:RECENT_LIMIT]
        )

        return {
            'applications_by_status': _counts_by_status(
                applications, Application.ApplicationStatus
            ),
            'total_applications': applications.count(),
            'saved_projects': [save.project for save in saved],
            'membership': MembershipService.status(user),
        }
