"""
Projects app configuration.

This app manages projects posted by clients and the engagement around them:
- Open project feed with filtering, sorting and pagination
- Likes, saves, shares and threaded comments
- The append-only activity log
"""

from django.apps import AppConfig


class ProjectsConfig(AppConfig):
    """Configuration for the projects app."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'projects'
    verbose_name = 'Projects'

    def ready(self):
        """Register outbox handlers when app is ready."""
        import projects.handlers  # noqa: F401
