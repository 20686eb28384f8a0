"""
Memberships App Configuration.
"""

from django.apps import AppConfig


class MembershipsConfig(AppConfig):
    """Configuration for the memberships app."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'memberships'
    verbose_name = 'Memberships'
