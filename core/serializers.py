"""
Core Serializers - Shared representations and serializer mixins.

This module provides:
- UserSummarySerializer: the public summary of a user embedded in other payloads
- OwnerOnlyFieldMixin: hides fields from everyone but the owning user

Usage:
    from core.serializers import OwnerOnlyFieldMixin

    class ApplicationSerializer(OwnerOnlyFieldMixin, serializers.ModelSerializer):
        owner_only_fields = ['client_notes']
        owner_field = 'project.client'
"""

from typing import Any, Dict, List

from django.contrib.auth import get_user_model
from rest_framework import serializers


class UserSummarySerializer(serializers.ModelSerializer):
    """Minimal user representation (owner, applicant, commenter)."""

    name = serializers.SerializerMethodField()

    class Meta:
        model = get_user_model()
        fields = ['id', 'username', 'name']
        read_only_fields = fields

    def get_name(self, obj) -> str:
        return obj.get_full_name() or obj.get_username()


class OwnerOnlyFieldMixin:
    """
    Mixin to hide certain fields from non-owners.

    Attributes:
        owner_only_fields: List of fields only visible to the object owner
        owner_field: Dotted path to the attribute referencing the owner user
    """
    owner_only_fields: List[str] = []
    owner_field: str = 'user'

    def to_representation(self, instance) -> Dict[str, Any]:
        """Override to hide owner-only fields from non-owners."""
        data = super().to_representation(instance)

        if not self.owner_only_fields:
            return data

        request = self.context.get('request')
        if not request or not hasattr(request, 'user'):
            return self._remove_owner_fields(data)

        if self._is_owner(request, instance):
            return data

        return self._remove_owner_fields(data)

    def _resolve_owner(self, instance):
        owner = instance
        for attr in self.owner_field.split('.'):
            owner = getattr(owner, attr, None)
            if owner is None:
                return None
        return owner

    def _is_owner(self, request, instance) -> bool:
        """Check if the requesting user is the owner."""
        user = request.user
        if not user.is_authenticated:
            return False

        owner = self._resolve_owner(instance)
        if owner is not None and hasattr(owner, 'pk'):
            return owner.pk == user.pk
        return False

    def _remove_owner_fields(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Remove owner-only fields from data."""
        for field_name in self.owner_only_fields:
            data.pop(field_name, None)
        return data
