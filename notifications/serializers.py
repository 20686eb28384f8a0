"""
Notification Serializers for REST API.
"""

from django.utils import timezone
from django.utils.timesince import timesince
from rest_framework import serializers

from .models import Notification


class NotificationSerializer(serializers.ModelSerializer):
    """
    Notification display serializer.
    Used for both the inbox list and single notification responses.
    """
    time_ago = serializers.SerializerMethodField()
    notification_type_display = serializers.CharField(
        source='get_notification_type_display',
        read_only=True
    )

    class Meta:
        model = Notification
        fields = [
            'id', 'uuid', 'notification_type', 'notification_type_display',
            'message', 'entity_type', 'entity_id', 'metadata',
            'priority', 'is_read', 'read_at', 'time_ago', 'created_at',
        ]
        read_only_fields = fields

    def get_time_ago(self, obj):
        """Get human-readable time since notification was created."""
        if obj.created_at:
            return timesince(obj.created_at, timezone.now())
        return None
