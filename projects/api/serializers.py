"""
Projects Serializers - DRF serializers for API endpoints.

This module provides serializers for:
- Projects (feed entries and detail)
- Project attachments
- Comments and threads
- Activity log entries

Writes go through the service layer; these serializers only shape output.
"""

from rest_framework import serializers

from core.serializers import UserSummarySerializer

from ..models import Activity, Comment, Project, ProjectAttachment
from ..services import RECENT_COMMENTS_LIMIT


# ============================================================================
# COMMENT SERIALIZERS
# ============================================================================

class CommentSerializer(serializers.ModelSerializer):
    """Serializer for a single comment."""

    user = UserSummarySerializer(read_only=True)
    like_count = serializers.SerializerMethodField()

    class Meta:
        model = Comment
        fields = [
            'id',
            'project',
            'user',
            'content',
            'parent',
            'like_count',
            'created_at',
        ]
        read_only_fields = fields

    def get_like_count(self, obj) -> int:
        return obj.likes.count()


class CommentThreadSerializer(CommentSerializer):
    """Top-level comment with its replies."""

    replies = CommentSerializer(many=True, read_only=True)

    class Meta(CommentSerializer.Meta):
        fields = CommentSerializer.Meta.fields + ['replies']
        read_only_fields = fields


# ============================================================================
# PROJECT SERIALIZERS
# ============================================================================

class ProjectAttachmentSerializer(serializers.ModelSerializer):

    url = serializers.FileField(source='file', read_only=True)

    class Meta:
        model = ProjectAttachment
        fields = ['id', 'name', 'url', 'content_type', 'size', 'created_at']
        read_only_fields = fields


class ProjectSerializer(serializers.ModelSerializer):
    """
    Serializer for feed entries and project detail.

    Includes the owner summary and the latest visible comments.
    """

    client = UserSummarySerializer(read_only=True)
    budget = serializers.DecimalField(max_digits=12, decimal_places=2, coerce_to_string=False)
    skills = serializers.SlugRelatedField(many=True, read_only=True, slug_field='name')
    attachments = ProjectAttachmentSerializer(many=True, read_only=True)
    likes = serializers.SerializerMethodField()
    saved_by = serializers.SerializerMethodField()
    like_count = serializers.SerializerMethodField()
    save_count = serializers.SerializerMethodField()
    is_featured = serializers.BooleanField(read_only=True)
    comments = serializers.SerializerMethodField()

    class Meta:
        model = Project
        fields = [
            'id',
            'uuid',
            'title',
            'description',
            'client',
            'budget',
            'deadline',
            'category',
            'skills',
            'status',
            'visibility',
            'location',
            'attachments',
            'views',
            'shares',
            'likes',
            'like_count',
            'saved_by',
            'save_count',
            'application_count',
            'assigned_freelancer',
            'is_featured',
            'comments',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_likes(self, obj):
        return [like.user_id for like in obj.likes.all()]

    def get_saved_by(self, obj):
        return [save.user_id for save in obj.saves.all()]

    def get_like_count(self, obj) -> int:
        return len(obj.likes.all())

    def get_save_count(self, obj) -> int:
        return len(obj.saves.all())

    def get_comments(self, obj):
        comments = getattr(obj, 'all_visible_comments', None)
        if comments is None:
            comments = obj.comments.filter(is_hidden=False).order_by('-created_at', '-id')
        return CommentSerializer(list(comments[:RECENT_COMMENTS_LIMIT]), many=True).data


class ProjectSummarySerializer(serializers.ModelSerializer):
    """Compact project representation embedded in applications."""

    budget = serializers.DecimalField(max_digits=12, decimal_places=2, coerce_to_string=False)

    class Meta:
        model = Project
        fields = ['id', 'title', 'budget', 'deadline', 'status', 'category']
        read_only_fields = fields


# ============================================================================
# ACTIVITY SERIALIZERS
# ============================================================================

class ActivitySerializer(serializers.ModelSerializer):

    project_title = serializers.CharField(source='project.title', read_only=True, default=None)

    class Meta:
        model = Activity
        fields = [
            'id',
            'activity_type',
            'project',
            'project_title',
            'comment',
            'target_user',
            'metadata',
            'created_at',
        ]
        read_only_fields = fields
