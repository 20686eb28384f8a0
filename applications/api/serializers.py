"""
Applications Serializers - DRF serializers for API endpoints.
"""

from django.urls import reverse
from rest_framework import serializers

from core.serializers import OwnerOnlyFieldMixin, UserSummarySerializer
from projects.api.serializers import ProjectSummarySerializer

from ..models import Application, ApplicationAttachment


class ApplicationAttachmentSerializer(serializers.ModelSerializer):

    download_url = serializers.SerializerMethodField()

    class Meta:
        model = ApplicationAttachment
        fields = ['id', 'filename', 'original_name', 'mimetype', 'size', 'download_url']
        read_only_fields = fields

    def get_download_url(self, obj) -> str:
        return reverse(
            'applications:application-attachment',
            kwargs={'pk': obj.application_id, 'filename': obj.filename},
        )


class ApplicationSerializer(OwnerOnlyFieldMixin, serializers.ModelSerializer):
    """
    Application with freelancer and project summaries.

    ``client_notes`` is shown to the project owner only.
    """

    owner_only_fields = ['client_notes']
    owner_field = 'project.client'

    freelancer = UserSummarySerializer(read_only=True)
    project = ProjectSummarySerializer(read_only=True)
    proposed_budget = serializers.DecimalField(
        max_digits=12, decimal_places=2, coerce_to_string=False
    )
    attachments = ApplicationAttachmentSerializer(many=True, read_only=True)

    class Meta:
        model = Application
        fields = [
            'id',
            'uuid',
            'project',
            'freelancer',
            'cover_letter',
            'proposed_budget',
            'estimated_duration',
            'attachments',
            'status',
            'status_changed_at',
            'client_notes',
            'is_archived',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

