# Generated manually for notifications initial migration

from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import uuid


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Notification',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('uuid', models.UUIDField(default=uuid.uuid4, editable=False, unique=True)),
                ('notification_type', models.CharField(choices=[('new_message', 'New Message'), ('proposal_received', 'Proposal Received'), ('proposal_accepted', 'Proposal Accepted'), ('contract_created', 'Contract Created'), ('payment_received', 'Payment Received'), ('milestone_approved', 'Milestone Approved'), ('project_completed', 'Project Completed'), ('review_received', 'Review Received'), ('project_invitation', 'Project Invitation'), ('system', 'System'), ('new_project', 'New Project'), ('new_application', 'New Application'), ('application_pending', 'Application Pending'), ('application_shortlisted', 'Application Shortlisted'), ('application_accepted', 'Application Accepted'), ('application_rejected', 'Application Rejected'), ('new_comment', 'New Comment')], db_index=True, default='system', max_length=50)),
                ('message', models.TextField()),
                ('metadata', models.JSONField(blank=True, default=dict)),
                ('entity_type', models.CharField(blank=True, choices=[('project', 'Project'), ('application', 'Application'), ('proposal', 'Proposal'), ('contract', 'Contract'), ('message', 'Message'), ('payment', 'Payment'), ('review', 'Review'), ('comment', 'Comment')], max_length=20)),
                ('entity_id', models.PositiveBigIntegerField(blank=True, null=True)),
                ('priority', models.CharField(choices=[('low', 'Low'), ('normal', 'Normal'), ('high', 'High')], default='normal', max_length=10)),
                ('is_read', models.BooleanField(db_index=True, default=False)),
                ('read_at', models.DateTimeField(blank=True, null=True)),
                ('source_event', models.UUIDField(blank=True, null=True, unique=True)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('recipient', models.ForeignKey(help_text='User who receives this notification', on_delete=django.db.models.deletion.CASCADE, related_name='notifications', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Notification',
                'verbose_name_plural': 'Notifications',
                'ordering': ['-created_at', '-id'],
                'indexes': [
                    models.Index(fields=['recipient', '-created_at'], name='notif_recipient_created_idx'),
                    models.Index(fields=['recipient', 'is_read'], name='notif_recipient_read_idx'),
                    models.Index(fields=['notification_type', 'created_at'], name='notif_type_created_idx'),
                ],
            },
        ),
    ]
