"""
Celery configuration for FreelanceHub.

This module configures Celery for async task processing with:
- Auto-discovery of tasks from all registered Django apps
- Task routing to the outbox queue
- Retry policies
- Result backend configuration
"""

import os

from celery import Celery
from kombu import Exchange, Queue

# Set the default Django settings module for the 'celery' program.
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'freelancehub.settings')

app = Celery('freelancehub')

# namespace='CELERY' means all celery-related configuration keys
# should have a `CELERY_` prefix.
app.config_from_object('django.conf:settings', namespace='CELERY')

# Load task modules from all registered Django apps.
app.autodiscover_tasks()


# ==================== QUEUE CONFIGURATION ====================

default_exchange = Exchange('default', type='direct')
outbox_exchange = Exchange('outbox', type='direct')

app.conf.task_queues = (
    Queue('default', default_exchange, routing_key='default'),
    Queue('outbox', outbox_exchange, routing_key='outbox'),
)

app.conf.task_default_queue = 'default'
app.conf.task_default_exchange = 'default'
app.conf.task_default_routing_key = 'default'


# ==================== TASK ROUTING ====================

app.conf.task_routes = {
    'core.tasks.*': {'queue': 'outbox', 'routing_key': 'outbox'},
}


# ==================== RETRY CONFIGURATION ====================

app.conf.task_default_retry_delay = 60  # 1 minute
app.conf.task_max_retries = 5


# ==================== SERIALIZATION ====================

app.conf.task_serializer = 'json'
app.conf.result_serializer = 'json'
app.conf.accept_content = ['json']
app.conf.timezone = 'UTC'
app.conf.enable_utc = True


# ==================== TASK EXECUTION ====================

# Acknowledge after completion so a lost worker re-delivers the event
app.conf.task_acks_late = True
app.conf.task_reject_on_worker_lost = True


# ==================== BEAT SCHEDULE ====================

from freelancehub.celery_beat_schedule import CELERY_BEAT_SCHEDULE  # noqa: E402
app.conf.beat_schedule = CELERY_BEAT_SCHEDULE
