"""
Celery Beat Schedule Configuration for FreelanceHub

Periodic tasks:
- Outbox sweep: re-enqueue side-effect events that were never dispatched
- Membership renewal: roll over auto-renewing memberships
"""

from celery.schedules import crontab
from datetime import timedelta


CELERY_BEAT_SCHEDULE = {
    'outbox-sweep-every-minute': {
        'task': 'core.tasks.dispatch_pending_events',
        'schedule': timedelta(minutes=1),
        'options': {'queue': 'outbox'},
    },

    'memberships-renew-daily': {
        'task': 'memberships.tasks.renew_expired_memberships',
        'schedule': crontab(minute=15, hour=0),
        'options': {'queue': 'default'},
    },
}
