"""
Memberships Celery Tasks.

- renew_expired_memberships: daily renewal of lapsed periods and monthly
  bid allowances
"""

import logging
from typing import Any, Dict

from celery import shared_task
from django.db.models import Q
from django.utils import timezone

from .models import MONTH, Membership
from .services import MembershipService

logger = logging.getLogger(__name__)


@shared_task(name='memberships.tasks.renew_expired_memberships')
def renew_expired_memberships() -> Dict[str, Any]:
    """
    Renew memberships whose period ended and refill monthly allowances.

    Returns:
        dict: Number of memberships renewed
    """
    now = timezone.now()
    due = Membership.objects.filter(
        Q(ends_at__lte=now) | Q(bids_reset_at__lte=now - MONTH)
    )

    renewed = 0
    for membership in due.iterator():
        try:
            if MembershipService.renew(membership):
                renewed += 1
        except Exception as e:
            logger.exception(f"Membership renewal failed for {membership.pk}: {e}")

    if renewed:
        logger.info(f"Renewed {renewed} memberships")
    return {'renewed': renewed}
