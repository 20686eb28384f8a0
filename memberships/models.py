"""
Memberships Models - A freelancer's current plan and bid allowance.
"""

import math
from datetime import timedelta

from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from core.models import TimestampedModel

from .plans import BASIC, PLAN_CHOICES, PLANS, MembershipPlan

# Length of one billing month
MONTH = timedelta(days=30)


class Membership(TimestampedModel):
    """
    The membership of one user.

    A membership is active while ``ends_at`` lies in the future. The bid
    allowance is reset to the plan's monthly figure whenever a period starts.
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='membership'
    )
    plan = models.CharField(max_length=20, choices=PLAN_CHOICES, default=BASIC)
    started_at = models.DateTimeField(default=timezone.now)
    ends_at = models.DateTimeField()
    bids_remaining = models.PositiveIntegerField(default=0)
    bids_reset_at = models.DateTimeField(default=timezone.now)
    auto_renew = models.BooleanField(default=True)

    class Meta:
        verbose_name = _('Membership')
        verbose_name_plural = _('Memberships')
        indexes = [
            models.Index(fields=['ends_at'], name='membership_ends_at_idx'),
        ]

    def __str__(self):
        return f"{self.user} - {self.plan}"

    @property
    def plan_details(self) -> MembershipPlan:
        return PLANS[self.plan]

    @property
    def is_active(self) -> bool:
        return self.ends_at > timezone.now()

    @property
    def days_remaining(self) -> int:
        """Whole days left in the period, rounded up, never negative."""
        remaining = (self.ends_at - timezone.now()).total_seconds()
        if remaining <= 0:
            return 0
        return math.ceil(remaining / 86400)

    def start_period(self, months: int = 1):
        """Begin a fresh period of ``months`` months with a full bid allowance."""
        now = timezone.now()
        self.started_at = now
        self.ends_at = now + MONTH * months
        self.bids_remaining = self.plan_details.bids_per_month
        self.bids_reset_at = now

    @property
    def allowance_due(self) -> bool:
        """A month has passed since the bid allowance was last reset."""
        return self.is_active and self.bids_reset_at + MONTH <= timezone.now()
