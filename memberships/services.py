"""
Memberships Services - Business Logic Layer

- MembershipService: status, upgrades, bid consumption, commission and
  period renewal

Every user has a membership: one is created on Basic for one month the
first time it is needed.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from core.exceptions import InvalidInputError, PermissionDeniedError
from core.services import ServiceResult
from core.validators import CENTS, parse_amount

from .models import Membership
from .plans import BASIC, PLANS, get_plan

logger = logging.getLogger(__name__)

MIN_UPGRADE_MONTHS = 1
MAX_UPGRADE_MONTHS = 12


class MembershipService:
    """
    Service for freelancer memberships.

    Handles:
    - Lazy creation of the default Basic membership
    - Plan upgrades
    - Bid allowance consumption for application submit
    - Commission calculation
    - Renewal of lapsed periods
    """

    @staticmethod
    def get_for(user) -> Membership:
        """Return the user's membership, creating a Basic one if missing."""
        membership = Membership.objects.filter(user=user).first()
        if membership is not None:
            return membership

        membership = Membership(user=user, plan=BASIC)
        membership.start_period(months=1)
        membership.save()
        logger.info(f"Membership created: user={user.pk} plan={BASIC}")
        return membership

    @classmethod
    def status(cls, user) -> Dict:
        membership = cls.get_for(user)
        plan = membership.plan_details
        return {
            'plan': plan.key,
            'plan_name': plan.name,
            'is_active': membership.is_active,
            'days_remaining': membership.days_remaining,
            'bids_remaining': membership.bids_remaining,
            'unlimited_bids': plan.unlimited_bids,
            'auto_renew': membership.auto_renew,
            'commission_rate': plan.commission_rate,
            'started_at': membership.started_at,
            'ends_at': membership.ends_at,
        }

    @classmethod
    def upgrade(cls, user, plan_key, duration=1, auto_renew=None) -> ServiceResult:
        """
        Switch the user to ``plan_key`` for ``duration`` months.

        The period restarts now and the bid allowance is reset.
        """
        plan = get_plan(plan_key)
        if plan is None:
            raise InvalidInputError('Invalid membership plan', field='plan')

        try:
            duration = int(duration)
        except (TypeError, ValueError):
            raise InvalidInputError('Duration must be a number of months', field='duration')
        if not MIN_UPGRADE_MONTHS <= duration <= MAX_UPGRADE_MONTHS:
            raise InvalidInputError(
                f"Duration must be between {MIN_UPGRADE_MONTHS} and {MAX_UPGRADE_MONTHS} months",
                field='duration'
            )

        with transaction.atomic():
            membership = cls.get_for(user)
            previous = membership.plan
            membership.plan = plan.key
            membership.start_period(months=duration)
            if auto_renew is not None:
                membership.auto_renew = bool(auto_renew)
            membership.save()

        logger.info(
            f"Membership changed: user={user.pk} {previous} -> {plan.key} "
            f"for {duration} month(s)"
        )
        return ServiceResult(
            success=True,
            message=f'Membership upgraded to {plan.name}',
            data=membership,
        )

    @classmethod
    def consume_bid(cls, user) -> int:
        """
        Use one bid of the user's allowance.

        Unlimited plans never run out. Call inside the submitting
        transaction so a failed submit gives the bid back.

        Raises:
            PermissionDeniedError: membership lapsed or no bids left
        """
        membership = cls.get_for(user)
        if not membership.is_active:
            logger.warning(f"Bid refused, membership lapsed: user={user.pk}")
            raise PermissionDeniedError('No project bids remaining')

        if membership.plan_details.unlimited_bids:
            return membership.bids_remaining

        updated = Membership.objects.filter(
            pk=membership.pk,
            bids_remaining__gt=0,
        ).update(bids_remaining=F('bids_remaining') - 1)
        if not updated:
            logger.warning(f"Bid refused, allowance exhausted: user={user.pk}")
            raise PermissionDeniedError('No project bids remaining')

        return Membership.objects.values_list('bids_remaining', flat=True).get(pk=membership.pk)

    @classmethod
    def calculate_commission(cls, user, amount) -> Dict:
        """Platform fee and net payout for ``amount`` under the user's plan."""
        amount = parse_amount(amount, 'amount', 'Amount')
        rate = cls.get_for(user).plan_details.commission_rate
        fee = (amount * rate / Decimal('100')).quantize(CENTS, rounding=ROUND_HALF_UP)
        return {
            'amount': amount,
            'commission_rate': rate,
            'platform_fee': fee,
            'net_amount': (amount - fee).quantize(CENTS, rounding=ROUND_HALF_UP),
        }

    @staticmethod
    def renew(membership: Membership) -> bool:
        """
        Start a new period for a lapsed membership, or refill the allowance
        of an active one whose month has turned.

        Lapsed memberships without auto-renewal fall back to Basic.

        Returns:
            True if the membership was changed
        """
        if membership.is_active:
            if not membership.allowance_due:
                return False
            membership.bids_remaining = membership.plan_details.bids_per_month
            membership.bids_reset_at = timezone.now()
            membership.save(update_fields=['bids_remaining', 'bids_reset_at', 'updated_at'])
            return True

        if not membership.auto_renew:
            membership.plan = BASIC
        membership.start_period(months=1)
        membership.save()
        return True

    @staticmethod
    def plans():
        return [plan.as_dict() for plan in PLANS.values()]
