"""
Memberships Serializers.
"""

from rest_framework import serializers

from ..services import MAX_UPGRADE_MONTHS, MIN_UPGRADE_MONTHS


class MembershipUpgradeSerializer(serializers.Serializer):
    """Input for POST /memberships/upgrade/."""
    plan = serializers.CharField()
    duration = serializers.IntegerField(
        default=1,
        min_value=MIN_UPGRADE_MONTHS,
        max_value=MAX_UPGRADE_MONTHS,
    )
    auto_renew = serializers.BooleanField(required=False)


class MembershipStatusSerializer(serializers.Serializer):
    plan = serializers.CharField()
    plan_name = serializers.CharField()
    is_active = serializers.BooleanField()
    days_remaining = serializers.IntegerField()
    bids_remaining = serializers.IntegerField()
    unlimited_bids = serializers.BooleanField()
    auto_renew = serializers.BooleanField()
    commission_rate = serializers.DecimalField(max_digits=5, decimal_places=2, coerce_to_string=False)
    started_at = serializers.DateTimeField()
    ends_at = serializers.DateTimeField()
