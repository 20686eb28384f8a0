"""
Membership plan catalogue.

Plans are static configuration, not database rows: every deployment offers
the same three tiers.
"""

from dataclasses import asdict, dataclass, field
from decimal import Decimal
from typing import Dict, List, Optional

# Bid allowance standing in for "unlimited"
UNLIMITED_BIDS = 9999


@dataclass(frozen=True)
class MembershipPlan:
    key: str
    name: str
    price: Decimal
    bids_per_month: int
    featured_profile: bool
    priority_support: bool
    commission_rate: Decimal  # percent
    duration_months: int = 1
    features: List[str] = field(default_factory=list)

    @property
    def unlimited_bids(self) -> bool:
        return self.bids_per_month >= UNLIMITED_BIDS

    def as_dict(self) -> Dict:
        data = asdict(self)
        data['unlimited_bids'] = self.unlimited_bids
        return data


BASIC = 'basic'
PREMIUM = 'premium'
PRO = 'pro'

PLANS: Dict[str, MembershipPlan] = {
    BASIC: MembershipPlan(
        key=BASIC,
        name='Basic',
        price=Decimal('0.00'),
        bids_per_month=10,
        featured_profile=False,
        priority_support=False,
        commission_rate=Decimal('10'),
        features=[
            '10 project bids per month',
            'Standard profile visibility',
            'Basic support',
            '10% platform commission',
        ],
    ),
    PREMIUM: MembershipPlan(
        key=PREMIUM,
        name='Premium',
        price=Decimal('19.99'),
        bids_per_month=30,
        featured_profile=True,
        priority_support=True,
        commission_rate=Decimal('7'),
        features=[
            '30 project bids per month',
            'Enhanced profile visibility',
            'Priority support',
            '7% platform commission',
        ],
    ),
    PRO: MembershipPlan(
        key=PRO,
        name='Pro',
        price=Decimal('39.99'),
        bids_per_month=UNLIMITED_BIDS,
        featured_profile=True,
        priority_support=True,
        commission_rate=Decimal('5'),
        features=[
            'Unlimited project bids',
            'Featured profile placement',
            '24/7 priority support',
            '5% platform commission',
        ],
    ),
}

PLAN_CHOICES = [(plan.key, plan.name) for plan in PLANS.values()]


def get_plan(key: Optional[str]) -> Optional[MembershipPlan]:
    """Look up a plan by its key. Surrounding whitespace and case are ignored."""
    if not key:
        return None
    return PLANS.get(str(key).strip().lower())
