from __future__ import annotations

from typing import Optional, Sequence

from .model import CommissionTier, TierRef, TierResolution

SERVICES = "services"
PRODUCTS = "products"
ALL = "all"


def tiers_for(tiers: Sequence[CommissionTier], applies_to: str) -> list[CommissionTier]:
    """Tiers for one revenue kind (plus 'all' tiers), lowest threshold first."""
    kinds = {applies_to, ALL}
    return sorted((t for t in tiers if t.applies_to in kinds), key=lambda t: t.min_revenue)


def _in_tier(tier: CommissionTier, revenue: float) -> bool:
    if revenue < tier.min_revenue:
        return False
    return tier.max_revenue is None or revenue <= tier.max_revenue


def resolve_tier(tiers: Sequence[CommissionTier], revenue: float, applies_to: str = SERVICES) -> TierResolution:
    ladder = tiers_for(tiers, applies_to)

    for i, tier in enumerate(ladder):
        if not _in_tier(tier, revenue):
            continue

        current = TierRef(name=tier.tier_name, rate=tier.commission_rate)
        if i == len(ladder) - 1:
            return TierResolution(current=current, progress=100.0)

        following = ladder[i + 1]
        if tier.max_revenue:
            span = tier.max_revenue - tier.min_revenue
            progress = (revenue - tier.min_revenue) / span * 100 if span else 0.0
        else:
            progress = 0.0

        return TierResolution(
            current=current,
            next=TierRef(name=following.tier_name, rate=following.commission_rate, threshold=following.min_revenue),
            progress=progress,
            amount_to_next=following.min_revenue - revenue,
        )

    return TierResolution()


def first_matching_tier(tiers: Sequence[CommissionTier], revenue: float, applies_to: str) -> Optional[CommissionTier]:
    """First tier in stored order covering `revenue`; product commission uses this."""
    for tier in tiers:
        if tier.applies_to in (applies_to, ALL) and _in_tier(tier, revenue):
            return tier
    return None
