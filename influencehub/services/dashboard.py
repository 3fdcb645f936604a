from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Optional, Protocol

from influencehub.schemas.analytics import DashboardStats
from influencehub.schemas.common import quantize_cents

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")


class CompletedCollaboration(Protocol):
    actual_reach: Optional[int]
    actual_engagement: Optional[Decimal]
    agreed_rate: Optional[Decimal]


def compute_roi(revenue: Decimal, spend: Decimal) -> Decimal:
    """Return on influencer spend as a percentage, 0 when nothing was spent."""
    if spend <= _ZERO:
        return quantize_cents(_ZERO)
    return quantize_cents((revenue - spend) / spend * _HUNDRED)


def summarize_dashboard(
    *,
    active_campaigns: int,
    completed: Iterable[CompletedCollaboration],
    revenue: Decimal = _ZERO,
) -> DashboardStats:
    """Aggregate dashboard numbers over the completed collaborations in scope.

    Missing reach, engagement and agreed rate values count as zero. The
    engagement average is taken over every completed collaboration, so a
    completed row without engagement data pulls the mean down.
    """
    count = 0
    total_reach = 0
    engagement_sum = _ZERO
    spend = _ZERO
    for collaboration in completed:
        count += 1
        total_reach += collaboration.actual_reach or 0
        engagement_sum += Decimal(collaboration.actual_engagement or 0)
        spend += Decimal(collaboration.agreed_rate or 0)

    avg_engagement = quantize_cents(engagement_sum / count) if count else quantize_cents(_ZERO)

    return DashboardStats(
        active_campaigns=active_campaigns,
        total_reach=total_reach,
        avg_engagement_rate=avg_engagement,
        total_roi=compute_roi(Decimal(revenue or 0), spend),
    )
