from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import Field

from influencehub.schemas.common import MetricValue, PayloadModel, RecordModel, Timestamp


class AnalyticsCreate(PayloadModel):
    campaign_id: int = Field(..., alias="campaignId")
    collaboration_id: Optional[int] = Field(None, alias="collaborationId")
    metric: str = Field(..., min_length=1)
    value: MetricValue
    date: Timestamp


class Analytics(RecordModel):
    id: int
    campaign_id: int = Field(..., alias="campaignId")
    collaboration_id: Optional[int] = Field(None, alias="collaborationId")
    metric: str
    value: MetricValue
    date: Timestamp
    created_at: Timestamp = Field(..., alias="createdAt")


class DashboardStats(RecordModel):
    active_campaigns: int = Field(..., alias="activeCampaigns")
    total_reach: int = Field(..., alias="totalReach")
    avg_engagement_rate: Decimal = Field(..., alias="avgEngagementRate")
    total_roi: Decimal = Field(..., alias="totalROI")
