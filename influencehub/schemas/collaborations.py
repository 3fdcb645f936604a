from __future__ import annotations

from typing import ClassVar, Optional

from pydantic import Field

from influencehub.db.enums import CollaborationStatusEnum
from influencehub.schemas.campaigns import Campaign
from influencehub.schemas.common import (
    Money,
    PatchModel,
    PayloadModel,
    Percentage,
    RecordModel,
    Timestamp,
)
from influencehub.schemas.influencers import Influencer
from influencehub.schemas.users import UserPublic


class CollaborationCreate(PayloadModel):
    campaign_id: int = Field(..., alias="campaignId")
    influencer_id: int = Field(..., alias="influencerId")
    status: CollaborationStatusEnum = CollaborationStatusEnum.pending
    agreed_rate: Optional[Money] = Field(None, alias="agreedRate")
    deliverables: Optional[str] = None
    actual_reach: Optional[int] = Field(None, ge=0, alias="actualReach")
    actual_engagement: Optional[Percentage] = Field(None, alias="actualEngagement")
    completed_at: Optional[Timestamp] = Field(None, alias="completedAt")


class CollaborationUpdate(PatchModel):
    non_nullable: ClassVar[frozenset[str]] = frozenset({"campaign_id", "influencer_id", "status"})

    campaign_id: Optional[int] = Field(None, alias="campaignId")
    influencer_id: Optional[int] = Field(None, alias="influencerId")
    status: Optional[CollaborationStatusEnum] = None
    agreed_rate: Optional[Money] = Field(None, alias="agreedRate")
    deliverables: Optional[str] = None
    actual_reach: Optional[int] = Field(None, ge=0, alias="actualReach")
    actual_engagement: Optional[Percentage] = Field(None, alias="actualEngagement")
    completed_at: Optional[Timestamp] = Field(None, alias="completedAt")


class Collaboration(RecordModel):
    id: int
    campaign_id: int = Field(..., alias="campaignId")
    influencer_id: int = Field(..., alias="influencerId")
    status: CollaborationStatusEnum
    agreed_rate: Optional[Money] = Field(None, alias="agreedRate")
    deliverables: Optional[str] = None
    actual_reach: Optional[int] = Field(None, alias="actualReach")
    actual_engagement: Optional[Percentage] = Field(None, alias="actualEngagement")
    completed_at: Optional[Timestamp] = Field(None, alias="completedAt")
    created_at: Timestamp = Field(..., alias="createdAt")
    updated_at: Timestamp = Field(..., alias="updatedAt")


class CollaborationWithInfluencer(Collaboration):
    influencer: Influencer


class CollaborationWithDetails(Collaboration):
    campaign: Campaign
    influencer: Influencer


class CampaignWithCollaborations(Campaign):
    creator: UserPublic
    collaborations: list[CollaborationWithInfluencer] = Field(default_factory=list)
