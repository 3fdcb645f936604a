from __future__ import annotations

from typing import ClassVar, Optional

from pydantic import Field

from influencehub.db.enums import CampaignStatusEnum
from influencehub.schemas.common import Money, PatchModel, PayloadModel, RecordModel, Timestamp


class CampaignCreate(PayloadModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    category: str = Field(..., min_length=1)
    budget: Money
    status: CampaignStatusEnum = CampaignStatusEnum.draft
    start_date: Optional[Timestamp] = Field(None, alias="startDate")
    end_date: Optional[Timestamp] = Field(None, alias="endDate")
    target_audience: Optional[str] = Field(None, alias="targetAudience")
    goals: Optional[str] = None
    created_by: int = Field(..., alias="createdBy")


class CampaignUpdate(PatchModel):
    non_nullable: ClassVar[frozenset[str]] = frozenset(
        {"name", "category", "budget", "status", "created_by"}
    )

    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    category: Optional[str] = Field(None, min_length=1)
    budget: Optional[Money] = None
    status: Optional[CampaignStatusEnum] = None
    start_date: Optional[Timestamp] = Field(None, alias="startDate")
    end_date: Optional[Timestamp] = Field(None, alias="endDate")
    target_audience: Optional[str] = Field(None, alias="targetAudience")
    goals: Optional[str] = None
    created_by: Optional[int] = Field(None, alias="createdBy")


class Campaign(RecordModel):
    id: int
    name: str
    description: Optional[str] = None
    category: str
    budget: Money
    status: CampaignStatusEnum
    start_date: Optional[Timestamp] = Field(None, alias="startDate")
    end_date: Optional[Timestamp] = Field(None, alias="endDate")
    target_audience: Optional[str] = Field(None, alias="targetAudience")
    goals: Optional[str] = None
    created_by: int = Field(..., alias="createdBy")
    created_at: Timestamp = Field(..., alias="createdAt")
    updated_at: Timestamp = Field(..., alias="updatedAt")
