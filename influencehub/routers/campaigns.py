from fastapi import APIRouter, Depends, HTTPException, Response, status

from influencehub.schemas import (
    Campaign,
    CampaignCreate,
    CampaignUpdate,
    CampaignWithCollaborations,
)
from influencehub.storage.base import Storage
from influencehub.storage.deps import get_storage

router = APIRouter(prefix="/api/campaigns", tags=["campaigns"])


@router.get("", response_model=list[CampaignWithCollaborations])
async def list_campaigns(
    userId: int | None = None,
    status: str | None = None,
    storage: Storage = Depends(get_storage),
):
    return await storage.get_campaigns(user_id=userId, status=status)


@router.get("/{campaign_id}", response_model=CampaignWithCollaborations)
async def get_campaign(campaign_id: int, storage: Storage = Depends(get_storage)):
    campaign = await storage.get_campaign(campaign_id)
    if not campaign:
        raise HTTPException(status_code=404, detail="Campaign not found")
    return campaign


@router.post("", response_model=Campaign, status_code=201)
async def create_campaign(payload: CampaignCreate, storage: Storage = Depends(get_storage)):
    return await storage.create_campaign(payload)


@router.api_route("/{campaign_id}", methods=["PUT", "PATCH"], response_model=Campaign)
async def update_campaign(
    campaign_id: int,
    payload: CampaignUpdate,
    storage: Storage = Depends(get_storage),
):
    return await storage.update_campaign(campaign_id, payload)


@router.delete("/{campaign_id}", status_code=204)
async def delete_campaign(campaign_id: int, storage: Storage = Depends(get_storage)) -> Response:
    await storage.delete_campaign(campaign_id)
    return Response(status_code=204)
