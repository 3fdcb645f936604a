from fastapi import APIRouter, Depends, status

from influencehub.schemas import Analytics, AnalyticsCreate
from influencehub.storage.base import Storage
from influencehub.storage.deps import get_storage

router = APIRouter(prefix="/api/analytics", tags=["analytics"])


@router.get("/{campaign_id}", response_model=list[Analytics])
async def list_campaign_analytics(campaign_id: int, storage: Storage = Depends(get_storage)):
    return await storage.get_analytics(campaign_id)


@router.post("", response_model=Analytics, status_code=status.HTTP_201_CREATED)
async def record_metric(payload: AnalyticsCreate, storage: Storage = Depends(get_storage)):
    return await storage.create_analytics(payload)
