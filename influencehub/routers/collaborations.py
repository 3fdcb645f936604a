from fastapi import APIRouter, Depends, Response, status

from influencehub.schemas import (
    Collaboration,
    CollaborationCreate,
    CollaborationUpdate,
    CollaborationWithDetails,
)
from influencehub.storage.base import Storage
from influencehub.storage.deps import get_storage

router = APIRouter(prefix="/api/collaborations", tags=["collaborations"])


@router.get("", response_model=list[CollaborationWithDetails])
async def list_collaborations(
    campaignId: int | None = None,
    influencerId: int | None = None,
    status: str | None = None,
    storage: Storage = Depends(get_storage),
):
    return await storage.get_collaborations(
        campaign_id=campaignId,
        influencer_id=influencerId,
        status=status,
    )


@router.post("", response_model=Collaboration, status_code=status.HTTP_201_CREATED)
async def create_collaboration(payload: CollaborationCreate, storage: Storage = Depends(get_storage)):
    return await storage.create_collaboration(payload)


@router.put("/{collaboration_id}", response_model=Collaboration)
async def update_collaboration(
    collaboration_id: int,
    payload: CollaborationUpdate,
    storage: Storage = Depends(get_storage),
):
    return await storage.update_collaboration(collaboration_id, payload)


@router.delete("/{collaboration_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_collaboration(
    collaboration_id: int, storage: Storage = Depends(get_storage)
) -> Response:
    await storage.delete_collaboration(collaboration_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
