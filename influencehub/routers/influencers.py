from fastapi import APIRouter, Depends, HTTPException, Response, status

from influencehub.schemas import (
    Influencer,
    InfluencerCreate,
    InfluencerFilters,
    InfluencerUpdate,
    InfluencerWithStats,
)
from influencehub.storage.base import Storage
from influencehub.storage.deps import get_storage

router = APIRouter(prefix="/api/influencers", tags=["influencers"])


@router.get("", response_model=list[InfluencerWithStats])
async def list_influencers(
    category: str | None = None,
    minFollowers: int | None = None,
    maxFollowers: int | None = None,
    search: str | None = None,
    followers: str | None = None,
    storage: Storage = Depends(get_storage),
):
    try:
        filters = InfluencerFilters.from_query(
            category=category,
            min_followers=minFollowers,
            max_followers=maxFollowers,
            search=search,
            followers=followers,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return await storage.get_influencers(filters)


@router.get("/{influencer_id}", response_model=Influencer)
async def get_influencer(influencer_id: int, storage: Storage = Depends(get_storage)):
    influencer = await storage.get_influencer(influencer_id)
    if not influencer:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Influencer not found")
    return influencer


@router.post("", response_model=Influencer, status_code=status.HTTP_201_CREATED)
async def create_influencer(payload: InfluencerCreate, storage: Storage = Depends(get_storage)):
    return await storage.create_influencer(payload)


@router.put("/{influencer_id}", response_model=Influencer)
async def update_influencer(
    influencer_id: int,
    payload: InfluencerUpdate,
    storage: Storage = Depends(get_storage),
):
    return await storage.update_influencer(influencer_id, payload)


@router.delete("/{influencer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_influencer(influencer_id: int, storage: Storage = Depends(get_storage)) -> Response:
    await storage.delete_influencer(influencer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
