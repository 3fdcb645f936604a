from fastapi import APIRouter, Depends

from influencehub.schemas import DashboardStats
from influencehub.storage.base import Storage
from influencehub.storage.deps import get_storage

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStats)
async def dashboard_stats(userId: int | None = None, storage: Storage = Depends(get_storage)):
    return await storage.get_dashboard_stats(user_id=userId)
