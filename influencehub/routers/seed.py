import logging

from fastapi import APIRouter, Depends

from influencehub.storage.base import Storage
from influencehub.storage.deps import get_storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["seed"])


@router.post("/seed")
async def seed(storage: Storage = Depends(get_storage)) -> dict[str, object]:
    seeded = await storage.seed_data()
    if not seeded:
        logger.info("Seed skipped: influencers already present")
        return {"seeded": False, "message": "Data already present"}
    return {"seeded": True, "message": "Data seeded successfully"}
