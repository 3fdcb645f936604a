from fastapi import APIRouter, Depends, HTTPException, status

from influencehub.schemas import UserCreate, UserPublic, UserUpdate
from influencehub.storage.base import Storage
from influencehub.storage.deps import get_storage

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("", response_model=UserPublic, status_code=status.HTTP_201_CREATED)
async def create_user(payload: UserCreate, storage: Storage = Depends(get_storage)):
    return await storage.create_user(payload)


@router.get("/{user_id}", response_model=UserPublic)
async def get_user(user_id: int, storage: Storage = Depends(get_storage)):
    user = await storage.get_user(user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@router.patch("/{user_id}", response_model=UserPublic)
async def update_user(user_id: int, payload: UserUpdate, storage: Storage = Depends(get_storage)):
    return await storage.update_user(user_id, payload)
