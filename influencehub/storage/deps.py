from fastapi import Request

from influencehub.config import settings
from influencehub.db.base import SessionLocal
from influencehub.storage.base import Storage
from influencehub.storage.database import DatabaseStorage
from influencehub.storage.memory import MemoryStorage


def build_storage() -> Storage:
    strict = settings.STRICT_COLLABORATION_TRANSITIONS
    if settings.STORAGE_BACKEND == "database":
        return DatabaseStorage(SessionLocal, strict_transitions=strict)
    return MemoryStorage(strict_transitions=strict)


def get_storage(request: Request) -> Storage:
    return request.app.state.storage
