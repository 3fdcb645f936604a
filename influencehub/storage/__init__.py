from influencehub.storage.base import Storage
from influencehub.storage.database import DatabaseStorage
from influencehub.storage.memory import MemoryStorage

__all__ = ["DatabaseStorage", "MemoryStorage", "Storage"]
