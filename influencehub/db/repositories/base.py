from typing import Any, Mapping, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from influencehub.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class Repository:
    """Shared helpers; callers own the transaction and commit it."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def save(self, obj: ModelT) -> ModelT:
        self.session.add(obj)
        await self.session.flush()
        await self.session.refresh(obj)
        return obj

    async def apply(self, obj: ModelT, fields: Mapping[str, Any]) -> ModelT:
        for key, value in fields.items():
            setattr(obj, key, value)
        await self.session.flush()
        await self.session.refresh(obj)
        return obj
