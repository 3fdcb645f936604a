from typing import List, Optional

from sqlalchemy import delete, func, select

from influencehub.db.models import Campaign
from influencehub.db.repositories.base import Repository


class CampaignsRepository(Repository):
    async def list(
        self,
        created_by: Optional[int] = None,
        status: Optional[str] = None,
    ) -> List[Campaign]:
        stmt = select(Campaign)
        if created_by is not None:
            stmt = stmt.where(Campaign.created_by == created_by)
        if status:
            stmt = stmt.where(Campaign.status == status)
        stmt = stmt.order_by(Campaign.created_at.desc(), Campaign.id.desc())
        return list((await self.session.scalars(stmt)).all())

    async def list_ids(self, created_by: Optional[int] = None) -> List[int]:
        stmt = select(Campaign.id)
        if created_by is not None:
            stmt = stmt.where(Campaign.created_by == created_by)
        return list((await self.session.scalars(stmt)).all())

    async def count(self, created_by: Optional[int] = None, status: Optional[str] = None) -> int:
        stmt = select(func.count(Campaign.id))
        if created_by is not None:
            stmt = stmt.where(Campaign.created_by == created_by)
        if status:
            stmt = stmt.where(Campaign.status == status)
        return (await self.session.scalar(stmt)) or 0

    async def get(self, campaign_id: int) -> Optional[Campaign]:
        return await self.session.get(Campaign, campaign_id)

    async def get_many(self, campaign_ids: set[int]) -> dict[int, Campaign]:
        if not campaign_ids:
            return {}
        stmt = select(Campaign).where(Campaign.id.in_(campaign_ids))
        return {row.id: row for row in (await self.session.scalars(stmt)).all()}

    async def create(self, name: str, created_by: int, **fields) -> Campaign:
        return await self.save(Campaign(name=name, created_by=created_by, **fields))

    async def delete(self, campaign_id: int) -> bool:
        result = await self.session.execute(delete(Campaign).where(Campaign.id == campaign_id))
        return bool(result.rowcount)
