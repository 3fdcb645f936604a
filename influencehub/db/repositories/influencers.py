from typing import List, Optional

from sqlalchemy import delete, func, select

from influencehub.db.models import Collaboration, Influencer
from influencehub.db.repositories.base import Repository
from influencehub.schemas.influencers import InfluencerFilters


class InfluencersRepository(Repository):
    async def list(self, filters: Optional[InfluencerFilters] = None) -> List[Influencer]:
        filters = filters or InfluencerFilters()
        stmt = select(Influencer)
        category = filters.category_filter
        if category is not None:
            stmt = stmt.where(Influencer.category == category)
        if filters.min_followers is not None:
            stmt = stmt.where(Influencer.followers >= filters.min_followers)
        if filters.max_followers is not None:
            stmt = stmt.where(Influencer.followers <= filters.max_followers)
        stmt = stmt.order_by(Influencer.followers.desc(), Influencer.id)
        rows = (await self.session.scalars(stmt)).all()
        # SQLite lower() folds ASCII only; search is matched in Python for every dialect.
        return [row for row in rows if filters.matches_search(row.name, row.handle)]

    async def get(self, influencer_id: int) -> Optional[Influencer]:
        return await self.session.get(Influencer, influencer_id)

    async def get_by_handle(self, handle: str) -> Optional[Influencer]:
        stmt = select(Influencer).where(Influencer.handle == handle)
        return (await self.session.scalars(stmt)).first()

    async def get_many(self, influencer_ids: set[int]) -> dict[int, Influencer]:
        if not influencer_ids:
            return {}
        stmt = select(Influencer).where(Influencer.id.in_(influencer_ids))
        return {row.id: row for row in (await self.session.scalars(stmt)).all()}

    async def collaboration_counts(self, influencer_ids: List[int]) -> dict[int, int]:
        if not influencer_ids:
            return {}
        stmt = (
            select(Collaboration.influencer_id, func.count(Collaboration.id))
            .where(Collaboration.influencer_id.in_(influencer_ids))
            .group_by(Collaboration.influencer_id)
        )
        rows = (await self.session.execute(stmt)).all()
        return {influencer_id: count for influencer_id, count in rows}

    async def count(self) -> int:
        return (await self.session.scalar(select(func.count(Influencer.id)))) or 0

    async def create(self, name: str, handle: str, **fields) -> Influencer:
        return await self.save(Influencer(name=name, handle=handle, **fields))

    async def delete(self, influencer_id: int) -> bool:
        result = await self.session.execute(delete(Influencer).where(Influencer.id == influencer_id))
        return bool(result.rowcount)
