from typing import List, Optional

from sqlalchemy import delete, select, update

from influencehub.db.models import Analytics, Collaboration
from influencehub.db.repositories.base import Repository


class CollaborationsRepository(Repository):
    async def list(
        self,
        campaign_ids: Optional[List[int]] = None,
        influencer_id: Optional[int] = None,
        status: Optional[str] = None,
        newest_first: bool = True,
    ) -> List[Collaboration]:
        stmt = select(Collaboration)
        if campaign_ids is not None:
            if not campaign_ids:
                return []
            stmt = stmt.where(Collaboration.campaign_id.in_(campaign_ids))
        if influencer_id is not None:
            stmt = stmt.where(Collaboration.influencer_id == influencer_id)
        if status:
            stmt = stmt.where(Collaboration.status == status)
        if newest_first:
            stmt = stmt.order_by(Collaboration.created_at.desc(), Collaboration.id.desc())
        else:
            stmt = stmt.order_by(Collaboration.id)
        return list((await self.session.scalars(stmt)).all())

    async def get(self, collaboration_id: int) -> Optional[Collaboration]:
        return await self.session.get(Collaboration, collaboration_id)

    async def create(self, campaign_id: int, influencer_id: int, **fields) -> Collaboration:
        return await self.save(
            Collaboration(campaign_id=campaign_id, influencer_id=influencer_id, **fields)
        )

    async def delete_where(
        self,
        *,
        collaboration_id: Optional[int] = None,
        campaign_id: Optional[int] = None,
        influencer_id: Optional[int] = None,
    ) -> int:
        """Delete matching collaborations and detach analytics that pointed at them."""
        ids_stmt = select(Collaboration.id)
        if collaboration_id is not None:
            ids_stmt = ids_stmt.where(Collaboration.id == collaboration_id)
        if campaign_id is not None:
            ids_stmt = ids_stmt.where(Collaboration.campaign_id == campaign_id)
        if influencer_id is not None:
            ids_stmt = ids_stmt.where(Collaboration.influencer_id == influencer_id)
        ids = list((await self.session.scalars(ids_stmt)).all())
        if not ids:
            return 0

        await self.session.execute(
            update(Analytics)
            .where(Analytics.collaboration_id.in_(ids))
            .values(collaboration_id=None)
        )
        await self.session.execute(delete(Collaboration).where(Collaboration.id.in_(ids)))
        return len(ids)
