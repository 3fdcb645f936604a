from decimal import Decimal
from typing import List

from sqlalchemy import delete, func, select

from influencehub.db.models import Analytics
from influencehub.db.repositories.base import Repository


class AnalyticsRepository(Repository):
    async def list(self, campaign_id: int) -> List[Analytics]:
        stmt = (
            select(Analytics)
            .where(Analytics.campaign_id == campaign_id)
            .order_by(Analytics.date, Analytics.id)
        )
        return list((await self.session.scalars(stmt)).all())

    async def total(self, metric: str, campaign_ids: List[int]) -> Decimal:
        if not campaign_ids:
            return Decimal("0")
        stmt = select(func.sum(Analytics.value)).where(
            Analytics.metric == metric,
            Analytics.campaign_id.in_(campaign_ids),
        )
        value = await self.session.scalar(stmt)
        # SQLite sums NUMERIC columns as floats.
        return Decimal(str(value)) if value is not None else Decimal("0")

    async def create(self, campaign_id: int, metric: str, **fields) -> Analytics:
        return await self.save(Analytics(campaign_id=campaign_id, metric=metric, **fields))

    async def delete_for_campaign(self, campaign_id: int) -> int:
        result = await self.session.execute(
            delete(Analytics).where(Analytics.campaign_id == campaign_id)
        )
        return result.rowcount or 0
