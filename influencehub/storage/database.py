from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from influencehub.db import models
from influencehub.db.enums import (
    DEFAULT_USER_ROLE,
    REVENUE_METRIC,
    CampaignStatusEnum,
    CollaborationStatusEnum,
)
from influencehub.db.errors import NotFoundError, StorageError, ValidationError
from influencehub.db.repositories import (
    AnalyticsRepository,
    CampaignsRepository,
    CollaborationsRepository,
    InfluencersRepository,
    UsersRepository,
)
from influencehub.db.types import utcnow
from influencehub.schemas import (
    Analytics,
    AnalyticsCreate,
    Campaign,
    CampaignCreate,
    CampaignUpdate,
    CampaignWithCollaborations,
    Collaboration,
    CollaborationCreate,
    CollaborationUpdate,
    CollaborationWithDetails,
    CollaborationWithInfluencer,
    DashboardStats,
    Influencer,
    InfluencerCreate,
    InfluencerFilters,
    InfluencerUpdate,
    InfluencerWithStats,
    User,
    UserCreate,
    UserPublic,
    UserUpdate,
)
from influencehub.services.collaborations import initial_completed_at, prepare_collaboration_changes
from influencehub.services.dashboard import summarize_dashboard
from influencehub.storage.base import Storage

logger = logging.getLogger(__name__)


class DatabaseStorage(Storage):
    """SQLAlchemy backend. Each operation runs in its own session; writes commit atomically."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        strict_transitions: bool = False,
    ) -> None:
        super().__init__(strict_transitions=strict_transitions)
        self._session_factory = session_factory

    @asynccontextmanager
    async def _session(self, *, write: bool = False) -> AsyncIterator[AsyncSession]:
        async with self._session_factory() as session:
            try:
                if write:
                    async with session.begin():
                        yield session
                else:
                    yield session
            except IntegrityError as exc:
                logger.warning("Integrity error: %s", exc.orig)
                raise ValidationError("Write violates a database constraint") from exc
            except SQLAlchemyError as exc:
                logger.exception("Database operation failed")
                raise StorageError("Database operation failed") from exc

    # Users

    @staticmethod
    async def _check_user_unique(
        users: UsersRepository,
        username: Optional[str],
        email: Optional[str],
        exclude_id: Optional[int] = None,
    ) -> None:
        if username is not None:
            existing = await users.get_by_username(username)
            if existing is not None and existing.id != exclude_id:
                raise ValidationError(f"Username '{username}' is already taken")
        if email is not None:
            existing = await users.get_by_email(email)
            if existing is not None and existing.id != exclude_id:
                raise ValidationError(f"Email '{email}' is already registered")

    async def get_user(self, user_id: int) -> Optional[User]:
        async with self._session() as session:
            user = await UsersRepository(session).get(user_id)
            return User.model_validate(user) if user else None

    async def get_user_by_username(self, username: str) -> Optional[User]:
        async with self._session() as session:
            user = await UsersRepository(session).get_by_username(username)
            return User.model_validate(user) if user else None

    async def create_user(self, data: UserCreate) -> User:
        async with self._session(write=True) as session:
            users = UsersRepository(session)
            await self._check_user_unique(users, data.username, data.email)
            fields = data.model_dump()
            fields["role"] = fields.get("role") or DEFAULT_USER_ROLE
            user = await users.create(**fields)
            logger.info("Created user %s", user.id)
            return User.model_validate(user)

    async def update_user(self, user_id: int, updates: UserUpdate) -> User:
        async with self._session(write=True) as session:
            users = UsersRepository(session)
            user = await users.get(user_id)
            if not user:
                raise NotFoundError("User", user_id)
            changes = updates.changes()
            await self._check_user_unique(
                users, changes.get("username"), changes.get("email"), exclude_id=user_id
            )
            user = await users.apply(user, {**changes, "updated_at": utcnow()})
            return User.model_validate(user)

    # Influencers

    async def get_influencers(
        self, filters: Optional[InfluencerFilters] = None
    ) -> list[InfluencerWithStats]:
        async with self._session() as session:
            influencers = InfluencersRepository(session)
            rows = await influencers.list(filters)
            counts = await influencers.collaboration_counts([row.id for row in rows])
            return [
                InfluencerWithStats(
                    **Influencer.model_validate(row).model_dump(),
                    total_collaborations=counts.get(row.id, 0),
                )
                for row in rows
            ]

    async def get_influencer(self, influencer_id: int) -> Optional[Influencer]:
        async with self._session() as session:
            influencer = await InfluencersRepository(session).get(influencer_id)
            return Influencer.model_validate(influencer) if influencer else None

    async def create_influencer(self, data: InfluencerCreate) -> Influencer:
        async with self._session(write=True) as session:
            influencers = InfluencersRepository(session)
            if await influencers.get_by_handle(data.handle):
                raise ValidationError(f"Handle '{data.handle}' is already registered")
            influencer = await influencers.create(**data.model_dump())
            logger.info("Created influencer %s", influencer.id)
            return Influencer.model_validate(influencer)

    async def update_influencer(self, influencer_id: int, updates: InfluencerUpdate) -> Influencer:
        async with self._session(write=True) as session:
            influencers = InfluencersRepository(session)
            influencer = await influencers.get(influencer_id)
            if not influencer:
                raise NotFoundError("Influencer", influencer_id)
            changes = updates.changes()
            handle = changes.get("handle")
            if handle is not None:
                existing = await influencers.get_by_handle(handle)
                if existing is not None and existing.id != influencer_id:
                    raise ValidationError(f"Handle '{handle}' is already registered")
            influencer = await influencers.apply(influencer, {**changes, "updated_at": utcnow()})
            return Influencer.model_validate(influencer)

    async def delete_influencer(self, influencer_id: int) -> None:
        async with self._session(write=True) as session:
            removed = await CollaborationsRepository(session).delete_where(influencer_id=influencer_id)
            if await InfluencersRepository(session).delete(influencer_id):
                logger.info("Deleted influencer %s and %d collaborations", influencer_id, removed)

    # Campaigns

    async def _enrich_campaigns(
        self, session: AsyncSession, rows: list[models.Campaign]
    ) -> list[CampaignWithCollaborations]:
        if not rows:
            return []
        creators = await UsersRepository(session).get_many({row.created_by for row in rows})
        collaborations = await CollaborationsRepository(session).list(
            campaign_ids=[row.id for row in rows], newest_first=False
        )
        influencers = await InfluencersRepository(session).get_many(
            {collab.influencer_id for collab in collaborations}
        )

        by_campaign: dict[int, list[CollaborationWithInfluencer]] = {row.id: [] for row in rows}
        for collab in collaborations:
            influencer = influencers.get(collab.influencer_id)
            if influencer is None:
                logger.error(
                    "Collaboration %s references missing influencer %s",
                    collab.id,
                    collab.influencer_id,
                )
                raise StorageError(f"Collaboration {collab.id} has no influencer")
            by_campaign[collab.campaign_id].append(
                CollaborationWithInfluencer(
                    **Collaboration.model_validate(collab).model_dump(),
                    influencer=Influencer.model_validate(influencer),
                )
            )

        results = []
        for row in rows:
            creator = creators.get(row.created_by)
            if creator is None:
                logger.error("Campaign %s references missing user %s", row.id, row.created_by)
                raise StorageError(f"Campaign {row.id} has no creator")
            results.append(
                CampaignWithCollaborations(
                    **Campaign.model_validate(row).model_dump(),
                    creator=UserPublic.model_validate(creator),
                    collaborations=by_campaign[row.id],
                )
            )
        return results

    async def get_campaigns(
        self, user_id: Optional[int] = None, status: Optional[str] = None
    ) -> list[CampaignWithCollaborations]:
        if status == "all":
            status = None
        async with self._session() as session:
            rows = await CampaignsRepository(session).list(created_by=user_id, status=status)
            return await self._enrich_campaigns(session, rows)

    async def get_campaign(self, campaign_id: int) -> Optional[CampaignWithCollaborations]:
        async with self._session() as session:
            row = await CampaignsRepository(session).get(campaign_id)
            if row is None:
                return None
            (campaign,) = await self._enrich_campaigns(session, [row])
            return campaign

    async def create_campaign(self, data: CampaignCreate) -> Campaign:
        async with self._session(write=True) as session:
            if await UsersRepository(session).get(data.created_by) is None:
                raise ValidationError(f"User {data.created_by} does not exist")
            campaign = await CampaignsRepository(session).create(**data.model_dump())
            logger.info("Created campaign %s", campaign.id)
            return Campaign.model_validate(campaign)

    async def update_campaign(self, campaign_id: int, updates: CampaignUpdate) -> Campaign:
        async with self._session(write=True) as session:
            campaigns = CampaignsRepository(session)
            campaign = await campaigns.get(campaign_id)
            if not campaign:
                raise NotFoundError("Campaign", campaign_id)
            changes = updates.changes()
            created_by = changes.get("created_by")
            if created_by is not None and await UsersRepository(session).get(created_by) is None:
                raise ValidationError(f"User {created_by} does not exist")
            campaign = await campaigns.apply(campaign, {**changes, "updated_at": utcnow()})
            return Campaign.model_validate(campaign)

    async def delete_campaign(self, campaign_id: int) -> None:
        async with self._session(write=True) as session:
            removed = await CollaborationsRepository(session).delete_where(campaign_id=campaign_id)
            await AnalyticsRepository(session).delete_for_campaign(campaign_id)
            if await CampaignsRepository(session).delete(campaign_id):
                logger.info("Deleted campaign %s and %d collaborations", campaign_id, removed)

    # Collaborations

    @staticmethod
    async def _check_collaboration_refs(
        session: AsyncSession, campaign_id: Optional[int], influencer_id: Optional[int]
    ) -> None:
        if campaign_id is not None and await CampaignsRepository(session).get(campaign_id) is None:
            raise ValidationError(f"Campaign {campaign_id} does not exist")
        if influencer_id is not None and await InfluencersRepository(session).get(influencer_id) is None:
            raise ValidationError(f"Influencer {influencer_id} does not exist")

    async def get_collaborations(
        self,
        campaign_id: Optional[int] = None,
        influencer_id: Optional[int] = None,
        status: Optional[str] = None,
    ) -> list[CollaborationWithDetails]:
        if status == "all":
            status = None
        async with self._session() as session:
            rows = await CollaborationsRepository(session).list(
                campaign_ids=[campaign_id] if campaign_id is not None else None,
                influencer_id=influencer_id,
                status=status,
            )
            campaigns = await CampaignsRepository(session).get_many({row.campaign_id for row in rows})
            influencers = await InfluencersRepository(session).get_many(
                {row.influencer_id for row in rows}
            )

            results = []
            for row in rows:
                campaign = campaigns.get(row.campaign_id)
                influencer = influencers.get(row.influencer_id)
                if campaign is None or influencer is None:
                    logger.error("Collaboration %s has dangling references", row.id)
                    raise StorageError(f"Collaboration {row.id} has dangling references")
                results.append(
                    CollaborationWithDetails(
                        **Collaboration.model_validate(row).model_dump(),
                        campaign=Campaign.model_validate(campaign),
                        influencer=Influencer.model_validate(influencer),
                    )
                )
            return results

    async def get_collaboration(self, collaboration_id: int) -> Optional[Collaboration]:
        async with self._session() as session:
            row = await CollaborationsRepository(session).get(collaboration_id)
            return Collaboration.model_validate(row) if row else None

    async def create_collaboration(self, data: CollaborationCreate) -> Collaboration:
        async with self._session(write=True) as session:
            await self._check_collaboration_refs(session, data.campaign_id, data.influencer_id)
            fields = data.model_dump()
            fields["completed_at"] = initial_completed_at(
                fields["status"], fields["completed_at"], now=utcnow()
            )
            collaboration = await CollaborationsRepository(session).create(**fields)
            logger.info(
                "Created collaboration %s (campaign %s, influencer %s)",
                collaboration.id,
                collaboration.campaign_id,
                collaboration.influencer_id,
            )
            return Collaboration.model_validate(collaboration)

    async def update_collaboration(
        self, collaboration_id: int, updates: CollaborationUpdate
    ) -> Collaboration:
        async with self._session(write=True) as session:
            collaborations = CollaborationsRepository(session)
            collaboration = await collaborations.get(collaboration_id)
            if not collaboration:
                raise NotFoundError("Collaboration", collaboration_id)
            now = utcnow()
            changes = prepare_collaboration_changes(
                collaboration.status,
                updates.changes(),
                now=now,
                strict=self.strict_transitions,
            )
            await self._check_collaboration_refs(
                session, changes.get("campaign_id"), changes.get("influencer_id")
            )
            collaboration = await collaborations.apply(collaboration, {**changes, "updated_at": now})
            return Collaboration.model_validate(collaboration)

    async def delete_collaboration(self, collaboration_id: int) -> None:
        async with self._session(write=True) as session:
            await CollaborationsRepository(session).delete_where(collaboration_id=collaboration_id)

    # Analytics

    async def get_analytics(self, campaign_id: int) -> list[Analytics]:
        async with self._session() as session:
            rows = await AnalyticsRepository(session).list(campaign_id)
            return [Analytics.model_validate(row) for row in rows]

    async def create_analytics(self, data: AnalyticsCreate) -> Analytics:
        async with self._session(write=True) as session:
            if await CampaignsRepository(session).get(data.campaign_id) is None:
                raise ValidationError(f"Campaign {data.campaign_id} does not exist")
            if (
                data.collaboration_id is not None
                and await CollaborationsRepository(session).get(data.collaboration_id) is None
            ):
                raise ValidationError(f"Collaboration {data.collaboration_id} does not exist")
            point = await AnalyticsRepository(session).create(**data.model_dump())
            return Analytics.model_validate(point)

    async def get_dashboard_stats(self, user_id: Optional[int] = None) -> DashboardStats:
        async with self._session() as session:
            campaigns = CampaignsRepository(session)
            campaign_ids = await campaigns.list_ids(created_by=user_id)
            active = await campaigns.count(created_by=user_id, status=CampaignStatusEnum.active.value)
            completed = await CollaborationsRepository(session).list(
                campaign_ids=campaign_ids,
                status=CollaborationStatusEnum.completed.value,
                newest_first=False,
            )
            revenue = await AnalyticsRepository(session).total(REVENUE_METRIC, campaign_ids)
            return summarize_dashboard(active_campaigns=active, completed=completed, revenue=revenue)

    async def count_influencers(self) -> int:
        async with self._session() as session:
            return await InfluencersRepository(session).count()

    async def ping(self) -> None:
        async with self._session() as session:
            await session.execute(text("SELECT 1"))
