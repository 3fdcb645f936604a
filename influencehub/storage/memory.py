from __future__ import annotations

import itertools
import logging
from collections import Counter
from decimal import Decimal
from typing import Optional, TypeVar

from influencehub.db.enums import (
    DEFAULT_USER_ROLE,
    REVENUE_METRIC,
    CampaignStatusEnum,
    CollaborationStatusEnum,
)
from influencehub.db.errors import NotFoundError, StorageError, ValidationError
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

RecordT = TypeVar("RecordT", User, Influencer, Campaign, Collaboration, Analytics)


class MemoryStorage(Storage):
    """Process-local backend. Records are stored as pydantic models and copied on the way out."""

    def __init__(self, *, strict_transitions: bool = False) -> None:
        super().__init__(strict_transitions=strict_transitions)
        self._users: dict[int, User] = {}
        self._influencers: dict[int, Influencer] = {}
        self._campaigns: dict[int, Campaign] = {}
        self._collaborations: dict[int, Collaboration] = {}
        self._analytics: dict[int, Analytics] = {}
        self._ids = {
            name: itertools.count(1)
            for name in ("users", "influencers", "campaigns", "collaborations", "analytics")
        }

    def _next_id(self, collection: str) -> int:
        return next(self._ids[collection])

    @staticmethod
    def _copy(record: RecordT) -> RecordT:
        return record.model_copy(deep=True)

    @staticmethod
    def _patched(record: RecordT, changes: dict, *, now) -> RecordT:
        return type(record).model_validate({**record.model_dump(), **changes, "updated_at": now})

    # Users

    def _check_user_unique(
        self, username: Optional[str], email: Optional[str], exclude_id: Optional[int] = None
    ) -> None:
        for user in self._users.values():
            if user.id == exclude_id:
                continue
            if username is not None and user.username == username:
                raise ValidationError(f"Username '{username}' is already taken")
            if email is not None and user.email == email:
                raise ValidationError(f"Email '{email}' is already registered")

    async def get_user(self, user_id: int) -> Optional[User]:
        user = self._users.get(user_id)
        return self._copy(user) if user else None

    async def get_user_by_username(self, username: str) -> Optional[User]:
        for user in self._users.values():
            if user.username == username:
                return self._copy(user)
        return None

    async def create_user(self, data: UserCreate) -> User:
        self._check_user_unique(data.username, data.email)
        now = utcnow()
        fields = data.model_dump()
        fields["role"] = fields.get("role") or DEFAULT_USER_ROLE
        user = User(id=self._next_id("users"), created_at=now, updated_at=now, **fields)
        self._users[user.id] = user
        logger.info("Created user %s", user.id)
        return self._copy(user)

    async def update_user(self, user_id: int, updates: UserUpdate) -> User:
        user = self._users.get(user_id)
        if not user:
            raise NotFoundError("User", user_id)
        changes = updates.changes()
        self._check_user_unique(changes.get("username"), changes.get("email"), exclude_id=user_id)
        updated = self._patched(user, changes, now=utcnow())
        self._users[user_id] = updated
        return self._copy(updated)

    # Influencers

    def _check_handle_unique(self, handle: Optional[str], exclude_id: Optional[int] = None) -> None:
        if handle is None:
            return
        for influencer in self._influencers.values():
            if influencer.id != exclude_id and influencer.handle == handle:
                raise ValidationError(f"Handle '{handle}' is already registered")

    async def get_influencers(
        self, filters: Optional[InfluencerFilters] = None
    ) -> list[InfluencerWithStats]:
        filters = filters or InfluencerFilters()
        counts = Counter(collab.influencer_id for collab in self._collaborations.values())
        matched = [inf for inf in self._influencers.values() if filters.matches(inf)]
        matched.sort(key=lambda inf: (-inf.followers, inf.id))
        return [
            InfluencerWithStats(**inf.model_dump(), total_collaborations=counts[inf.id])
            for inf in matched
        ]

    async def get_influencer(self, influencer_id: int) -> Optional[Influencer]:
        influencer = self._influencers.get(influencer_id)
        return self._copy(influencer) if influencer else None

    async def create_influencer(self, data: InfluencerCreate) -> Influencer:
        self._check_handle_unique(data.handle)
        now = utcnow()
        influencer = Influencer(
            id=self._next_id("influencers"), created_at=now, updated_at=now, **data.model_dump()
        )
        self._influencers[influencer.id] = influencer
        logger.info("Created influencer %s", influencer.id)
        return self._copy(influencer)

    async def update_influencer(self, influencer_id: int, updates: InfluencerUpdate) -> Influencer:
        influencer = self._influencers.get(influencer_id)
        if not influencer:
            raise NotFoundError("Influencer", influencer_id)
        changes = updates.changes()
        self._check_handle_unique(changes.get("handle"), exclude_id=influencer_id)
        updated = self._patched(influencer, changes, now=utcnow())
        self._influencers[influencer_id] = updated
        return self._copy(updated)

    async def delete_influencer(self, influencer_id: int) -> None:
        if self._influencers.pop(influencer_id, None) is None:
            return
        removed = {
            collab_id
            for collab_id, collab in self._collaborations.items()
            if collab.influencer_id == influencer_id
        }
        self._drop_collaborations(removed)
        logger.info("Deleted influencer %s and %d collaborations", influencer_id, len(removed))

    # Campaigns

    def _enrich_campaign(self, campaign: Campaign) -> CampaignWithCollaborations:
        creator = self._users.get(campaign.created_by)
        if creator is None:
            logger.error("Campaign %s references missing user %s", campaign.id, campaign.created_by)
            raise StorageError(f"Campaign {campaign.id} has no creator")
        collaborations = sorted(
            (c for c in self._collaborations.values() if c.campaign_id == campaign.id),
            key=lambda c: c.id,
        )
        return CampaignWithCollaborations(
            **campaign.model_dump(),
            creator=UserPublic(**creator.model_dump()),
            collaborations=[
                CollaborationWithInfluencer(
                    **collab.model_dump(), influencer=self._require_influencer(collab)
                )
                for collab in collaborations
            ],
        )

    def _require_influencer(self, collaboration: Collaboration) -> Influencer:
        influencer = self._influencers.get(collaboration.influencer_id)
        if influencer is None:
            logger.error(
                "Collaboration %s references missing influencer %s",
                collaboration.id,
                collaboration.influencer_id,
            )
            raise StorageError(f"Collaboration {collaboration.id} has no influencer")
        return self._copy(influencer)

    async def get_campaigns(
        self, user_id: Optional[int] = None, status: Optional[str] = None
    ) -> list[CampaignWithCollaborations]:
        campaigns = list(self._campaigns.values())
        if user_id is not None:
            campaigns = [c for c in campaigns if c.created_by == user_id]
        if status and status != "all":
            campaigns = [c for c in campaigns if c.status == status]
        campaigns.sort(key=lambda c: (c.created_at, c.id), reverse=True)
        return [self._enrich_campaign(campaign) for campaign in campaigns]

    async def get_campaign(self, campaign_id: int) -> Optional[CampaignWithCollaborations]:
        campaign = self._campaigns.get(campaign_id)
        return self._enrich_campaign(campaign) if campaign else None

    async def create_campaign(self, data: CampaignCreate) -> Campaign:
        if data.created_by not in self._users:
            raise ValidationError(f"User {data.created_by} does not exist")
        now = utcnow()
        campaign = Campaign(
            id=self._next_id("campaigns"), created_at=now, updated_at=now, **data.model_dump()
        )
        self._campaigns[campaign.id] = campaign
        logger.info("Created campaign %s", campaign.id)
        return self._copy(campaign)

    async def update_campaign(self, campaign_id: int, updates: CampaignUpdate) -> Campaign:
        campaign = self._campaigns.get(campaign_id)
        if not campaign:
            raise NotFoundError("Campaign", campaign_id)
        changes = updates.changes()
        if "created_by" in changes and changes["created_by"] not in self._users:
            raise ValidationError(f"User {changes['created_by']} does not exist")
        updated = self._patched(campaign, changes, now=utcnow())
        self._campaigns[campaign_id] = updated
        return self._copy(updated)

    async def delete_campaign(self, campaign_id: int) -> None:
        if self._campaigns.pop(campaign_id, None) is None:
            return
        removed = {
            collab_id
            for collab_id, collab in self._collaborations.items()
            if collab.campaign_id == campaign_id
        }
        self._drop_collaborations(removed)
        self._analytics = {
            key: point for key, point in self._analytics.items() if point.campaign_id != campaign_id
        }
        logger.info("Deleted campaign %s and %d collaborations", campaign_id, len(removed))

    # Collaborations

    def _drop_collaborations(self, collaboration_ids: set[int]) -> None:
        for collab_id in collaboration_ids:
            del self._collaborations[collab_id]
        for key, point in self._analytics.items():
            if point.collaboration_id in collaboration_ids:
                self._analytics[key] = point.model_copy(update={"collaboration_id": None})

    def _check_collaboration_refs(
        self, campaign_id: Optional[int], influencer_id: Optional[int]
    ) -> None:
        if campaign_id is not None and campaign_id not in self._campaigns:
            raise ValidationError(f"Campaign {campaign_id} does not exist")
        if influencer_id is not None and influencer_id not in self._influencers:
            raise ValidationError(f"Influencer {influencer_id} does not exist")

    async def get_collaborations(
        self,
        campaign_id: Optional[int] = None,
        influencer_id: Optional[int] = None,
        status: Optional[str] = None,
    ) -> list[CollaborationWithDetails]:
        collaborations = list(self._collaborations.values())
        if campaign_id is not None:
            collaborations = [c for c in collaborations if c.campaign_id == campaign_id]
        if influencer_id is not None:
            collaborations = [c for c in collaborations if c.influencer_id == influencer_id]
        if status and status != "all":
            collaborations = [c for c in collaborations if c.status == status]
        collaborations.sort(key=lambda c: (c.created_at, c.id), reverse=True)

        results = []
        for collab in collaborations:
            campaign = self._campaigns.get(collab.campaign_id)
            if campaign is None:
                raise StorageError(f"Collaboration {collab.id} has no campaign")
            results.append(
                CollaborationWithDetails(
                    **collab.model_dump(),
                    campaign=self._copy(campaign),
                    influencer=self._require_influencer(collab),
                )
            )
        return results

    async def get_collaboration(self, collaboration_id: int) -> Optional[Collaboration]:
        collaboration = self._collaborations.get(collaboration_id)
        return self._copy(collaboration) if collaboration else None

    async def create_collaboration(self, data: CollaborationCreate) -> Collaboration:
        self._check_collaboration_refs(data.campaign_id, data.influencer_id)
        now = utcnow()
        fields = data.model_dump()
        fields["completed_at"] = initial_completed_at(fields["status"], fields["completed_at"], now=now)
        collaboration = Collaboration(
            id=self._next_id("collaborations"), created_at=now, updated_at=now, **fields
        )
        self._collaborations[collaboration.id] = collaboration
        logger.info(
            "Created collaboration %s (campaign %s, influencer %s)",
            collaboration.id,
            collaboration.campaign_id,
            collaboration.influencer_id,
        )
        return self._copy(collaboration)

    async def update_collaboration(
        self, collaboration_id: int, updates: CollaborationUpdate
    ) -> Collaboration:
        collaboration = self._collaborations.get(collaboration_id)
        if not collaboration:
            raise NotFoundError("Collaboration", collaboration_id)
        now = utcnow()
        changes = prepare_collaboration_changes(
            collaboration.status,
            updates.changes(),
            now=now,
            strict=self.strict_transitions,
        )
        self._check_collaboration_refs(changes.get("campaign_id"), changes.get("influencer_id"))
        updated = self._patched(collaboration, changes, now=now)
        self._collaborations[collaboration_id] = updated
        return self._copy(updated)

    async def delete_collaboration(self, collaboration_id: int) -> None:
        if collaboration_id in self._collaborations:
            self._drop_collaborations({collaboration_id})

    # Analytics

    async def get_analytics(self, campaign_id: int) -> list[Analytics]:
        points = [p for p in self._analytics.values() if p.campaign_id == campaign_id]
        points.sort(key=lambda p: (p.date, p.id))
        return [self._copy(point) for point in points]

    async def create_analytics(self, data: AnalyticsCreate) -> Analytics:
        if data.campaign_id not in self._campaigns:
            raise ValidationError(f"Campaign {data.campaign_id} does not exist")
        if data.collaboration_id is not None and data.collaboration_id not in self._collaborations:
            raise ValidationError(f"Collaboration {data.collaboration_id} does not exist")
        point = Analytics(id=self._next_id("analytics"), created_at=utcnow(), **data.model_dump())
        self._analytics[point.id] = point
        return self._copy(point)

    async def get_dashboard_stats(self, user_id: Optional[int] = None) -> DashboardStats:
        campaigns = list(self._campaigns.values())
        if user_id is not None:
            campaigns = [c for c in campaigns if c.created_by == user_id]
        campaign_ids = {c.id for c in campaigns}

        completed = [
            collab
            for collab in self._collaborations.values()
            if collab.status == CollaborationStatusEnum.completed and collab.campaign_id in campaign_ids
        ]
        revenue = sum(
            (
                point.value
                for point in self._analytics.values()
                if point.metric == REVENUE_METRIC and point.campaign_id in campaign_ids
            ),
            Decimal("0"),
        )
        return summarize_dashboard(
            active_campaigns=sum(1 for c in campaigns if c.status == CampaignStatusEnum.active),
            completed=completed,
            revenue=revenue,
        )

    async def count_influencers(self) -> int:
        return len(self._influencers)

    async def ping(self) -> None:
        return None
