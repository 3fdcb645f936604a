from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional

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
    DashboardStats,
    Influencer,
    InfluencerCreate,
    InfluencerFilters,
    InfluencerUpdate,
    InfluencerWithStats,
    User,
    UserCreate,
    UserUpdate,
)
from influencehub.storage import fixtures

logger = logging.getLogger(__name__)


class Storage(ABC):
    """Repository and aggregation interface shared by every backend.

    Reads that enrich records (campaign creator, collaboration influencer)
    fetch related rows in bulk. Deleting a campaign or influencer cascades to
    its collaborations; deleting an id that does not exist is a no-op, while
    updating one raises NotFoundError.
    """

    def __init__(self, *, strict_transitions: bool = False) -> None:
        self.strict_transitions = strict_transitions

    # Users
    @abstractmethod
    async def get_user(self, user_id: int) -> Optional[User]: ...

    @abstractmethod
    async def get_user_by_username(self, username: str) -> Optional[User]: ...

    @abstractmethod
    async def create_user(self, data: UserCreate) -> User: ...

    @abstractmethod
    async def update_user(self, user_id: int, updates: UserUpdate) -> User: ...

    # Influencers
    @abstractmethod
    async def get_influencers(
        self, filters: Optional[InfluencerFilters] = None
    ) -> list[InfluencerWithStats]: ...

    @abstractmethod
    async def get_influencer(self, influencer_id: int) -> Optional[Influencer]: ...

    @abstractmethod
    async def create_influencer(self, data: InfluencerCreate) -> Influencer: ...

    @abstractmethod
    async def update_influencer(self, influencer_id: int, updates: InfluencerUpdate) -> Influencer: ...

    @abstractmethod
    async def delete_influencer(self, influencer_id: int) -> None: ...

    # Campaigns
    @abstractmethod
    async def get_campaigns(
        self, user_id: Optional[int] = None, status: Optional[str] = None
    ) -> list[CampaignWithCollaborations]: ...

    @abstractmethod
    async def get_campaign(self, campaign_id: int) -> Optional[CampaignWithCollaborations]: ...

    @abstractmethod
    async def create_campaign(self, data: CampaignCreate) -> Campaign: ...

    @abstractmethod
    async def update_campaign(self, campaign_id: int, updates: CampaignUpdate) -> Campaign: ...

    @abstractmethod
    async def delete_campaign(self, campaign_id: int) -> None: ...

    # Collaborations
    @abstractmethod
    async def get_collaborations(
        self,
        campaign_id: Optional[int] = None,
        influencer_id: Optional[int] = None,
        status: Optional[str] = None,
    ) -> list[CollaborationWithDetails]: ...

    @abstractmethod
    async def get_collaboration(self, collaboration_id: int) -> Optional[Collaboration]: ...

    @abstractmethod
    async def create_collaboration(self, data: CollaborationCreate) -> Collaboration: ...

    @abstractmethod
    async def update_collaboration(
        self, collaboration_id: int, updates: CollaborationUpdate
    ) -> Collaboration: ...

    @abstractmethod
    async def delete_collaboration(self, collaboration_id: int) -> None: ...

    # Analytics
    @abstractmethod
    async def get_analytics(self, campaign_id: int) -> list[Analytics]: ...

    @abstractmethod
    async def create_analytics(self, data: AnalyticsCreate) -> Analytics: ...

    @abstractmethod
    async def get_dashboard_stats(self, user_id: Optional[int] = None) -> DashboardStats: ...

    @abstractmethod
    async def count_influencers(self) -> int: ...

    @abstractmethod
    async def ping(self) -> None:
        """Raise StorageError when the backend cannot be reached."""

    async def seed_data(self) -> bool:
        """Insert the demo dataset when no influencers exist yet; return whether it did."""
        if await self.count_influencers() > 0:
            return False

        demo = fixtures.demo_user()
        user = await self.get_user_by_username(demo.username)
        if user is None:
            user = await self.create_user(demo)
        influencers = [await self.create_influencer(item) for item in fixtures.demo_influencers()]
        campaigns = [
            await self.create_campaign(item) for item in fixtures.demo_campaigns(created_by=user.id)
        ]
        collaborations = [
            await self.create_collaboration(item)
            for item in fixtures.demo_collaborations(
                campaign_ids=[campaign.id for campaign in campaigns],
                influencer_ids=[influencer.id for influencer in influencers],
            )
        ]
        for item in fixtures.demo_analytics(
            campaign_ids=[campaign.id for campaign in campaigns],
            collaboration_ids=[collaboration.id for collaboration in collaborations],
        ):
            await self.create_analytics(item)

        logger.info(
            "Seeded demo data: %d influencers, %d campaigns, %d collaborations",
            len(influencers),
            len(campaigns),
            len(collaborations),
        )
        return True
