from influencehub.schemas.analytics import Analytics, AnalyticsCreate, DashboardStats
from influencehub.schemas.campaigns import Campaign, CampaignCreate, CampaignUpdate
from influencehub.schemas.collaborations import (
    CampaignWithCollaborations,
    Collaboration,
    CollaborationCreate,
    CollaborationUpdate,
    CollaborationWithDetails,
    CollaborationWithInfluencer,
)
from influencehub.schemas.influencers import (
    FOLLOWER_RANGES,
    Influencer,
    InfluencerCreate,
    InfluencerFilters,
    InfluencerUpdate,
    InfluencerWithStats,
)
from influencehub.schemas.users import User, UserCreate, UserPublic, UserUpdate

__all__ = [
    "Analytics",
    "AnalyticsCreate",
    "DashboardStats",
    "Campaign",
    "CampaignCreate",
    "CampaignUpdate",
    "CampaignWithCollaborations",
    "Collaboration",
    "CollaborationCreate",
    "CollaborationUpdate",
    "CollaborationWithDetails",
    "CollaborationWithInfluencer",
    "FOLLOWER_RANGES",
    "Influencer",
    "InfluencerCreate",
    "InfluencerFilters",
    "InfluencerUpdate",
    "InfluencerWithStats",
    "User",
    "UserCreate",
    "UserPublic",
    "UserUpdate",
]
