from influencehub.db.repositories.analytics import AnalyticsRepository
from influencehub.db.repositories.campaigns import CampaignsRepository
from influencehub.db.repositories.collaborations import CollaborationsRepository
from influencehub.db.repositories.influencers import InfluencersRepository
from influencehub.db.repositories.users import UsersRepository

__all__ = [
    "AnalyticsRepository",
    "CampaignsRepository",
    "CollaborationsRepository",
    "InfluencersRepository",
    "UsersRepository",
]
