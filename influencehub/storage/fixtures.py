"""Demo dataset inserted by ``Storage.seed_data`` on an empty store."""
from __future__ import annotations

from datetime import datetime, timezone

from influencehub.schemas import (
    AnalyticsCreate,
    CampaignCreate,
    CollaborationCreate,
    InfluencerCreate,
    UserCreate,
)

_IMAGE_PARAMS = "?ixlib=rb-4.0.3&auto=format&fit=crop&w=150&h=150"


def _unsplash(photo_id: str) -> str:
    return f"https://images.unsplash.com/{photo_id}{_IMAGE_PARAMS}"


def _day(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=timezone.utc)


def demo_user() -> UserCreate:
    return UserCreate(
        username="admin",
        email="admin@influencehub.com",
        password="password",
        role="Brand Manager",
        first_name="Sarah",
        last_name="Johnson",
        profile_image_url=_unsplash("photo-1494790108755-2616b612b786"),
    )


def demo_influencers() -> list[InfluencerCreate]:
    rows = [
        ("Emma Style", "@emmastyle", "emma@style.com", "Fashion & Beauty", 450_000, "4.8", "500",
         "photo-1524504388940-b1c1722653e1", "Fashion influencer sharing daily style inspiration", True),
        ("TechReviewer", "@techreviewer", "tech@reviewer.com", "Technology", 280_000, "5.2", "400",
         "photo-1507003211169-0a1dd7228f2d", "Tech enthusiast reviewing the latest gadgets", True),
        ("FitLife Coach", "@fitlifecoach", "fit@life.com", "Health & Fitness", 320_000, "6.1", "350",
         "photo-1571019613454-1cb2f99b2d8b", "Fitness coach helping people live their best life", True),
        ("Foodie Adventures", "@foodieadventures", "foodie@adventures.com", "Food & Lifestyle", 190_000,
         "7.3", "300", "photo-1438761681033-6461ffad8d80", "Food blogger exploring culinary adventures",
         False),
        ("Wanderlust Tales", "@wanderlusttales", "wander@lust.com", "Travel", 680_000, "4.9", "750",
         "photo-1489424731084-a5d8b219a5bb", "Travel blogger sharing stories from around the world", True),
        ("Lifestyle Maven", "@lifestylemaven", "lifestyle@maven.com", "Lifestyle", 520_000, "5.5", "600",
         "photo-1544005313-94ddf0286df2", "Lifestyle influencer sharing daily inspiration", True),
    ]
    return [
        InfluencerCreate(
            name=name,
            handle=handle,
            email=email,
            category=category,
            followers=followers,
            engagement_rate=engagement,
            rate_per_post=rate,
            profile_image_url=_unsplash(photo),
            bio=bio,
            is_verified=verified,
        )
        for name, handle, email, category, followers, engagement, rate, photo, bio, verified in rows
    ]


def demo_campaigns(*, created_by: int) -> list[CampaignCreate]:
    return [
        CampaignCreate(
            name="Summer Fashion Collection",
            description="Beauty & Fashion campaign targeting young women aged 18-35",
            category="Fashion & Beauty",
            budget="7500",
            status="active",
            start_date=_day(2024, 6, 15),
            end_date=_day(2024, 7, 15),
            target_audience="Young women aged 18-35",
            goals="Increase brand awareness and drive sales",
            created_by=created_by,
        ),
        CampaignCreate(
            name="Tech Product Launch",
            description="Launch campaign for new smartphone targeting tech enthusiasts",
            category="Technology",
            budget="5200",
            status="pending",
            start_date=_day(2024, 7, 1),
            end_date=_day(2024, 8, 1),
            target_audience="Tech enthusiasts aged 25-45",
            goals="Generate buzz for product launch",
            created_by=created_by,
        ),
        CampaignCreate(
            name="Fitness Challenge",
            description="Health & Fitness campaign promoting workout program",
            category="Health & Fitness",
            budget="2200",
            status="completed",
            start_date=_day(2024, 5, 1),
            end_date=_day(2024, 5, 31),
            target_audience="Fitness enthusiasts aged 20-40",
            goals="Promote new workout program",
            created_by=created_by,
        ),
    ]


def demo_collaborations(
    *, campaign_ids: list[int], influencer_ids: list[int]
) -> list[CollaborationCreate]:
    return [
        CollaborationCreate(
            campaign_id=campaign_ids[0],
            influencer_id=influencer_ids[0],
            status="completed",
            agreed_rate="500",
            deliverables="2 Instagram posts, 1 story",
            actual_reach=450_000,
            actual_engagement="4.8",
            completed_at=_day(2024, 6, 20),
        ),
        CollaborationCreate(
            campaign_id=campaign_ids[1],
            influencer_id=influencer_ids[1],
            status="pending",
            agreed_rate="400",
            deliverables="1 YouTube review, 2 Instagram posts",
        ),
        CollaborationCreate(
            campaign_id=campaign_ids[2],
            influencer_id=influencer_ids[2],
            status="completed",
            agreed_rate="350",
            deliverables="3 workout videos, 5 Instagram posts",
            actual_reach=320_000,
            actual_engagement="6.1",
            completed_at=_day(2024, 5, 25),
        ),
    ]


def demo_analytics(*, campaign_ids: list[int], collaboration_ids: list[int]) -> list[AnalyticsCreate]:
    summer, _launch, fitness = campaign_ids
    summer_collab, _launch_collab, fitness_collab = collaboration_ids
    points = [
        (summer, summer_collab, "reach", "120000", _day(2024, 6, 16)),
        (summer, summer_collab, "reach", "310000", _day(2024, 6, 18)),
        (summer, summer_collab, "reach", "450000", _day(2024, 6, 20)),
        (summer, summer_collab, "revenue", "2400", _day(2024, 6, 30)),
        (fitness, fitness_collab, "reach", "150000", _day(2024, 5, 10)),
        (fitness, fitness_collab, "reach", "320000", _day(2024, 5, 25)),
        (fitness, fitness_collab, "revenue", "1212.50", _day(2024, 5, 31)),
    ]
    return [
        AnalyticsCreate(
            campaign_id=campaign_id,
            collaboration_id=collaboration_id,
            metric=metric,
            value=value,
            date=date,
        )
        for campaign_id, collaboration_id, metric, value, date in points
    ]
