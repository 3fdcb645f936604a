from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from pydantic import Field

from influencehub.db.enums import ALL_CATEGORIES
from influencehub.schemas.common import (
    Money,
    PatchModel,
    PayloadModel,
    Percentage,
    RecordModel,
    Timestamp,
)

# Follower-count presets offered by the discovery screen, as inclusive (min, max) bounds.
FOLLOWER_RANGES: dict[str, tuple[Optional[int], Optional[int]]] = {
    "any": (None, None),
    "1k-10k": (1_000, 10_000),
    "10k-100k": (10_000, 100_000),
    "100k-1m": (100_000, 1_000_000),
    "1m+": (1_000_000, None),
}


class InfluencerCreate(PayloadModel):
    name: str = Field(..., min_length=1)
    handle: str = Field(..., min_length=1)
    email: Optional[str] = None
    category: str = Field(..., min_length=1)
    followers: int = Field(..., ge=0)
    engagement_rate: Percentage = Field(..., alias="engagementRate")
    rate_per_post: Money = Field(..., alias="ratePerPost")
    profile_image_url: Optional[str] = Field(None, alias="profileImageUrl")
    bio: Optional[str] = None
    is_verified: bool = Field(False, alias="isVerified")


class InfluencerUpdate(PatchModel):
    non_nullable: ClassVar[frozenset[str]] = frozenset(
        {"name", "handle", "category", "followers", "engagement_rate", "rate_per_post", "is_verified"}
    )

    name: Optional[str] = Field(None, min_length=1)
    handle: Optional[str] = Field(None, min_length=1)
    email: Optional[str] = None
    category: Optional[str] = Field(None, min_length=1)
    followers: Optional[int] = Field(None, ge=0)
    engagement_rate: Optional[Percentage] = Field(None, alias="engagementRate")
    rate_per_post: Optional[Money] = Field(None, alias="ratePerPost")
    profile_image_url: Optional[str] = Field(None, alias="profileImageUrl")
    bio: Optional[str] = None
    is_verified: Optional[bool] = Field(None, alias="isVerified")


class Influencer(RecordModel):
    id: int
    name: str
    handle: str
    email: Optional[str] = None
    category: str
    followers: int
    engagement_rate: Percentage = Field(..., alias="engagementRate")
    rate_per_post: Money = Field(..., alias="ratePerPost")
    profile_image_url: Optional[str] = Field(None, alias="profileImageUrl")
    bio: Optional[str] = None
    is_verified: bool = Field(False, alias="isVerified")
    created_at: Timestamp = Field(..., alias="createdAt")
    updated_at: Timestamp = Field(..., alias="updatedAt")


class InfluencerWithStats(Influencer):
    total_collaborations: int = Field(0, alias="totalCollaborations")


@dataclass(frozen=True)
class InfluencerFilters:
    category: Optional[str] = None
    min_followers: Optional[int] = None
    max_followers: Optional[int] = None
    search: Optional[str] = None

    @property
    def category_filter(self) -> Optional[str]:
        if not self.category or self.category == ALL_CATEGORIES:
            return None
        return self.category

    @property
    def search_filter(self) -> Optional[str]:
        if not self.search:
            return None
        return self.search.lower()

    def matches(self, influencer: Influencer) -> bool:
        category = self.category_filter
        if category is not None and influencer.category != category:
            return False
        if self.min_followers is not None and influencer.followers < self.min_followers:
            return False
        if self.max_followers is not None and influencer.followers > self.max_followers:
            return False
        return self.matches_search(influencer.name, influencer.handle)

    def matches_search(self, name: str, handle: str) -> bool:
        search = self.search_filter
        if search is None:
            return True
        return search in name.lower() or search in handle.lower()

    @classmethod
    def from_query(
        cls,
        *,
        category: Optional[str] = None,
        min_followers: Optional[int] = None,
        max_followers: Optional[int] = None,
        search: Optional[str] = None,
        followers: Optional[str] = None,
    ) -> "InfluencerFilters":
        """Build filters from request parameters; explicit bounds win over a follower preset."""
        if followers:
            try:
                preset_min, preset_max = FOLLOWER_RANGES[followers]
            except KeyError as exc:
                raise ValueError(f"Unknown follower range: {followers}") from exc
            if min_followers is None:
                min_followers = preset_min
            if max_followers is None:
                max_followers = preset_max
        return cls(
            category=category,
            min_followers=min_followers,
            max_followers=max_followers,
            search=search,
        )
