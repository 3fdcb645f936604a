from decimal import Decimal

import pytest
from pydantic import ValidationError

from influencehub.config import Settings
from influencehub.schemas import (
    CampaignCreate,
    InfluencerCreate,
    InfluencerFilters,
    InfluencerUpdate,
)


def test_money_and_percentages_are_quantized():
    influencer = InfluencerCreate(
        name="Emma Style",
        handle="@emmastyle",
        category="Fashion & Beauty",
        followers=450_000,
        engagementRate="4.805",
        ratePerPost=500,
    )
    assert influencer.engagement_rate == Decimal("4.81")
    assert influencer.rate_per_post == Decimal("500.00")


def test_engagement_rate_is_bounded():
    with pytest.raises(ValidationError):
        InfluencerCreate(
            name="Too Engaged",
            handle="@over",
            category="Travel",
            followers=1,
            engagementRate="101",
            ratePerPost="1",
        )


def test_campaign_defaults_to_draft():
    campaign = CampaignCreate(name="Draft", category="Travel", budget="10", createdBy=1)
    assert campaign.status == "draft"
    assert campaign.model_dump()["status"] == "draft"


def test_patch_tracks_only_supplied_fields():
    patch = InfluencerUpdate(bio=None, followers=10)
    assert patch.changes() == {"bio": None, "followers": 10}
    with pytest.raises(ValidationError):
        InfluencerUpdate(handle=None)


def test_follower_presets_and_explicit_bounds():
    preset = InfluencerFilters.from_query(followers="100k-1m")
    assert (preset.min_followers, preset.max_followers) == (100_000, 1_000_000)

    overridden = InfluencerFilters.from_query(followers="1m+", max_followers=5_000_000)
    assert (overridden.min_followers, overridden.max_followers) == (1_000_000, 5_000_000)

    assert InfluencerFilters.from_query(followers="any") == InfluencerFilters()
    with pytest.raises(ValueError):
        InfluencerFilters.from_query(followers="2m")


def test_filter_normalization():
    filters = InfluencerFilters(category="All Categories", search="")
    assert filters.category_filter is None
    assert filters.search_filter is None
    assert InfluencerFilters(search="Emma").search_filter == "emma"


def test_cors_origins_accept_csv_and_json(monkeypatch):
    monkeypatch.setenv("BACKEND_CORS_ORIGINS", "http://a.test, http://b.test")
    assert Settings().BACKEND_CORS_ORIGINS == ["http://a.test", "http://b.test"]

    monkeypatch.setenv("BACKEND_CORS_ORIGINS", '["http://c.test"]')
    assert Settings().BACKEND_CORS_ORIGINS == ["http://c.test"]

    monkeypatch.setenv("LOG_LEVEL", " debug ")
    assert Settings().LOG_LEVEL == "DEBUG"
