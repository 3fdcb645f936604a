from fastapi.testclient import TestClient

from influencehub.main import app


def _create_owner(client) -> dict:
    resp = client.post(
        "/api/users",
        json={"username": "admin", "password": "password", "firstName": "Sarah"},
    )
    assert resp.status_code == 201
    return resp.json()


def _create_influencer(client, **overrides) -> dict:
    payload = {
        "name": "Emma Style",
        "handle": "@emmastyle",
        "category": "Fashion & Beauty",
        "followers": 450000,
        "engagementRate": "4.8",
        "ratePerPost": 500,
        "isVerified": True,
    }
    payload.update(overrides)
    resp = client.post("/api/influencers", json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()


def _create_campaign(client, owner_id: int, **overrides) -> dict:
    payload = {
        "name": "Summer Fashion Collection",
        "category": "Fashion & Beauty",
        "budget": "7500",
        "status": "active",
        "createdBy": owner_id,
    }
    payload.update(overrides)
    resp = client.post("/api/campaigns", json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_health_endpoints():
    app.dependency_overrides.clear()
    with TestClient(app) as client:
        health = client.get("/health")
        db_health = client.get("/health/db")

    assert health.status_code == 200
    assert health.json() == {"ok": True}
    assert db_health.status_code == 200
    assert db_health.json() == {"db": "ok"}


def test_users_hide_password(api_client):
    owner = _create_owner(api_client)

    assert owner["role"] == "Brand Manager"
    assert owner["firstName"] == "Sarah"
    assert "password" not in owner

    fetched = api_client.get(f"/api/users/{owner['id']}")
    assert fetched.status_code == 200
    assert fetched.json() == owner

    patched = api_client.patch(f"/api/users/{owner['id']}", json={"lastName": "Johnson"})
    assert patched.status_code == 200
    assert patched.json()["lastName"] == "Johnson"

    assert api_client.get("/api/users/999").status_code == 404
    duplicate = api_client.post("/api/users", json={"username": "admin", "password": "x"})
    assert duplicate.status_code == 400


def test_influencer_crud_uses_camel_case_and_string_decimals(api_client):
    created = _create_influencer(api_client)

    assert created["engagementRate"] == "4.80"
    assert created["ratePerPost"] == "500.00"
    assert created["isVerified"] is True
    assert "createdAt" in created and "updatedAt" in created

    listed = api_client.get("/api/influencers").json()
    assert listed[0]["totalCollaborations"] == 0

    updated = api_client.put(f"/api/influencers/{created['id']}", json={"followers": 460000})
    assert updated.status_code == 200
    assert updated.json()["followers"] == 460000
    assert updated.json()["name"] == "Emma Style"

    assert api_client.get(f"/api/influencers/{created['id']}").status_code == 200
    assert api_client.delete(f"/api/influencers/{created['id']}").status_code == 204
    assert api_client.get(f"/api/influencers/{created['id']}").status_code == 404


def test_influencer_filters_from_query(api_client):
    _create_influencer(api_client)
    _create_influencer(
        api_client,
        name="TechReviewer",
        handle="@techreviewer",
        category="Technology",
        followers=28000,
    )

    fashion = api_client.get("/api/influencers", params={"category": "Fashion & Beauty"}).json()
    assert [inf["handle"] for inf in fashion] == ["@emmastyle"]

    everything = api_client.get("/api/influencers", params={"category": "All Categories"}).json()
    assert len(everything) == 2

    mid_tier = api_client.get("/api/influencers", params={"followers": "10k-100k"}).json()
    assert [inf["handle"] for inf in mid_tier] == ["@techreviewer"]

    bounded = api_client.get(
        "/api/influencers", params={"minFollowers": 100000, "search": "EMMA"}
    ).json()
    assert [inf["handle"] for inf in bounded] == ["@emmastyle"]

    bad_preset = api_client.get("/api/influencers", params={"followers": "huge"})
    assert bad_preset.status_code == 400


def test_invalid_payloads_return_400(api_client):
    missing_name = api_client.post(
        "/api/influencers",
        json={"handle": "@x", "category": "Travel", "followers": 1, "engagementRate": 1, "ratePerPost": 1},
    )
    assert missing_name.status_code == 400

    created = _create_influencer(api_client)
    null_name = api_client.put(f"/api/influencers/{created['id']}", json={"name": None})
    assert null_name.status_code == 400

    orphan = api_client.post(
        "/api/campaigns",
        json={"name": "Orphan", "category": "Travel", "budget": 10, "createdBy": 999},
    )
    assert orphan.status_code == 400


def test_update_missing_rows_returns_404_but_delete_is_noop(api_client):
    assert api_client.put("/api/influencers/999", json={"name": "Ghost"}).status_code == 404
    assert api_client.delete("/api/influencers/999").status_code == 204
    assert api_client.patch("/api/campaigns/999", json={"name": "Ghost"}).status_code == 404
    assert api_client.delete("/api/campaigns/999").status_code == 204
    assert api_client.put("/api/collaborations/999", json={"status": "active"}).status_code == 404
    assert api_client.delete("/api/collaborations/999").status_code == 204


def test_campaign_endpoints(api_client):
    owner = _create_owner(api_client)
    campaign = _create_campaign(api_client, owner["id"], startDate="2024-06-15T00:00:00Z")

    assert campaign["budget"] == "7500.00"
    assert campaign["createdBy"] == owner["id"]
    assert campaign["startDate"].startswith("2024-06-15T00:00:00")

    put = api_client.put(f"/api/campaigns/{campaign['id']}", json={"status": "completed"})
    patch = api_client.patch(f"/api/campaigns/{campaign['id']}", json={"goals": "Awareness"})
    assert put.status_code == 200
    assert patch.status_code == 200
    assert patch.json()["status"] == "completed"
    assert patch.json()["goals"] == "Awareness"

    detail = api_client.get(f"/api/campaigns/{campaign['id']}").json()
    assert detail["creator"]["username"] == "admin"
    assert "password" not in detail["creator"]
    assert detail["collaborations"] == []

    listed = api_client.get("/api/campaigns", params={"userId": owner["id"], "status": "all"}).json()
    assert [c["id"] for c in listed] == [campaign["id"]]
    assert api_client.get("/api/campaigns", params={"status": "draft"}).json() == []

    assert api_client.delete(f"/api/campaigns/{campaign['id']}").status_code == 204
    assert api_client.get(f"/api/campaigns/{campaign['id']}").status_code == 404


def test_collaboration_and_analytics_flow(api_client):
    owner = _create_owner(api_client)
    influencer = _create_influencer(api_client)
    campaign = _create_campaign(api_client, owner["id"])

    resp = api_client.post(
        "/api/collaborations",
        json={
            "campaignId": campaign["id"],
            "influencerId": influencer["id"],
            "agreedRate": "500",
            "deliverables": "2 Instagram posts, 1 story",
        },
    )
    assert resp.status_code == 201
    collab = resp.json()
    assert collab["status"] == "pending"
    assert collab["agreedRate"] == "500.00"

    done = api_client.put(
        f"/api/collaborations/{collab['id']}",
        json={"status": "completed", "actualReach": 450000, "actualEngagement": "4.8"},
    ).json()
    assert done["completedAt"] is not None

    listed = api_client.get("/api/collaborations", params={"campaignId": campaign["id"]}).json()
    assert listed[0]["influencer"]["handle"] == "@emmastyle"
    assert listed[0]["campaign"]["name"] == "Summer Fashion Collection"
    assert api_client.get("/api/collaborations", params={"status": "declined"}).json() == []

    point = api_client.post(
        "/api/analytics",
        json={
            "campaignId": campaign["id"],
            "collaborationId": collab["id"],
            "metric": "revenue",
            "value": "2400",
            "date": "2024-06-30T00:00:00Z",
        },
    )
    assert point.status_code == 201
    series = api_client.get(f"/api/analytics/{campaign['id']}").json()
    assert [p["value"] for p in series] == ["2400.00"]

    stats = api_client.get("/api/dashboard/stats", params={"userId": owner["id"]}).json()
    assert stats == {
        "activeCampaigns": 1,
        "totalReach": 450000,
        "avgEngagementRate": "4.80",
        "totalROI": "380.00",
    }

    assert api_client.delete(f"/api/collaborations/{collab['id']}").status_code == 204
    assert api_client.get("/api/collaborations").json() == []


def test_seed_endpoint_is_idempotent(api_client):
    first = api_client.post("/api/seed")
    second = api_client.post("/api/seed")

    assert first.status_code == 200
    assert first.json()["seeded"] is True
    assert second.json()["seeded"] is False
    assert len(api_client.get("/api/influencers").json()) == 6
    pending = api_client.get("/api/campaigns", params={"status": "pending"}).json()
    assert len(pending) == 1
