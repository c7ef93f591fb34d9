import pytest

BADGE = {"level_id": 1, "name": "Explorer", "description": "Finished level 1"}


async def _create(client, headers, **overrides):
    res = await client.post("/api/badges", json={**BADGE, **overrides}, headers=headers)
    assert res.status_code == 201, res.text
    return res.json()


@pytest.mark.asyncio
async def test_list_badges_empty(client):
    res = await client.get("/api/badges")
    assert res.status_code == 200
    assert res.json() == []


@pytest.mark.asyncio
async def test_create_then_get_badge(client, admin_headers):
    created = await _create(client, admin_headers, icon_url="https://cdn.test/explorer.png")
    assert created["name"] == "Explorer"

    res = await client.get(f"/api/badges/{created['badge_id']}")
    assert res.status_code == 200
    assert res.json() == created


@pytest.mark.asyncio
async def test_get_unknown_badge_is_404(client):
    res = await client.get("/api/badges/999")
    assert res.status_code == 404
    assert res.json() == {"message": "Badge not found"}


@pytest.mark.asyncio
async def test_non_numeric_id_is_400(client):
    res = await client.get("/api/badges/abc")
    assert res.status_code == 400
    error = res.json()["errors"][0]
    assert error["param"] == "id"
    assert error["rule"] == "integer"
    assert error["value"] == "abc"


@pytest.mark.asyncio
async def test_create_requires_token(client):
    res = await client.post("/api/badges", json=BADGE)
    assert res.status_code == 401
    assert res.json() == {"error": True, "message": "Missing or invalid authorization header"}


@pytest.mark.asyncio
async def test_create_rejects_bad_token(client):
    res = await client.post("/api/badges", json=BADGE, headers={"Authorization": "Bearer nope"})
    assert res.status_code == 401
    assert res.json()["message"] == "Invalid or expired token"


@pytest.mark.asyncio
async def test_create_forbidden_for_non_admin(client, user_headers):
    res = await client.post("/api/badges", json=BADGE, headers=user_headers)
    assert res.status_code == 403
    assert res.json() == {"error": True, "message": "Admin access only"}


@pytest.mark.asyncio
async def test_create_with_invalid_body_is_400(client, admin_headers):
    res = await client.post("/api/badges", json={"level_id": 0, "description": ""}, headers=admin_headers)
    assert res.status_code == 400
    params = {e["param"]: e["rule"] for e in res.json()["errors"]}
    assert params == {"level_id": "min", "name": "required"}


@pytest.mark.asyncio
async def test_update_and_delete_badge(client, admin_headers):
    created = await _create(client, admin_headers)
    badge_id = created["badge_id"]

    res = await client.put(f"/api/badges/{badge_id}", json={**BADGE, "name": "Pathfinder"}, headers=admin_headers)
    assert res.status_code == 200
    assert res.json()["name"] == "Pathfinder"

    res = await client.delete(f"/api/badges/{badge_id}", headers=admin_headers)
    assert res.status_code == 204

    res = await client.delete(f"/api/badges/{badge_id}", headers=admin_headers)
    assert res.status_code == 404


@pytest.mark.asyncio
async def test_update_unknown_badge_is_404(client, admin_headers):
    res = await client.put("/api/badges/41", json=BADGE, headers=admin_headers)
    assert res.status_code == 404
    assert res.json()["message"] == "Badge not found"


@pytest.mark.asyncio
async def test_list_badges_filtered_by_level(client, admin_headers):
    await _create(client, admin_headers, level_id=1, name="One")
    await _create(client, admin_headers, level_id=2, name="Two")

    res = await client.get("/api/badges", params={"level_id": 2})
    assert res.status_code == 200
    assert [b["name"] for b in res.json()] == ["Two"]
    assert len((await client.get("/api/badges")).json()) == 2


@pytest.mark.asyncio
async def test_unknown_route_uses_message_body(client):
    res = await client.get("/api/nowhere")
    assert res.status_code == 404
    assert res.json() == {"message": "Route not found"}
