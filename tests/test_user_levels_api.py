import pytest
import pytest_asyncio


@pytest_asyncio.fixture
async def progress(client, user_headers):
    rows = []
    for user_id, level_id, unlocked in [(2, 1, True), (2, 2, False), (3, 1, True)]:
        res = await client.post(
            "/api/user-levels",
            json={"user_id": user_id, "level_id": level_id, "unlocked": unlocked},
            headers=user_headers,
        )
        assert res.status_code == 201, res.text
        rows.append(res.json())
    return rows


@pytest.mark.asyncio
async def test_query_without_filters_lists_everything(client, progress):
    res = await client.get("/api/user-levels")
    assert res.status_code == 200
    assert len(res.json()) == 3


@pytest.mark.asyncio
async def test_query_by_user(client, progress):
    res = await client.get("/api/user-levels", params={"user_id": 2})
    assert [row["level_id"] for row in res.json()] == [1, 2]


@pytest.mark.asyncio
async def test_query_by_level(client, progress):
    res = await client.get("/api/user-levels", params={"level_id": 1})
    assert [row["user_id"] for row in res.json()] == [2, 3]


@pytest.mark.asyncio
async def test_query_by_user_and_level_returns_single_row(client, progress):
    res = await client.get("/api/user-levels", params={"user_id": 3, "level_id": 1})
    assert res.status_code == 200
    assert res.json() == progress[2]

    res = await client.get("/api/user-levels", params={"user_id": 3, "level_id": 2})
    assert res.status_code == 404
    assert res.json() == {"message": "User level not found"}


@pytest.mark.asyncio
async def test_query_with_negative_user_id_is_400(client):
    res = await client.get("/api/user-levels", params={"user_id": -1})
    assert res.status_code == 400
    assert res.json()["errors"][0]["param"] == "user_id"


@pytest.mark.asyncio
async def test_by_user_routes(client, progress):
    res = await client.get("/api/user-levels/by-user/2/levels")
    assert len(res.json()) == 2

    res = await client.get("/api/user-levels/by-user/2/levels/2")
    assert res.status_code == 200
    assert res.json()["unlocked"] is False

    res = await client.get("/api/user-levels/by-user/2/levels/3")
    assert res.status_code == 404


@pytest.mark.asyncio
async def test_get_by_id_and_bad_ids(client, progress):
    row = progress[0]
    assert (await client.get(f"/api/user-levels/{row['user_level_id']}")).json() == row

    res = await client.get("/api/user-levels/0")
    assert res.status_code == 400
    assert res.json()["errors"][0]["rule"] == "min"

    res = await client.get("/api/user-levels/level-one")
    assert res.status_code == 400
    assert res.json()["errors"][0]["rule"] == "integer"


@pytest.mark.asyncio
async def test_create_duplicate_is_409(client, user_headers, progress):
    res = await client.post("/api/user-levels", json={"user_id": 2, "level_id": 1}, headers=user_headers)
    assert res.status_code == 409


@pytest.mark.asyncio
async def test_update_flags_and_delete(client, user_headers, progress):
    row_id = progress[1]["user_level_id"]
    res = await client.put(f"/api/user-levels/{row_id}", json={"completed": True}, headers=user_headers)
    assert res.status_code == 200
    assert (res.json()["unlocked"], res.json()["completed"]) == (False, True)

    assert (await client.delete(f"/api/user-levels/{row_id}", headers=user_headers)).status_code == 204
    assert (await client.put(f"/api/user-levels/{row_id}", json={}, headers=user_headers)).status_code == 404


@pytest.mark.asyncio
async def test_upsert_keeps_identifier(client, user_headers, progress):
    existing = progress[1]
    res = await client.post(
        "/api/user-levels/upsert",
        json={"user_id": 2, "level_id": 2, "unlocked": True, "completed": True},
        headers=user_headers,
    )
    assert res.status_code == 200
    body = res.json()
    assert body["user_level_id"] == existing["user_level_id"]
    assert (body["unlocked"], body["completed"]) == (True, True)

    res = await client.post("/api/user-levels/upsert", json={"user_id": 3, "level_id": 3}, headers=user_headers)
    assert res.status_code == 200
    assert res.json()["user_level_id"] not in {row["user_level_id"] for row in progress}


@pytest.mark.asyncio
async def test_writes_require_token(client):
    res = await client.post("/api/user-levels", json={"user_id": 2, "level_id": 1})
    assert res.status_code == 401
    assert res.headers["www-authenticate"] == "Bearer"
    assert (await client.post("/api/user-levels/upsert", json={"user_id": 2, "level_id": 1})).status_code == 401
