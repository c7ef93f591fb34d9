import pytest

from app.core.badges.schemas import CreateBadge
from app.core.badges.service import BadgesService
from app.core.user_levels.schemas import CreateUserLevel
from app.core.user_levels.service import UserLevelsService
from app.db.base import async_session_context


async def _gql(client, query, variables=None):
    res = await client.post("/graphql", json={"query": query, "variables": variables or {}})
    assert res.status_code == 200, res.text
    return res.json()


@pytest.mark.asyncio
async def test_badges_empty(client):
    body = await _gql(client, "{ badges { badge_id name } }")
    assert body["data"] == {"badges": []}


@pytest.mark.asyncio
async def test_badges_and_badge(client):
    async with async_session_context() as session:
        badge = await BadgesService(session).create_badge(
            CreateBadge(level_id=2, name="Explorer", description="Level 2 done")
        )
        badge_id = badge.badge_id

    body = await _gql(client, "{ badges { badge_id level_id name description icon_url } }")
    assert body["data"]["badges"] == [
        {"badge_id": badge_id, "level_id": 2, "name": "Explorer", "description": "Level 2 done", "icon_url": None}
    ]

    body = await _gql(client, "query($id: Int!) { badge(id: $id) { name } }", {"id": badge_id})
    assert body["data"]["badge"] == {"name": "Explorer"}


@pytest.mark.asyncio
async def test_unknown_badge_reports_not_found(client):
    body = await _gql(client, "{ badge(id: 404) { name } }")
    assert body["data"] is None
    error = body["errors"][0]
    assert error["message"] == "Badge not found"
    assert error["extensions"]["code"] == "NOT_FOUND"


@pytest.mark.asyncio
async def test_user_levels_queries(client):
    async with async_session_context() as session:
        service = UserLevelsService(session)
        await service.create_user_level(CreateUserLevel(user_id=2, level_id=2, unlocked=True))
        await service.create_user_level(CreateUserLevel(user_id=2, level_id=1, unlocked=True, completed=True))

    body = await _gql(client, "{ userLevelsByUser(userId: 2) { level_id unlocked completed } }")
    assert body["data"]["userLevelsByUser"] == [
        {"level_id": 1, "unlocked": True, "completed": True},
        {"level_id": 2, "unlocked": True, "completed": False},
    ]

    body = await _gql(client, "{ userLevelsByUserLevel(userId: 2, levelId: 2) { user_id level_id } }")
    assert body["data"]["userLevelsByUserLevel"] == {"user_id": 2, "level_id": 2}


@pytest.mark.asyncio
async def test_unknown_user_level_reports_not_found(client):
    body = await _gql(client, "{ userLevelsByUserLevel(userId: 3, levelId: 1) { user_level_id } }")
    assert body["errors"][0]["message"] == "User level not found"
    assert body["errors"][0]["extensions"]["code"] == "NOT_FOUND"


@pytest.mark.asyncio
async def test_levels_and_level(client):
    body = await _gql(client, "{ levels { level_id title difficulty_order } }")
    assert [lv["title"] for lv in body["data"]["levels"]] == ["Basics", "Intermediate", "Advanced"]

    body = await _gql(client, "{ level(id: 3) { title description } }")
    assert body["data"]["level"] == {"title": "Advanced", "description": None}


@pytest.mark.asyncio
async def test_unknown_level_reports_not_found(client):
    body = await _gql(client, "{ level(id: 77) { title } }")
    assert body["errors"][0]["message"] == "Level not found"
    assert body["errors"][0]["extensions"]["code"] == "NOT_FOUND"
