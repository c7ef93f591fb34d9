# app/graphql/schema.py

"""
Read-only GraphQL view over badges and user levels.

Field names are kept as written (no automatic camelCase); the camelCase
query names and arguments are spelled out explicitly.
"""

import logging
from typing import Annotated, Any, Dict, List, Optional

import strawberry
from fastapi import Depends
from graphql import GraphQLError
from sqlalchemy.ext.asyncio import AsyncSession
from strawberry.fastapi import GraphQLRouter
from strawberry.schema.config import StrawberryConfig
from strawberry.types import Info

from app.core.badges.resolver import BadgesResolver
from app.core.badges.service import BadgesService
from app.core.errors import NotFoundError
from app.core.levels.service import LevelsService
from app.core.user_levels.service import UserLevelsService
from app.db.base import get_async_db_session

log = logging.getLogger(__name__)

LEVEL_NOT_FOUND = "Level not found"
USER_LEVEL_NOT_FOUND = "User level not found"


# --- Types ---

@strawberry.type
class Badge:
    badge_id: int
    level_id: int
    name: str
    description: str
    icon_url: Optional[str] = None

    @classmethod
    def from_orm(cls, row: Any) -> "Badge":
        return cls(
            badge_id=row.badge_id,
            level_id=row.level_id,
            name=row.name,
            description=row.description,
            icon_url=row.icon_url,
        )


@strawberry.type
class Level:
    level_id: int
    title: str
    description: Optional[str]
    difficulty_order: int

    @classmethod
    def from_orm(cls, row: Any) -> "Level":
        return cls(
            level_id=row.level_id,
            title=row.title,
            description=row.description,
            difficulty_order=row.difficulty_order,
        )


@strawberry.type
class UserLevel:
    user_level_id: int
    user_id: int
    level_id: int
    unlocked: bool
    completed: bool

    @classmethod
    def from_orm(cls, row: Any) -> "UserLevel":
        return cls(
            user_level_id=row.user_level_id,
            user_id=row.user_id,
            level_id=row.level_id,
            unlocked=row.unlocked,
            completed=row.completed,
        )


def _not_found(exc: NotFoundError) -> GraphQLError:
    return GraphQLError(exc.message, extensions={"code": exc.code})


def _session(info: Info) -> AsyncSession:
    return info.context["db"]


# --- Query ---

@strawberry.type
class Query:
    @strawberry.field
    async def badges(self, info: Info) -> List[Badge]:
        rows = await BadgesResolver(BadgesService(_session(info))).list()
        return [Badge.from_orm(row) for row in rows]

    @strawberry.field
    async def badge(self, info: Info, id: int) -> Badge:
        try:
            row = await BadgesResolver(BadgesService(_session(info))).get(id)
        except NotFoundError as exc:
            raise _not_found(exc) from exc
        return Badge.from_orm(row)

    @strawberry.field
    async def levels(self, info: Info) -> List[Level]:
        rows = await LevelsService(_session(info)).list_levels()
        return [Level.from_orm(row) for row in rows]

    @strawberry.field
    async def level(self, info: Info, id: int) -> Level:
        row = await LevelsService(_session(info)).get_level(id)
        if row is None:
            raise _not_found(NotFoundError(LEVEL_NOT_FOUND))
        return Level.from_orm(row)

    @strawberry.field(name="userLevelsByUser")
    async def user_levels_by_user(
        self,
        info: Info,
        user_id: Annotated[int, strawberry.argument(name="userId")],
    ) -> List[UserLevel]:
        rows = await UserLevelsService(_session(info)).get_user_levels(user_id)
        return [UserLevel.from_orm(row) for row in rows]

    @strawberry.field(name="userLevelsByUserLevel")
    async def user_levels_by_user_level(
        self,
        info: Info,
        user_id: Annotated[int, strawberry.argument(name="userId")],
        level_id: Annotated[int, strawberry.argument(name="levelId")],
    ) -> UserLevel:
        row = await UserLevelsService(_session(info)).get_user_level(user_id, level_id)
        if row is None:
            log.debug("No user level for user=%d level=%d", user_id, level_id)
            raise _not_found(NotFoundError(USER_LEVEL_NOT_FOUND))
        return UserLevel.from_orm(row)


schema = strawberry.Schema(query=Query, config=StrawberryConfig(auto_camel_case=False))


async def get_context(db: AsyncSession = Depends(get_async_db_session)) -> Dict[str, Any]:
    return {"db": db}


graphql_router = GraphQLRouter(schema, context_getter=get_context)
