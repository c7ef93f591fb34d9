# app/api/user_badges.py

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import id_param, user_badge_query, user_id_param
from app.core.auth.schemas import TokenData
from app.core.auth.security import require_admin
from app.core.errors import NotFoundError
from app.core.user_badges.schemas import CreateUserBadge, UpdateUserBadge, UserBadgeOut, UserBadgeQuery
from app.core.user_badges.service import UserBadgesService
from app.db.base import get_async_db_session

router = APIRouter(prefix="/user-badges", tags=["User badges"])
log = logging.getLogger(__name__)

USER_BADGE_NOT_FOUND = "User badge not found"


@router.get("", response_model=List[UserBadgeOut], summary="List user badges, optionally filtered")
async def list_user_badges(
    query: UserBadgeQuery = Depends(user_badge_query),
    db: AsyncSession = Depends(get_async_db_session),
):
    return await UserBadgesService(db).list_user_badges(query)


@router.get("/by-user/{user_id}", response_model=List[UserBadgeOut], summary="Badges earned by one user")
async def list_badges_of_user(
    user_id: int = Depends(user_id_param),
    db: AsyncSession = Depends(get_async_db_session),
):
    return await UserBadgesService(db).list_user_badges(UserBadgeQuery(user_id=user_id))


@router.get("/{id}", response_model=UserBadgeOut, summary="Get a user badge by id")
async def get_user_badge(
    user_badge_id: int = Depends(id_param),
    db: AsyncSession = Depends(get_async_db_session),
):
    user_badge = await UserBadgesService(db).get_user_badge(user_badge_id)
    if user_badge is None:
        raise NotFoundError(USER_BADGE_NOT_FOUND)
    return user_badge


@router.post("", response_model=UserBadgeOut, status_code=status.HTTP_201_CREATED, summary="Award a badge")
async def create_user_badge(
    payload: CreateUserBadge,
    admin: TokenData = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db_session),
):
    log.info("API: admin %d awarding badge %d to user %d", admin.user_id, payload.badge_id, payload.user_id)
    return await UserBadgesService(db).create_user_badge(payload)


@router.put("/{id}", response_model=UserBadgeOut, summary="Replace a user badge")
async def update_user_badge(
    payload: UpdateUserBadge,
    user_badge_id: int = Depends(id_param),
    admin: TokenData = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db_session),
):
    user_badge = await UserBadgesService(db).update_user_badge(user_badge_id, payload)
    if user_badge is None:
        raise NotFoundError(USER_BADGE_NOT_FOUND)
    return user_badge


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT, summary="Revoke a user badge")
async def delete_user_badge(
    user_badge_id: int = Depends(id_param),
    admin: TokenData = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db_session),
):
    if not await UserBadgesService(db).delete_user_badge(user_badge_id):
        raise NotFoundError(USER_BADGE_NOT_FOUND)
    log.info("API: admin %d revoked user badge id=%d", admin.user_id, user_badge_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
