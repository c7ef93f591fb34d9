# app/api/badges.py

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import badge_query, id_param
from app.core.auth.schemas import TokenData
from app.core.auth.security import require_admin
from app.core.badges.resolver import BADGE_NOT_FOUND, BadgesResolver
from app.core.badges.schemas import BadgeOut, BadgeQuery, CreateBadge, UpdateBadge
from app.core.badges.service import BadgesService
from app.core.errors import NotFoundError
from app.db.base import get_async_db_session

router = APIRouter(prefix="/badges", tags=["Badges"])
log = logging.getLogger(__name__)


# --- Reads (public) ---

@router.get("", response_model=List[BadgeOut], summary="List badges, optionally of one level")
async def list_badges(
    query: BadgeQuery = Depends(badge_query),
    db: AsyncSession = Depends(get_async_db_session),
):
    service = BadgesService(db)
    if query.level_id is not None:
        return await service.list_badges_by_level(query.level_id)
    return await BadgesResolver(service).list()


@router.get("/{id}", response_model=BadgeOut, summary="Get a badge by id")
async def get_badge(badge_id: int = Depends(id_param), db: AsyncSession = Depends(get_async_db_session)):
    return await BadgesResolver(BadgesService(db)).get(badge_id)


# --- Writes (admin) ---

@router.post("", response_model=BadgeOut, status_code=status.HTTP_201_CREATED, summary="Create a badge")
async def create_badge(
    payload: CreateBadge,
    admin: TokenData = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db_session),
):
    log.info("API: admin %d creating badge '%s'", admin.user_id, payload.name)
    return await BadgesService(db).create_badge(payload)


@router.put("/{id}", response_model=BadgeOut, summary="Replace a badge")
async def update_badge(
    payload: UpdateBadge,
    badge_id: int = Depends(id_param),
    admin: TokenData = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db_session),
):
    badge = await BadgesService(db).update_badge(badge_id, payload)
    if badge is None:
        raise NotFoundError(BADGE_NOT_FOUND)
    return badge


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a badge")
async def delete_badge(
    badge_id: int = Depends(id_param),
    admin: TokenData = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db_session),
):
    if not await BadgesService(db).delete_badge(badge_id):
        raise NotFoundError(BADGE_NOT_FOUND)
    log.info("API: admin %d deleted badge id=%d", admin.user_id, badge_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
