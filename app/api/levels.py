# app/api/levels.py

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import id_param
from app.core.auth.schemas import TokenData
from app.core.auth.security import require_admin
from app.core.errors import NotFoundError
from app.core.levels.schemas import CreateLevel, LevelOut, UpdateLevel
from app.core.levels.service import LevelsService
from app.db.base import get_async_db_session

router = APIRouter(prefix="/levels", tags=["Levels"])
log = logging.getLogger(__name__)

LEVEL_NOT_FOUND = "Level not found"


# --- Reads (public) ---

@router.get("", response_model=List[LevelOut], summary="List levels in play order")
async def list_levels(db: AsyncSession = Depends(get_async_db_session)):
    return await LevelsService(db).list_levels()


@router.get("/{id}", response_model=LevelOut, summary="Get a level by id")
async def get_level(level_id: int = Depends(id_param), db: AsyncSession = Depends(get_async_db_session)):
    level = await LevelsService(db).get_level(level_id)
    if level is None:
        raise NotFoundError(LEVEL_NOT_FOUND)
    return level


# --- Writes (admin) ---

@router.post("", response_model=LevelOut, status_code=status.HTTP_201_CREATED, summary="Create a level")
async def create_level(
    payload: CreateLevel,
    admin: TokenData = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db_session),
):
    log.info("API: admin %d creating level '%s'", admin.user_id, payload.title)
    return await LevelsService(db).create_level(payload)


@router.put("/{id}", response_model=LevelOut, summary="Replace a level")
async def update_level(
    payload: UpdateLevel,
    level_id: int = Depends(id_param),
    admin: TokenData = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db_session),
):
    level = await LevelsService(db).update_level(level_id, payload)
    if level is None:
        raise NotFoundError(LEVEL_NOT_FOUND)
    return level


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a level")
async def delete_level(
    level_id: int = Depends(id_param),
    admin: TokenData = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db_session),
):
    if not await LevelsService(db).delete_level(level_id):
        raise NotFoundError(LEVEL_NOT_FOUND)
    log.info("API: admin %d deleted level id=%d", admin.user_id, level_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
