# app/api/user_levels.py

from __future__ import annotations

import logging
from typing import List, Union

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import level_id_param, user_id_param, user_level_id_param, user_level_query
from app.core.auth.schemas import TokenData
from app.core.auth.security import get_current_user
from app.core.errors import NotFoundError
from app.core.user_levels.schemas import (
    CreateUserLevel,
    UpdateUserLevel,
    UserLevelOut,
    UserLevelQuery,
    UserLevelUpsert,
)
from app.core.user_levels.service import UserLevelsService
from app.db.base import get_async_db_session

router = APIRouter(prefix="/user-levels", tags=["User levels"])
log = logging.getLogger(__name__)

USER_LEVEL_NOT_FOUND = "User level not found"


# --- Reads (public) ---

@router.get(
    "",
    response_model=Union[UserLevelOut, List[UserLevelOut]],
    summary="List user levels",
    description=(
        "With both user_id and level_id the single matching row is returned (404 if absent). "
        "With one of them, every row matching it. With neither, every row."
    ),
)
async def list_user_levels(
    query: UserLevelQuery = Depends(user_level_query),
    db: AsyncSession = Depends(get_async_db_session),
):
    service = UserLevelsService(db)
    if query.user_id is not None and query.level_id is not None:
        user_level = await service.get_user_level(query.user_id, query.level_id)
        if user_level is None:
            raise NotFoundError(USER_LEVEL_NOT_FOUND)
        return user_level
    if query.user_id is not None:
        return await service.get_user_levels(query.user_id)
    if query.level_id is not None:
        return await service.get_level_users(query.level_id)
    return await service.list_user_levels()


@router.get("/by-user/{user_id}/levels", response_model=List[UserLevelOut], summary="Levels of one user")
async def get_user_levels(
    user_id: int = Depends(user_id_param),
    db: AsyncSession = Depends(get_async_db_session),
):
    return await UserLevelsService(db).get_user_levels(user_id)


@router.get(
    "/by-user/{user_id}/levels/{level_id}",
    response_model=UserLevelOut,
    summary="Progress of one user on one level",
)
async def get_user_level(
    user_id: int = Depends(user_id_param),
    level_id: int = Depends(level_id_param),
    db: AsyncSession = Depends(get_async_db_session),
):
    user_level = await UserLevelsService(db).get_user_level(user_id, level_id)
    if user_level is None:
        raise NotFoundError(USER_LEVEL_NOT_FOUND)
    return user_level


@router.get("/{id}", response_model=UserLevelOut, summary="Get a user level by id")
async def get_user_level_by_id(
    user_level_id: int = Depends(user_level_id_param),
    db: AsyncSession = Depends(get_async_db_session),
):
    user_level = await UserLevelsService(db).get_by_id(user_level_id)
    if user_level is None:
        raise NotFoundError(USER_LEVEL_NOT_FOUND)
    return user_level


# --- Writes (authenticated) ---

@router.post("/upsert", response_model=UserLevelOut, summary="Insert or overwrite progress")
async def upsert_user_level(
    payload: UserLevelUpsert,
    current_user: TokenData = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db_session),
):
    log.info(
        "API: user %d upserting progress user=%d level=%d",
        current_user.user_id, payload.user_id, payload.level_id,
    )
    return await UserLevelsService(db).upsert_user_level_progress(payload)


@router.post("", response_model=UserLevelOut, status_code=status.HTTP_201_CREATED, summary="Create a user level")
async def create_user_level(
    payload: CreateUserLevel,
    current_user: TokenData = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db_session),
):
    return await UserLevelsService(db).create_user_level(payload)


@router.put("/{id}", response_model=UserLevelOut, summary="Change unlocked / completed flags")
async def update_user_level(
    payload: UpdateUserLevel,
    user_level_id: int = Depends(user_level_id_param),
    current_user: TokenData = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db_session),
):
    user_level = await UserLevelsService(db).update_user_level_status(user_level_id, payload)
    if user_level is None:
        raise NotFoundError(USER_LEVEL_NOT_FOUND)
    return user_level


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a user level")
async def delete_user_level(
    user_level_id: int = Depends(user_level_id_param),
    current_user: TokenData = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db_session),
):
    if not await UserLevelsService(db).delete_user_level(user_level_id):
        raise NotFoundError(USER_LEVEL_NOT_FOUND)
    log.info("API: user %d deleted user level id=%d", current_user.user_id, user_level_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
