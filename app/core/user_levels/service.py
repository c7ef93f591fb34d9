# app/core/user_levels/service.py

"""Service-layer for user level progress."""

from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ConflictError

from .models import UserLevel
from .schemas import CreateUserLevel, UpdateUserLevel, UserLevelUpsert

log = logging.getLogger(__name__)


class UserLevelsService:
    """
    Async service for per-user level progress.
    Uses an injected AsyncSession.
    """

    def __init__(self, db_session: AsyncSession) -> None:
        self.db: AsyncSession = db_session

    # ------------------------------------------------------------------ #
    #                              Reads                                 #
    # ------------------------------------------------------------------ #

    async def list_user_levels(self) -> Sequence[UserLevel]:
        """All user-level rows, ordered by user then level."""
        stmt = select(UserLevel).order_by(UserLevel.user_id, UserLevel.level_id)
        result = await self.db.scalars(stmt)
        return result.all()

    async def get_by_id(self, user_level_id: int) -> UserLevel | None:
        log.debug("Getting user level id=%d", user_level_id)
        return await self.db.get(UserLevel, user_level_id)

    async def get_user_levels(self, user_id: int) -> Sequence[UserLevel]:
        """All levels of one user, ordered by level."""
        stmt = (
            select(UserLevel)
            .where(UserLevel.user_id == user_id)
            .order_by(UserLevel.level_id)
        )
        result = await self.db.scalars(stmt)
        return result.all()

    async def get_level_users(self, level_id: int) -> Sequence[UserLevel]:
        """All user rows for one level, ordered by user."""
        stmt = (
            select(UserLevel)
            .where(UserLevel.level_id == level_id)
            .order_by(UserLevel.user_id)
        )
        result = await self.db.scalars(stmt)
        return result.all()

    async def get_user_level(self, user_id: int, level_id: int) -> UserLevel | None:
        stmt = select(UserLevel).where(
            UserLevel.user_id == user_id,
            UserLevel.level_id == level_id,
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    # ------------------------------------------------------------------ #
    #                              Writes                                #
    # ------------------------------------------------------------------ #

    async def create_user_level(self, payload: CreateUserLevel) -> UserLevel:
        """
        Creates a progress row. Flags left out default to False.

        Raises:
            ConflictError: a row for this (user_id, level_id) already exists.
        """
        if await self.get_user_level(payload.user_id, payload.level_id) is not None:
            raise ConflictError("User level already exists")

        user_level = UserLevel(
            user_id=payload.user_id,
            level_id=payload.level_id,
            unlocked=bool(payload.unlocked),
            completed=bool(payload.completed),
        )
        self.db.add(user_level)
        try:
            await self.db.flush()
        except IntegrityError as exc:
            log.warning("Integrity error while creating user level: %s", exc.orig)
            raise ConflictError("User level conflicts with existing data") from exc
        await self.db.refresh(user_level)
        log.info(
            "Created user level id=%d (user=%d, level=%d)",
            user_level.user_level_id, user_level.user_id, user_level.level_id,
        )
        return user_level

    async def update_user_level_status(self, user_level_id: int, payload: UpdateUserLevel) -> UserLevel | None:
        """
        Changes the unlocked / completed flags that are present in the payload.

        Returns:
            UserLevel | None: The updated row, or None if the id is unknown.
        """
        user_level = await self.db.get(UserLevel, user_level_id)
        if user_level is None:
            log.warning("User level id=%d not found for update.", user_level_id)
            return None
        for key, value in payload.model_dump(exclude_none=True).items():
            setattr(user_level, key, value)
        await self.db.flush()
        await self.db.refresh(user_level)
        log.info("Updated user level id=%d", user_level_id)
        return user_level

    async def delete_user_level(self, user_level_id: int) -> bool:
        user_level = await self.db.get(UserLevel, user_level_id)
        if user_level is None:
            log.warning("User level id=%d not found for deletion.", user_level_id)
            return False
        await self.db.delete(user_level)
        await self.db.flush()
        log.info("Deleted user level id=%d", user_level_id)
        return True

    async def upsert_user_level_progress(self, payload: UserLevelUpsert) -> UserLevel:
        """
        Inserts the (user_id, level_id) row or overwrites its flags.
        Flags left out are written as False, like on insert.

        Returns:
            UserLevel: The stored row.

        Raises:
            ConflictError: the database rejected the row (unknown user or level,
                or the same pair inserted concurrently).
        """
        unlocked = bool(payload.unlocked)
        completed = bool(payload.completed)
        user_level = await self.get_user_level(payload.user_id, payload.level_id)
        if user_level is None:
            log.debug("No progress for user=%d level=%d yet, inserting.", payload.user_id, payload.level_id)
            user_level = UserLevel(
                user_id=payload.user_id,
                level_id=payload.level_id,
                unlocked=unlocked,
                completed=completed,
            )
            self.db.add(user_level)
        else:
            user_level.unlocked = unlocked
            user_level.completed = completed
        try:
            await self.db.flush()
        except IntegrityError as exc:
            log.warning("Integrity error while upserting user level: %s", exc.orig)
            raise ConflictError("User level conflicts with existing data") from exc
        await self.db.refresh(user_level)
        log.info(
            "Upserted user level id=%d (user=%d, level=%d, unlocked=%s, completed=%s)",
            user_level.user_level_id, user_level.user_id, user_level.level_id,
            user_level.unlocked, user_level.completed,
        )
        return user_level
