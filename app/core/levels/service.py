# app/core/levels/service.py

from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Level
from .schemas import CreateLevel, UpdateLevel

log = logging.getLogger(__name__)


class LevelsService:
    """
    Async service over the level catalogue.
    Uses an injected AsyncSession.
    """

    def __init__(self, db_session: AsyncSession) -> None:
        self.db: AsyncSession = db_session

    async def list_levels(self) -> Sequence[Level]:
        """Levels in play order (difficulty_order, then id)."""
        stmt = select(Level).order_by(Level.difficulty_order, Level.level_id)
        result = await self.db.scalars(stmt)
        return result.all()

    async def get_level(self, level_id: int) -> Level | None:
        log.debug("Getting level id=%d", level_id)
        return await self.db.get(Level, level_id)

    async def create_level(self, payload: CreateLevel) -> Level:
        level = Level(**payload.model_dump())
        self.db.add(level)
        await self.db.flush()
        await self.db.refresh(level)
        log.info("Created level id=%d title='%s'", level.level_id, level.title)
        return level

    async def update_level(self, level_id: int, payload: UpdateLevel) -> Level | None:
        """
        Replaces title, description and difficulty_order of a level.

        Returns:
            Level | None: The updated level, or None if the id is unknown.
        """
        level = await self.db.get(Level, level_id)
        if level is None:
            log.warning("Level id=%d not found for update.", level_id)
            return None
        for key, value in payload.model_dump().items():
            setattr(level, key, value)
        await self.db.flush()
        await self.db.refresh(level)
        log.info("Updated level id=%d", level_id)
        return level

    async def delete_level(self, level_id: int) -> bool:
        level = await self.db.get(Level, level_id)
        if level is None:
            log.warning("Level id=%d not found for deletion.", level_id)
            return False
        await self.db.delete(level)
        await self.db.flush()
        log.info("Deleted level id=%d", level_id)
        return True
