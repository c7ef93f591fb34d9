# app/core/badges/service.py

from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.ids import MAX_ID, MIN_ID

from .models import Badge
from .schemas import CreateBadge, UpdateBadge

log = logging.getLogger(__name__)


class BadgesService:
    """
    Async service over the badge catalogue.
    Gets its AsyncSession from the caller (FastAPI dependency or GraphQL context).
    """

    def __init__(self, db_session: AsyncSession) -> None:
        self.db: AsyncSession = db_session

    async def list_badges(self) -> Sequence[Badge]:
        log.debug("Listing all badges")
        result = await self.db.scalars(select(Badge).order_by(Badge.badge_id))
        return result.all()

    async def get_badge(self, badge_id: int) -> Badge | None:
        log.debug("Getting badge id=%d", badge_id)
        if not MIN_ID <= badge_id <= MAX_ID:
            return None
        return await self.db.get(Badge, badge_id)

    async def list_badges_by_level(self, level_id: int) -> Sequence[Badge]:
        log.debug("Listing badges for level id=%d", level_id)
        stmt = select(Badge).where(Badge.level_id == level_id).order_by(Badge.badge_id)
        result = await self.db.scalars(stmt)
        return result.all()

    async def create_badge(self, payload: CreateBadge) -> Badge:
        """
        Creates a badge.

        Args:
            payload (CreateBadge): Validated badge fields.

        Returns:
            Badge: The stored badge with its generated id.
        """
        badge = Badge(**payload.model_dump())
        self.db.add(badge)
        await self.db.flush()
        await self.db.refresh(badge)
        log.info("Created badge id=%d name='%s'", badge.badge_id, badge.name)
        return badge

    async def update_badge(self, badge_id: int, payload: UpdateBadge) -> Badge | None:
        """
        Replaces the fields of an existing badge.

        Returns:
            Badge | None: The updated badge, or None when no badge has this id.
        """
        badge = await self.db.get(Badge, badge_id)
        if badge is None:
            log.warning("Badge id=%d not found for update.", badge_id)
            return None
        for key, value in payload.model_dump(exclude_unset=True).items():
            setattr(badge, key, value)
        await self.db.flush()
        await self.db.refresh(badge)
        log.info("Updated badge id=%d", badge_id)
        return badge

    async def delete_badge(self, badge_id: int) -> bool:
        badge = await self.db.get(Badge, badge_id)
        if badge is None:
            log.warning("Badge id=%d not found for deletion.", badge_id)
            return False
        await self.db.delete(badge)
        await self.db.flush()
        log.info("Deleted badge id=%d", badge_id)
        return True
