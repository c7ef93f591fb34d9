# app/core/user_badges/service.py

"""Service-layer for user badges."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Sequence

from sqlalchemy import desc, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ConflictError, RequestValidationFailed
from app.core.validation import FieldViolation

from .models import UserBadge
from .schemas import CreateUserBadge, UpdateUserBadge, UserBadgeQuery

log = logging.getLogger(__name__)


def parse_earned_at(value: datetime | str | None) -> datetime | None:
    """
    Turns the loosely typed `earned_at` input into a timestamp.

    Raises:
        RequestValidationFailed: if a string is not an ISO-8601 date/time.
    """
    if value is None or isinstance(value, datetime):
        return value
    raw = value.strip()
    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError as exc:
        raise RequestValidationFailed([
            FieldViolation(
                field="earned_at",
                rule="date",
                message="earned_at must be a valid ISO date",
                value=value,
            )
        ]) from exc


class UserBadgesService:
    """
    Async service for the user <-> badge association.
    Uses an injected AsyncSession.
    """

    def __init__(self, db_session: AsyncSession) -> None:
        self.db: AsyncSession = db_session

    # ------------------------------------------------------------------ #
    #                              Reads                                 #
    # ------------------------------------------------------------------ #

    async def list_user_badges(self, query: UserBadgeQuery | None = None) -> Sequence[UserBadge]:
        """
        Lists user badges, newest record first.

        Args:
            query (UserBadgeQuery | None): Optional user_id / badge_id filters.
        """
        stmt = select(UserBadge)
        if query is not None and query.user_id is not None:
            stmt = stmt.where(UserBadge.user_id == query.user_id)
        if query is not None and query.badge_id is not None:
            stmt = stmt.where(UserBadge.badge_id == query.badge_id)
        stmt = stmt.order_by(desc(UserBadge.user_badge_id))
        result = await self.db.scalars(stmt)
        rows = result.all()
        log.debug("Found %d user badges (filters=%s)", len(rows), query)
        return rows

    async def get_user_badge(self, user_badge_id: int) -> UserBadge | None:
        log.debug("Getting user badge id=%d", user_badge_id)
        return await self.db.get(UserBadge, user_badge_id)

    async def find_by_user_and_badge(self, user_id: int, badge_id: int) -> UserBadge | None:
        stmt = select(UserBadge).where(
            UserBadge.user_id == user_id,
            UserBadge.badge_id == badge_id,
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    # ------------------------------------------------------------------ #
    #                              Writes                                #
    # ------------------------------------------------------------------ #

    async def create_user_badge(self, payload: CreateUserBadge) -> UserBadge:
        """
        Records that a user earned a badge.

        Raises:
            ConflictError: the user already holds this badge.
            RequestValidationFailed: `earned_at` is not a valid date.
        """
        earned_at = parse_earned_at(payload.earned_at)
        if await self.find_by_user_and_badge(payload.user_id, payload.badge_id) is not None:
            raise ConflictError("User already has this badge")

        values: Dict[str, Any] = {"user_id": payload.user_id, "badge_id": payload.badge_id}
        if earned_at is not None:
            values["earned_at"] = earned_at
        user_badge = UserBadge(**values)
        self.db.add(user_badge)
        await self._flush_or_conflict()
        await self.db.refresh(user_badge)
        log.info(
            "Created user badge id=%d (user=%d, badge=%d)",
            user_badge.user_badge_id, user_badge.user_id, user_badge.badge_id,
        )
        return user_badge

    async def update_user_badge(self, user_badge_id: int, payload: UpdateUserBadge) -> UserBadge | None:
        """
        Replaces user_id / badge_id (and earned_at when given) of a record.

        Returns:
            UserBadge | None: The updated record, or None if the id is unknown.
        """
        user_badge = await self.db.get(UserBadge, user_badge_id)
        if user_badge is None:
            log.warning("User badge id=%d not found for update.", user_badge_id)
            return None

        earned_at = parse_earned_at(payload.earned_at)
        clash = await self.find_by_user_and_badge(payload.user_id, payload.badge_id)
        if clash is not None and clash.user_badge_id != user_badge_id:
            raise ConflictError("User already has this badge")

        user_badge.user_id = payload.user_id
        user_badge.badge_id = payload.badge_id
        if earned_at is not None:
            user_badge.earned_at = earned_at
        await self._flush_or_conflict()
        await self.db.refresh(user_badge)
        log.info("Updated user badge id=%d", user_badge_id)
        return user_badge

    async def delete_user_badge(self, user_badge_id: int) -> bool:
        user_badge = await self.db.get(UserBadge, user_badge_id)
        if user_badge is None:
            log.warning("User badge id=%d not found for deletion.", user_badge_id)
            return False
        await self.db.delete(user_badge)
        await self.db.flush()
        log.info("Deleted user badge id=%d", user_badge_id)
        return True

    async def _flush_or_conflict(self) -> None:
        # Unique pair or foreign key rejected by the database (e.g. a concurrent insert)
        try:
            await self.db.flush()
        except IntegrityError as exc:
            log.warning("Integrity error while saving user badge: %s", exc.orig)
            raise ConflictError("User badge conflicts with existing data") from exc
