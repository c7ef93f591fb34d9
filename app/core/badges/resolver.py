# app/core/badges/resolver.py

"""
Badge queries as seen by the GraphQL layer.

The resolver holds no session and no container wiring. It is handed an
object with `list_badges()` / `get_badge(id)` (normally a `BadgesService`)
and only adds the not-found translation on top of it.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol, Sequence

from app.core.errors import NotFoundError

log = logging.getLogger(__name__)

BADGE_NOT_FOUND = "Badge not found"


class BadgesCapability(Protocol):
    async def list_badges(self) -> Sequence[Any]: ...

    async def get_badge(self, badge_id: int) -> Optional[Any]: ...


class BadgesResolver:
    def __init__(self, badges: BadgesCapability) -> None:
        self.badges = badges

    async def list(self) -> Sequence[Any]:
        """All badges, in whatever order the capability returns them."""
        return await self.badges.list_badges()

    async def get(self, badge_id: int) -> Any:
        badge = await self.badges.get_badge(badge_id)
        if badge is None:
            log.debug("Badge id=%s requested but absent", badge_id)
            raise NotFoundError(BADGE_NOT_FOUND)
        return badge
