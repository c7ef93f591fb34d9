# app/core/badges/schemas.py

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.core.ids import MAX_ID, MIN_ID


class BadgePayload(BaseModel):
    level_id: int = Field(..., ge=MIN_ID, le=MAX_ID, description="Level id associated with badge", examples=[2])
    name: str = Field(..., min_length=1, max_length=255, description="Badge name", examples=["Explorer"])
    description: str = Field(..., description="Badge description", examples=["Completed level 2"])
    icon_url: Optional[str] = Field(None, description="Optional icon URL")


class CreateBadge(BadgePayload):
    pass


class UpdateBadge(BadgePayload):
    """PUT body: the whole badge is replaced."""


class BadgeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    badge_id: int
    level_id: int
    name: str
    description: str
    icon_url: Optional[str] = None


class BadgeQuery(BaseModel):
    level_id: Optional[int] = Field(None, ge=MIN_ID, le=MAX_ID, description="Filter by level id", examples=[2])
