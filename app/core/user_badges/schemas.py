# app/core/user_badges/schemas.py

from __future__ import annotations

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from app.core.ids import MAX_ID, MIN_ID


class UpdateUserBadge(BaseModel):
    """
    Body for creating or replacing a user badge.

    `earned_at` is passed through as given (string or datetime); the service
    turns it into a timestamp. Left out, the database stamps the current time.
    """
    user_id: int = Field(..., ge=MIN_ID, le=MAX_ID, description="User id", examples=[1])
    badge_id: int = Field(..., ge=MIN_ID, le=MAX_ID, description="Badge id", examples=[2])
    earned_at: Optional[Union[datetime, str]] = Field(None, description="Optional earned_at timestamp")


class CreateUserBadge(UpdateUserBadge):
    pass


class UserBadgeQuery(BaseModel):
    user_id: Optional[int] = Field(None, ge=MIN_ID, le=MAX_ID, description="Filter by user id", examples=[8])
    badge_id: Optional[int] = Field(None, ge=MIN_ID, le=MAX_ID, description="Filter by badge id", examples=[3])


class UserBadgeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_badge_id: int
    user_id: int
    badge_id: int
    earned_at: datetime
