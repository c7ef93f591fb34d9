# app/core/user_levels/schemas.py

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.core.ids import MAX_ID, MIN_ID


class CreateUserLevel(BaseModel):
    user_id: int = Field(..., ge=MIN_ID, le=MAX_ID, description="User id", examples=[1])
    level_id: int = Field(..., ge=MIN_ID, le=MAX_ID, description="Level id", examples=[2])
    unlocked: Optional[bool] = Field(None, description="Whether level is unlocked (default false)")
    completed: Optional[bool] = Field(None, description="Whether level is completed (default false)")


class UserLevelUpsert(CreateUserLevel):
    """Insert-or-update keyed by (user_id, level_id)."""


class UpdateUserLevel(BaseModel):
    unlocked: Optional[bool] = Field(None, description="Whether level is unlocked")
    completed: Optional[bool] = Field(None, description="Whether level is completed")


class UserLevelQuery(BaseModel):
    """No filter means no constraint on that column."""
    user_id: Optional[int] = Field(None, ge=MIN_ID, le=MAX_ID, description="Filter by user id", examples=[1])
    level_id: Optional[int] = Field(None, ge=MIN_ID, le=MAX_ID, description="Filter by level id", examples=[2])


class UserLevelIdParam(BaseModel):
    id: int = Field(..., ge=MIN_ID, le=MAX_ID, description="User level identifier", examples=[1])


class UserLevelOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_level_id: int
    user_id: int
    level_id: int
    unlocked: bool
    completed: bool
