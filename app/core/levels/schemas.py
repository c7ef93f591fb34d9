# app/core/levels/schemas.py

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.core.ids import MAX_ID, MIN_ID


class LevelPayload(BaseModel):
    title: str = Field(..., min_length=1, max_length=100, description="Level title", examples=["Beginner"])
    description: Optional[str] = Field(None, description="Optional description", examples=["Introductory level"])
    difficulty_order: int = Field(
        ..., ge=MIN_ID, le=MAX_ID, description="Position in the level sequence", examples=[1]
    )


class CreateLevel(LevelPayload):
    pass


class UpdateLevel(LevelPayload):
    """PUT body: the whole level is replaced; a missing description clears it."""


class LevelOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    level_id: int
    title: str
    description: Optional[str] = None
    difficulty_order: int
