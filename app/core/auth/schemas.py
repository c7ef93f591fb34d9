# app/core/auth/schemas.py

from __future__ import annotations

from pydantic import BaseModel, Field

from app.core.ids import MAX_ID, MIN_ID


class TokenData(BaseModel):
    """
    Claims carried by an access token.
    `sub` holds the user id, `role` decides access to admin routes.
    """
    user_id: int = Field(..., ge=MIN_ID, le=MAX_ID, description="User ID from the 'sub' claim")
    role: str = Field("user", description="User role ('user' or 'admin')")

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
