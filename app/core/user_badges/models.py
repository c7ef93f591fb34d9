# app/core/user_badges/models.py
from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from app.db.base import Base


class UserBadge(Base):
    """User U earned badge B at time T."""

    __tablename__ = "user_badges"
    __table_args__ = (UniqueConstraint("user_id", "badge_id", name="uq_user_badges_user_badge"),)

    user_badge_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.user_id", ondelete="CASCADE", name="fk_user_badges_user_id"),
        nullable=False, index=True,
    )
    badge_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("badges.badge_id", ondelete="CASCADE", name="fk_user_badges_badge_id"),
        nullable=False, index=True,
    )
    earned_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self) -> str:  # pragma: no cover
        return f"<UserBadge id={self.user_badge_id} user={self.user_id} badge={self.badge_id}>"
