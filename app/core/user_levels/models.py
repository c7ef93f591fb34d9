# app/core/user_levels/models.py
from __future__ import annotations

from sqlalchemy import Boolean, ForeignKey, Integer, UniqueConstraint, false
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class UserLevel(Base):
    __tablename__ = "user_levels"
    __table_args__ = (UniqueConstraint("user_id", "level_id", name="uq_user_levels_user_level"),)

    user_level_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.user_id", ondelete="CASCADE", name="fk_user_levels_user_id"),
        nullable=False, index=True,
    )
    level_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("levels.level_id", ondelete="CASCADE", name="fk_user_levels_level_id"),
        nullable=False, index=True,
    )
    unlocked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())

    def __repr__(self) -> str:  # pragma: no cover
        return (
            f"<UserLevel id={self.user_level_id} user={self.user_id} level={self.level_id} "
            f"unlocked={self.unlocked} completed={self.completed}>"
        )
