"""Initial tables: users, levels, badges, user_badges, user_levels

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-17 12:00:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "0001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("user_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("full_name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password", sa.String(length=255), nullable=False, comment="Password hash"),
        sa.Column("role", sa.String(length=50), nullable=False, server_default="user"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "levels",
        sa.Column("level_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("difficulty_order", sa.Integer(), nullable=False),
    )

    op.create_table(
        "badges",
        sa.Column("badge_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("level_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("icon_url", sa.String(length=255), nullable=True),
        sa.ForeignKeyConstraint(["level_id"], ["levels.level_id"], ondelete="CASCADE", name="fk_badges_level_id"),
    )
    op.create_index("ix_badges_level_id", "badges", ["level_id"])

    op.create_table(
        "user_badges",
        sa.Column("user_badge_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("badge_id", sa.Integer(), nullable=False),
        sa.Column("earned_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(["user_id"], ["users.user_id"], ondelete="CASCADE", name="fk_user_badges_user_id"),
        sa.ForeignKeyConstraint(["badge_id"], ["badges.badge_id"], ondelete="CASCADE", name="fk_user_badges_badge_id"),
        sa.UniqueConstraint("user_id", "badge_id", name="uq_user_badges_user_badge"),
    )
    op.create_index("ix_user_badges_user_id", "user_badges", ["user_id"])
    op.create_index("ix_user_badges_badge_id", "user_badges", ["badge_id"])

    op.create_table(
        "user_levels",
        sa.Column("user_level_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("level_id", sa.Integer(), nullable=False),
        sa.Column("unlocked", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.ForeignKeyConstraint(["user_id"], ["users.user_id"], ondelete="CASCADE", name="fk_user_levels_user_id"),
        sa.ForeignKeyConstraint(["level_id"], ["levels.level_id"], ondelete="CASCADE", name="fk_user_levels_level_id"),
        sa.UniqueConstraint("user_id", "level_id", name="uq_user_levels_user_level"),
    )
    op.create_index("ix_user_levels_user_id", "user_levels", ["user_id"])
    op.create_index("ix_user_levels_level_id", "user_levels", ["level_id"])


def downgrade() -> None:
    op.drop_table("user_levels")
    op.drop_table("user_badges")
    op.drop_table("badges")
    op.drop_table("levels")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
