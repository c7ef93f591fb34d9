# app/db/base.py

from __future__ import annotations

import contextlib
import logging
from typing import AsyncGenerator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from app.config import settings

log = logging.getLogger(__name__)


# --- Declarative Base ---
class Base(DeclarativeBase):
    pass


# --- Engine & Session factory ---
engine: AsyncEngine
if settings.ENVIRONMENT == "test":
    # One shared in-memory connection, otherwise every checkout sees an empty DB
    log.info("Using in-memory SQLite database (aiosqlite) for tests.")
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
else:
    log.info("Using async database: %s", settings.DATABASE_URL.split("@")[-1])
    if not settings.DATABASE_URL.startswith("postgresql+asyncpg://"):
        log.warning("DATABASE_URL does not start with 'postgresql+asyncpg://'.")
        raise ValueError("DATABASE_URL must use 'asyncpg' driver for async operations.")
    engine = create_async_engine(
        settings.DATABASE_URL, echo=(settings.ENVIRONMENT == "dev"), pool_pre_ping=True
    )

async_session_factory = async_sessionmaker(
    bind=engine, class_=AsyncSession, expire_on_commit=False
)


async def get_async_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency: yields an async session, commits when the request
    handler finished cleanly and rolls back otherwise.
    """
    session = async_session_factory()
    session_id_for_log = id(session)
    log.debug("Session %s created, yielding...", session_id_for_log)
    try:
        yield session
        await session.commit()
        log.debug("Session %s committed.", session_id_for_log)
    except SQLAlchemyError:
        log.exception("SQLAlchemyError in session %s, rolling back...", session_id_for_log)
        await session.rollback()
        raise
    except Exception:
        log.debug("Exception in session %s scope, rolling back...", session_id_for_log)
        await session.rollback()
        raise
    finally:
        await session.close()


@contextlib.asynccontextmanager
async def async_session_context() -> AsyncGenerator[AsyncSession, None]:
    session: AsyncSession = async_session_factory()
    log.debug("Entering async session context %s", id(session))
    try:
        yield session
        await session.commit()
    except Exception:
        log.exception("Rolling back session %s from context due to exception", id(session))
        await session.rollback()
        raise
    finally:
        await session.close()


def _import_models() -> None:
    # Tables are registered on Base.metadata only once their modules are imported
    import app.core.users.models  # noqa: F401
    import app.core.levels.models  # noqa: F401
    import app.core.badges.models  # noqa: F401
    import app.core.user_badges.models  # noqa: F401
    import app.core.user_levels.models  # noqa: F401


async def create_db_and_tables() -> None:
    _import_models()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    log.debug("All tables created.")


async def drop_db_and_tables() -> None:
    _import_models()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()
    log.debug("All tables dropped, engine disposed.")


__all__ = [
    "Base", "engine", "async_session_factory", "AsyncSession",
    "get_async_db_session", "async_session_context",
    "create_db_and_tables", "drop_db_and_tables",
]
