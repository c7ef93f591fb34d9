import os
import sys

# Project root on sys.path so `import app` works without an install
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

# Test environment: must be set before app.config is imported
os.environ["ENVIRONMENT"] = "test"
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from app.core.auth.security import create_access_token  # noqa: E402
from app.core.levels.models import Level  # noqa: E402
from app.core.users.models import User  # noqa: E402
from app.db.base import async_session_context, create_db_and_tables, drop_db_and_tables  # noqa: E402


@pytest_asyncio.fixture(scope="function", autouse=True)
async def setup_db():
    await create_db_and_tables()
    async with async_session_context() as session:
        session.add_all([
            User(user_id=1, full_name="Ada Admin", email="admin@simaid.test", password="x", role="admin"),
            User(user_id=2, full_name="Sam Student", email="sam@simaid.test", password="x"),
            User(user_id=3, full_name="Kim Student", email="kim@simaid.test", password="x"),
            Level(level_id=1, title="Basics", difficulty_order=1),
            Level(level_id=2, title="Intermediate", difficulty_order=2),
            Level(level_id=3, title="Advanced", difficulty_order=3),
        ])
    yield
    await drop_db_and_tables()


@pytest_asyncio.fixture
async def db_session() -> AsyncSession:
    async with async_session_context() as session:
        yield session


@pytest_asyncio.fixture
async def client():
    from app.main import app

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {create_access_token(1, role='admin')}"}


@pytest.fixture
def user_headers():
    return {"Authorization": f"Bearer {create_access_token(2)}"}
