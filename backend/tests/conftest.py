"""Root conftest — async DB + FastAPI test client shared by every test package.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db overridden with DatabaseSessionManager.session() over the test engine,
      so database errors are translated exactly as in production
    - db_manager patched so the readiness probe sees the test engine

Design Decisions:
    - SQLite in-memory with StaticPool: one shared connection, so the schema created
      by create_all is visible to every session the app opens
    - Permission enforcement stays off unless a test opts in via `enforced`
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool

import parks_backoffice.infrastructure.database as db_module
import parks_backoffice.models  # noqa: F401
from parks_backoffice.config import Settings, get_settings
from parks_backoffice.db.base import Base
from parks_backoffice.infrastructure.database import get_db, DatabaseSessionManager
from parks_backoffice.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client; requests get sessions from a manager bound to the test engine."""
    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async def override_get_db():
        async with fake_manager.session() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def enforced(client):
    """Turn permission enforcement on for the routes under test."""
    app.dependency_overrides[get_settings] = lambda: Settings(enforce_permissions=True)
    yield
    app.dependency_overrides.pop(get_settings, None)
