"""Root conftest: shared environment, database and HTTP client fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB session
    - db_manager patched so readiness probes see the test engine
    - The shared cache_layer stays degraded unless a test asks for connected_cache

Design Decisions:
    - SQLite in-memory via aiosqlite: fast, no external dependency; Postgres-only
      features are not exercised by the status pipeline
    - ASGITransport does not run the lifespan, so tests never touch real Redis
"""

import os

# Never reach for real infrastructure from tests
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("REDIS_URL", "redis://127.0.0.1:1/0")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, async_sessionmaker, create_async_engine,
)

import app.infrastructure.database as db_module  # noqa: E402
from app.db.base import Base  # noqa: E402
from app.infrastructure.cache import cache_layer  # noqa: E402
from app.infrastructure.database import DatabaseSessionManager, get_db  # noqa: E402
from app.main import app  # noqa: E402
from tests.fakes import FakeRedis  # noqa: E402


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
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
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def connected_cache(monkeypatch, fake_redis):
    """Shared cache_layer wired to an in-memory Redis for the duration of a test."""
    monkeypatch.setattr(cache_layer, "_client", fake_redis)
    monkeypatch.setattr(cache_layer, "_connected", True)
    return cache_layer
