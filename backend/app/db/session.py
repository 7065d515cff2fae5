"""Async Session Factory: DB sessions for scripts and fixtures outside FastAPI.

Invariants:
    - Engine is owned by the caller (dispose it when done)
    - Used by the demo seeder; the API uses DatabaseSessionManager instead
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine,
)


def create_session_factory(
    database_url: str,
) -> tuple[AsyncEngine, async_sessionmaker[AsyncSession]]:
    """Create an engine and async session factory for the given database URL."""
    engine = create_async_engine(database_url, echo=False)
    factory = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False,
    )
    return engine, factory
