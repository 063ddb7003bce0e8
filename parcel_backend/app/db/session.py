"""
Database session configuration.

This module handles database engine creation and session management
using SQLAlchemy with async support. The engine (and its connection pool)
is created once per process and shared by every request.
"""

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from parcel_backend.app.core.config import settings


def _engine_options(database_url: str) -> dict:
    options = {"echo": settings.db_echo, "future": True}
    # SQLite drivers use a static/singleton pool that rejects sizing arguments
    if not database_url.startswith("sqlite"):
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=True,
        )
    return options


# Create async engine
engine = create_async_engine(settings.database_url, **_engine_options(settings.database_url))

# Create async session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)

# Create declarative base for models
Base = declarative_base()


async def get_db():
    """
    FastAPI dependency for database sessions.

    Yields an async database session and ensures it's properly closed.
    Uncommitted work is rolled back when the session closes.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()
