"""
Database configuration and session management using SQLAlchemy (asyncio).
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

# Base class for models
Base = declarative_base()


def create_engine_for_url(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create the async engine, e.g. for ``sqlite+aiosqlite:///./eink_hub.db``."""
    return create_async_engine(
        database_url,
        pool_pre_ping=True,  # Verify connections before using
        echo=echo,
    )


def create_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory; one session is opened per repository operation."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


async def init_db(engine: AsyncEngine) -> None:
    """
    Initialize the database by creating all tables.

    Called on application startup. For managed deployments prefer the
    Alembic revisions under alembic/versions.
    """
    # Register the mapped tables on Base.metadata
    from eink_hub import db_models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
