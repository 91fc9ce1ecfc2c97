"""
Database connection management.

Provides the async SQLAlchemy engine and session factory used by the
relational write.

Dependencies: sqlalchemy, papernotes.configs
System role: Database connection lifecycle management
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from papernotes.configs import get_settings
from papernotes.configs.database import DatabaseSettings


def get_async_engine(db_config: DatabaseSettings | None = None) -> AsyncEngine:
    """
    Create async SQLAlchemy engine with connection pooling.

    pool_pre_ping=True verifies connections before use to detect
    stale/broken connections early.

    Args:
        db_config: Database settings (uses application settings if None)

    Returns:
        AsyncEngine: Configured async SQLAlchemy engine

    Raises:
        ArgumentError: If database URL is invalid or engine creation fails

    Usage:
        engine = get_async_engine()
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
    """
    db_config = db_config or get_settings().database

    return create_async_engine(
        db_config.async_database_url,
        echo=db_config.echo_sql,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,
    )


def get_async_session_factory(
    engine: AsyncEngine | None = None,
) -> async_sessionmaker[AsyncSession]:
    """
    Create async session factory for database operations.

    Sessions use autoflush=False for explicit transaction control and
    expire_on_commit=False so returned rows stay readable after commit.

    Args:
        engine: Engine to bind (created from settings if None)

    Returns:
        async_sessionmaker: Async session factory

    Usage:
        SessionFactory = get_async_session_factory()
        async with SessionFactory() as session:
            session.add(obj)
            await session.commit()
    """
    return async_sessionmaker(
        bind=engine or get_async_engine(),
        autoflush=False,
        expire_on_commit=False,
    )

