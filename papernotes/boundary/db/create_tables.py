"""
Database table creation script.

Creates the arxiv_papers table from the ORM metadata. The API lifespan runs
this on startup; it can also be run by hand.

Dependencies: sqlalchemy, papernotes.configs
System role: Database schema initialization

Usage:
    python -m papernotes.boundary.db.create_tables
"""

import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from papernotes.boundary.db.base import Base
from papernotes.boundary.db.connection import get_async_engine
from papernotes.observability.logger import configure_logging

# Import all models to register them with Base.metadata
from papernotes.boundary.db.models.paper_model import PaperModel  # noqa: F401

logger = logging.getLogger(__name__)


async def create_all_tables(engine: AsyncEngine | None = None) -> None:
    """
    Create all tables registered with Base.metadata.

    Idempotent: existing tables are left unchanged.

    Args:
        engine: Engine to run against (created from settings if None)

    Raises:
        SQLAlchemyError: Connection or DDL failure
    """
    owns_engine = engine is None
    engine = engine or get_async_engine()
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    finally:
        if owns_engine:
            await engine.dispose()
    logger.info("Database tables ready", extra={"tables": sorted(Base.metadata.tables)})


async def drop_all_tables(engine: AsyncEngine | None = None) -> None:
    """
    Drop all tables and their data.

    WARNING: Irreversible data loss. Only use in development environments.

    Args:
        engine: Engine to run against (created from settings if None)
    """
    owns_engine = engine is None
    engine = engine or get_async_engine()
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
    finally:
        if owns_engine:
            await engine.dispose()
    logger.warning("Database tables dropped")


if __name__ == "__main__":
    configure_logging()
    asyncio.run(create_all_tables())
