"""
Database connection management.

Provides the async SQLAlchemy engine, session factory and a development
bootstrap that creates the ORM tables.

Dependencies: sqlalchemy, studybuddy.configs
System role: Database connection lifecycle management
"""

import logging

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from studybuddy.boundary.db.base import Base
from studybuddy.configs.database import DatabaseSettings

# Import models so they register with Base.metadata
from studybuddy.boundary.db.models import DocumentChunkModel, DocumentModel  # noqa: F401

logger = logging.getLogger(__name__)


def get_connect_args(db_config: DatabaseSettings) -> dict:
    """
    Driver-level connect arguments.

    asyncpg gets ``command_timeout`` so a stalled statement raises instead
    of holding its session (and the caller's document lease) forever.
    Other drivers get nothing.
    """
    if db_config.async_database_url.startswith("postgresql+asyncpg"):
        return {"command_timeout": db_config.command_timeout}
    return {}


def get_async_engine(db_config: DatabaseSettings) -> AsyncEngine:
    """
    Create async SQLAlchemy engine with connection pooling.

    pool_pre_ping=True verifies connections before use to detect
    stale/broken connections early. pool_timeout bounds how long a caller
    waits for a connection; command_timeout bounds each statement.

    Args:
        db_config: Database settings

    Returns:
        AsyncEngine: Configured async SQLAlchemy engine

    Usage:
        engine = get_async_engine(settings.database)
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
    """
    return create_async_engine(
        db_config.async_database_url,
        echo=db_config.echo_sql,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,
        connect_args=get_connect_args(db_config),
    )


def get_async_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """
    Create async session factory for database operations.

    Returns async_sessionmaker bound to engine with autoflush=False for
    explicit transaction control, and expire_on_commit=False so returned
    models stay readable after their session closes.

    Args:
        engine: Async engine to bind

    Returns:
        async_sessionmaker: Async session factory

    Usage:
        SessionFactory = get_async_session_factory(engine)
        async with SessionFactory() as session:
            session.add(obj)
            await session.commit()
    """
    return async_sessionmaker(
        bind=engine,
        autoflush=False,
        expire_on_commit=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """
    Create all ORM tables that do not exist yet.

    Development and test bootstrap only; schema changes in deployed
    environments go through migrations.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(
        f"{__name__}:create_tables - Tables ensured",
        extra={"tables": sorted(Base.metadata.tables.keys())},
    )
