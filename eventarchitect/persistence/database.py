"""
Database engine and session management for the SQL storage backend.

Provides the declarative Base for ORM records plus helpers to build an
async engine/session factory and create tables.
"""

import logging
from pathlib import Path

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

logger = logging.getLogger(__name__)

# Declarative base for ORM records
Base = declarative_base()


def create_engine(database_url: str) -> AsyncEngine:
    """
    Create an async engine for `database_url`.

    For file-backed SQLite the parent directory is created first.
    """
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    return create_async_engine(database_url, echo=False)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_database(engine: AsyncEngine) -> None:
    """
    Create tables if they don't exist.

    Idempotent: only missing tables are created.
    """
    # Register ORM records with Base
    from eventarchitect.persistence import orm_models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database initialized")
