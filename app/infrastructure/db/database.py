"""
Database Configuration
Async SQLAlchemy engine and session factory
"""

import os
from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from app.config import settings


class Base(DeclarativeBase):
    """Base class for all database models"""
    pass


def to_async_url(url: str) -> str:
    """Map postgres:// and postgresql:// URLs onto the asyncpg driver"""
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql://", 1)
    if url.startswith("postgresql://"):
        url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


def to_sync_url(url: str) -> str:
    """Sync driver URL for Alembic (psycopg2 / pysqlite)"""
    url = to_async_url(url)
    return url.replace("+asyncpg", "+psycopg2", 1).replace("+aiosqlite", "", 1)


DATABASE_URL = to_async_url(settings.DATABASE_URL)

# Alembic runs with a sync driver and only needs Base.metadata
ALEMBIC_MODE = os.getenv("ALEMBIC_MODE") == "1"

engine: Optional[AsyncEngine] = None
async_session_factory: Optional[async_sessionmaker] = None

if not ALEMBIC_MODE:
    engine = create_async_engine(DATABASE_URL, echo=settings.DEBUG, pool_pre_ping=True)
    async_session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Request-scoped session; commits on success, rolls back on error
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def get_session_factory() -> async_sessionmaker:
    """
    Session factory for batch work (one session per life area)
    """
    return async_session_factory


async def init_db():
    """Create tables when AUTO_CREATE_TABLES is set (migrations otherwise)"""
    if not settings.AUTO_CREATE_TABLES:
        return
    async with engine.begin() as conn:
        from app.infrastructure.db import models  # noqa: F401 registers tables

        await conn.run_sync(Base.metadata.create_all)


async def close_db():
    await engine.dispose()
