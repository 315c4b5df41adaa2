"""
Database configuration and session management.
"""

import os
from typing import AsyncGenerator

from sqlalchemy.orm import declarative_base
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from .config import settings

if os.getenv("TESTING") == "1":
    # SQLite does not accept pool sizing arguments
    async_engine = create_async_engine(
        settings.DATABASE_URL,
        echo=settings.DEBUG,
        future=True
    )
else:
    async_engine = create_async_engine(
        settings.DATABASE_URL,
        echo=settings.DEBUG,
        future=True,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20
    )

AsyncSessionLocal = async_sessionmaker(
    async_engine,
    class_=AsyncSession,
    expire_on_commit=False
)

Base = declarative_base()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session"""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


async def create_tables(engine=None):
    """Create all database tables"""
    # Register the mapped classes on Base.metadata
    from .. import models  # noqa: F401

    async with (engine or async_engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_tables(engine=None):
    """Drop all database tables"""
    from .. import models  # noqa: F401

    async with (engine or async_engine).begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
