from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from typing import AsyncIterator
import logging

from app.core.config import Settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine (and its connection pool) for the configured database"""
    kwargs = {"pool_pre_ping": True}
    # SQLite uses a single-connection style pool without size limits
    if not settings.DATABASE_URL.startswith("sqlite"):
        kwargs["pool_size"] = settings.DATABASE_POOL_SIZE
        kwargs["max_overflow"] = settings.DATABASE_MAX_OVERFLOW
    return create_async_engine(settings.DATABASE_URL, echo=settings.DEBUG, **kwargs)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_db(engine: AsyncEngine) -> None:
    """Create tables if they do not exist"""
    # Register models on Base.metadata
    from app.models import User, Reading  # noqa: F401

    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ready")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """Dependency yielding a session bound to the application's engine"""
    session_factory = request.app.state.session_factory
    async with session_factory() as session:
        yield session
