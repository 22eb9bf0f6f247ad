"""
Album API - Database Engine and Session Management
===================================================

What:  Async SQLAlchemy engine and session factory construction, plus the
       declarative Base for ORM models.
How:   Builders take Settings explicitly and return new objects; nothing is
       created at import time. The lifespan in main.py owns the engine it
       builds and disposes it on shutdown.
Who:   main.py (production wiring) and tests (which build an in-memory
       aiosqlite engine instead).

Connection Pooling Strategy (PostgreSQL):
    pool_size=20:      Persistent connections for normal load
    max_overflow=10:   Temporary connections for traffic spikes (total max = 30)
    pool_pre_ping:     Validates connections before use (catches stale connections)
    pool_recycle=3600: Recycles connections every hour
"""

import logging

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from album_api.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object; tests call `Base.metadata.create_all`
    on it to build the albums table.
    """
    pass


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """
    Build the async engine for the configured database.

    Pool sizing options only apply to pooled drivers; for sqlite URLs the
    dialect's default pool is kept.
    """
    url = settings.database_url_resolved
    options = {
        "pool_pre_ping": settings.db_pool_pre_ping,
        # Echo SQL in DEBUG mode only
        "echo": settings.log_level == "DEBUG",
    }
    if make_url(url).get_backend_name() != "sqlite":
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_recycle=3600,
        )
    engine = create_async_engine(url, **options)
    logger.debug("Engine created for %s", make_url(url).render_as_string(hide_password=True))
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    What: Session factory bound to `engine`.
    How:  expire_on_commit=False so ORM rows stay readable after commit, when
          the store converts them to response schemas.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def dispose_engine(engine: AsyncEngine) -> None:
    """Closes all pooled connections (application shutdown)."""
    await engine.dispose()
