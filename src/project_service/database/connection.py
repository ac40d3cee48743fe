"""Engine and session factory for the project store.

SqlProjectStore opens a short-lived session for every store call and hands
the loaded Project rows back to ProjectManager after the session has
committed and closed. The session factory therefore keeps attributes loaded
across commit, and the engine checks pooled connections before reuse since
requests can be minutes apart.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from project_service.config import DatabaseConfig


def get_engine(config: DatabaseConfig) -> AsyncEngine:
    """Create the async engine for the configured database.

    Pool sizing applies to server databases only. SQLite (used for local
    runs and tests) gets SQLAlchemy's default pool.

    Args:
        config: Database section of the service configuration.

    Returns:
        AsyncEngine with pre-ping enabled.
    """
    engine_kwargs: dict[str, Any] = {"echo": config.echo, "pool_pre_ping": True}
    if make_url(config.url).get_backend_name() != "sqlite":
        engine_kwargs["pool_size"] = config.pool_size
        engine_kwargs["max_overflow"] = config.max_overflow

    return create_async_engine(config.url, **engine_kwargs)


def get_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the session factory used by SqlProjectStore.

    expire_on_commit is off: the store returns Project rows after its
    session has closed, and the manager reads and mutates them detached.
    """
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
