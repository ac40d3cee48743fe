"""Pytest fixtures for integration tests.

Provides async database fixtures for testing query functions and the SQL
project store against an in-memory SQLite database. Production runs on
PostgreSQL; the queries used here are portable.
"""

from __future__ import annotations

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from project_service.config import DatabaseConfig, ProjectServiceConfig, TaskServiceConfig
from project_service.database.connection import get_engine, get_session_factory
from project_service.database.models.base import Base
from project_service.database.store import SqlProjectStore
from project_service.web.app import create_app


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create an in-memory SQLite async engine with all tables.

    Yields:
        Configured AsyncEngine instance using in-memory SQLite.
    """
    test_engine = get_engine(DatabaseConfig(url="sqlite+aiosqlite:///:memory:"))

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield test_engine

    await test_engine.dispose()


@pytest_asyncio.fixture
async def session_factory(
    engine: AsyncEngine,
) -> async_sessionmaker[AsyncSession]:
    """Create the production session factory bound to the test engine."""
    return get_session_factory(engine)


@pytest_asyncio.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Create a new async database session for each test.

    Yields:
        AsyncSession instance for the test.
    """
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def sql_store(
    session_factory: async_sessionmaker[AsyncSession],
) -> SqlProjectStore:
    """ProjectStore backed by the test database."""
    return SqlProjectStore(session_factory)


@pytest.fixture
def app(identity_config, store, task_collaborator) -> FastAPI:
    """Application wired to the in-memory store and recording task collaborator.

    ASGITransport does not run the lifespan, so the store is placed on
    app.state directly.
    """
    config = ProjectServiceConfig(
        identity=identity_config,
        task_service=TaskServiceConfig(enabled=False),
    )
    application = create_app(config)
    application.state.project_store = store
    application.state.task_collaborator = _TokenAwareCollaborator(task_collaborator)
    return application


@pytest_asyncio.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client for testing the FastAPI app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


class _TokenAwareCollaborator:
    """Wraps a recording collaborator with the app-level ``with_token``/``close`` API."""

    def __init__(self, inner) -> None:
        self.inner = inner
        self.tokens: list[str | None] = []

    def with_token(self, bearer_token: str | None):
        self.tokens.append(bearer_token)
        return self.inner

    async def close(self) -> None:
        return None
