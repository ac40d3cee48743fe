"""FastAPI application factory for the project service.

This module provides the application factory that creates and configures a
FastAPI application with:
- CORS middleware for cross-origin requests
- Request logging middleware with correlation IDs
- Business exception translation
- Database, task-service and notification lifecycle management
- Health and project endpoints

Example usage:
    >>> from project_service.config import ProjectServiceConfig
    >>> from project_service.web.app import create_app
    >>>
    >>> app = create_app(ProjectServiceConfig())
    >>>
    >>> import uvicorn
    >>> uvicorn.run(app, host="0.0.0.0", port=8081)
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from project_service import __version__
from project_service.config import ProjectServiceConfig
from project_service.database.connection import get_engine, get_session_factory
from project_service.database.store import SqlProjectStore
from project_service.identity.token import TokenVerifier
from project_service.integrations.task_service import create_task_collaborator
from project_service.logging import get_logger
from project_service.services.notifications import BackgroundNotifier
from project_service.web.errors import register_exception_handlers
from project_service.web.middleware import RequestLoggingMiddleware
from project_service.web.routes.health import create_health_router
from project_service.web.routes.projects import create_projects_router

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

logger = get_logger(__name__)

APP_VERSION = __version__

# Upper bound on waiting for task notifications at shutdown
SHUTDOWN_DRAIN_SECONDS = 10.0


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifecycle.

    On startup, creates the database engine, session factory and project
    store. On shutdown, waits for in-flight task notifications, closes the
    task service client and disposes of the engine.

    Args:
        app: FastAPI application instance

    Yields:
        None after startup, cleans up on context exit
    """
    config: ProjectServiceConfig = app.state.config

    logger.info("app_startup_begin", host=config.web.host, port=config.web.port)

    engine: AsyncEngine = get_engine(config.database)
    session_factory: async_sessionmaker[AsyncSession] = get_session_factory(engine)

    app.state.engine = engine
    app.state.session_factory = session_factory
    app.state.project_store = SqlProjectStore(session_factory)

    logger.info(
        "database_pool_initialized",
        pool_size=config.database.pool_size,
        max_overflow=config.database.max_overflow,
    )

    yield

    logger.info("app_shutdown_begin", pending_notifications=app.state.notifier.pending_count)
    await app.state.notifier.drain(timeout=SHUTDOWN_DRAIN_SECONDS)
    await app.state.task_collaborator.close()
    await engine.dispose()
    logger.info("database_pool_disposed")


def create_app(config: ProjectServiceConfig | None = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Collaborators that need no I/O to construct (token verifier, task
    service client, notifier) are created here; the database-backed store
    is created by the lifespan handler.

    Args:
        config: Optional ProjectServiceConfig. If None, creates default config.

    Returns:
        Configured FastAPI application instance.
    """
    if config is None:
        config = ProjectServiceConfig()

    app = FastAPI(
        title="Project Service",
        version=APP_VERSION,
        description="Project lifecycle management with role-based access control",
        lifespan=lifespan,
    )

    app.state.config = config
    app.state.token_verifier = TokenVerifier(config.identity)
    app.state.task_collaborator = create_task_collaborator(config.task_service)
    app.state.notifier = BackgroundNotifier()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.web.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    register_exception_handlers(app)

    app.include_router(create_health_router())
    app.include_router(create_projects_router())

    logger.info(
        "app_created",
        cors_origins=config.web.cors_origins,
        task_service_enabled=config.task_service.enabled,
        version=APP_VERSION,
    )

    return app
