"""Database layer for the project service.

Public API:
    get_engine: Create an AsyncEngine from DatabaseConfig.
    get_session_factory: Create an async_sessionmaker from an engine.
    SqlProjectStore: ProjectStore implementation over a session factory.
    Base: SQLAlchemy declarative base for all models.
"""

from project_service.database.connection import get_engine, get_session_factory
from project_service.database.models import Base, Project, ProjectStatus, TimestampMixin
from project_service.database.store import SqlProjectStore

__all__ = [
    "get_engine",
    "get_session_factory",
    "SqlProjectStore",
    "Base",
    "TimestampMixin",
    "Project",
    "ProjectStatus",
]
