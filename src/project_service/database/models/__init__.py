"""SQLAlchemy ORM models for the project service.

All models use SQLAlchemy 2.0 declarative style with Mapped[] type annotations.
"""

from project_service.database.models.base import Base, TimestampMixin
from project_service.database.models.project import Project, ProjectStatus

__all__ = [
    "Base",
    "TimestampMixin",
    "Project",
    "ProjectStatus",
]
