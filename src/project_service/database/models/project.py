"""Project model for the project service.

Defines the Project table and ProjectStatus enum. Projects are never
physically removed: deletion sets ``is_deleted`` and rewrites the project
code so the original code can be reused.
"""

from __future__ import annotations

import enum
from datetime import date

from sqlalchemy import Boolean, Date, Enum, Text, false
from sqlalchemy.orm import Mapped, mapped_column

from project_service.database.models.base import Base, TimestampMixin


class ProjectStatus(enum.Enum):
    """Lifecycle status for a project.

    States:
        open: Initial state set on creation.
        in_progress: Work has started (set upstream, never by this service).
        completed: Terminal state; the project can no longer be worked on.
    """

    open = "open"
    in_progress = "in_progress"
    completed = "completed"


class Project(TimestampMixin, Base):
    """A project owned by an assigned manager.

    Attributes:
        id: UUID primary key (from TimestampMixin).
        project_code: Unique business key supplied on creation.
        project_name: Human-readable project name.
        assigned_manager: Username of the managing user.
        start_date: Planned start date.
        end_date: Planned end date.
        project_detail: Free-form description.
        project_status: Current lifecycle status.
        is_deleted: Soft-delete flag.
        created_at: Row creation timestamp (from TimestampMixin).
        updated_at: Last modification timestamp (from TimestampMixin).
    """

    __tablename__ = "projects"

    project_code: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    project_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    assigned_manager: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    project_detail: Mapped[str | None] = mapped_column(Text, nullable=True)
    project_status: Mapped[ProjectStatus] = mapped_column(
        Enum(ProjectStatus, name="project_status"),
        default=ProjectStatus.open,
        nullable=False,
    )
    is_deleted: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
        server_default=false(),
    )

    def __repr__(self) -> str:
        return f"<Project {self.project_code} ({self.project_status.value if self.project_status else None})>"
