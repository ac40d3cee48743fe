"""Project query functions for the project service.

Provides async functions for looking up, listing, counting, and persisting
Project records using the SQLAlchemy 2.0 select() API.

Soft-deleted rows are invisible to every read in this module; they are only
reachable by primary key through the session itself.
"""

from __future__ import annotations

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from project_service.database.models.project import Project, ProjectStatus

logger = structlog.get_logger(__name__)


async def get_project_by_code(
    session: AsyncSession,
    project_code: str,
) -> Project | None:
    """Retrieve a non-deleted project by its business code.

    Args:
        session: Active async database session.
        project_code: Project code to look up.

    Returns:
        The Project instance if found, None otherwise.
    """
    stmt = select(Project).where(
        Project.project_code == project_code,
        Project.is_deleted.is_(False),
    )
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def list_projects(session: AsyncSession) -> list[Project]:
    """List all non-deleted projects, newest first.

    Args:
        session: Active async database session.

    Returns:
        List of Project instances.
    """
    stmt = (
        select(Project)
        .where(Project.is_deleted.is_(False))
        .order_by(Project.created_at.desc())
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def list_projects_by_manager(
    session: AsyncSession,
    assigned_manager: str,
) -> list[Project]:
    """List non-deleted projects managed by the given user.

    Args:
        session: Active async database session.
        assigned_manager: Username of the managing user.

    Returns:
        List of matching Project instances, newest first.
    """
    stmt = (
        select(Project)
        .where(
            Project.assigned_manager == assigned_manager,
            Project.is_deleted.is_(False),
        )
        .order_by(Project.created_at.desc())
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def count_open_projects_by_manager(
    session: AsyncSession,
    assigned_manager: str,
) -> int:
    """Count a manager's non-deleted projects that are not completed.

    Args:
        session: Active async database session.
        assigned_manager: Username of the managing user.

    Returns:
        Number of open or in-progress projects.
    """
    stmt = (
        select(func.count())
        .select_from(Project)
        .where(
            Project.assigned_manager == assigned_manager,
            Project.project_status != ProjectStatus.completed,
            Project.is_deleted.is_(False),
        )
    )
    result = await session.execute(stmt)
    return int(result.scalar_one())


async def save_project(
    session: AsyncSession,
    project: Project,
) -> Project:
    """Insert or update a project and commit.

    The given instance may be transient (new project, or a fresh instance
    carrying the id of an existing row) or detached from an earlier
    session; it is merged into this session either way. Attributes never
    set on a transient instance keep their stored values.

    Args:
        session: Active async database session.
        project: Project to persist.

    Returns:
        The persisted Project instance with server-generated columns loaded.
    """
    is_new = project.id is None
    merged = await session.merge(project)
    await session.flush()
    await session.refresh(merged)
    await session.commit()

    logger.info(
        "project_saved",
        project_id=str(merged.id),
        project_code=merged.project_code,
        status=merged.project_status.value,
        created=is_new,
    )

    return merged
