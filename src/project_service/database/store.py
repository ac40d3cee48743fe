"""SQL-backed ProjectStore.

Adapts the module-level query functions to the ProjectStore port used by
ProjectManager. Each call runs in its own session, so returned projects are
detached and safe to hand back to the caller.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from project_service.database.queries import project as project_queries

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from project_service.database.models.project import Project


class SqlProjectStore:
    """ProjectStore implementation over an async session factory.

    Attributes:
        session_factory: Factory producing AsyncSession instances.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def find_by_code(self, project_code: str) -> Project | None:
        async with self.session_factory() as session:
            return await project_queries.get_project_by_code(session, project_code)

    async def find_all_by_manager(self, assigned_manager: str) -> list[Project]:
        async with self.session_factory() as session:
            return await project_queries.list_projects_by_manager(session, assigned_manager)

    async def find_all(self) -> list[Project]:
        async with self.session_factory() as session:
            return await project_queries.list_projects(session)

    async def count_open_by_manager(self, assigned_manager: str) -> int:
        async with self.session_factory() as session:
            return await project_queries.count_open_projects_by_manager(
                session, assigned_manager
            )

    async def save(self, project: Project) -> Project:
        async with self.session_factory() as session:
            return await project_queries.save_project(session, project)
