"""Collaborator interfaces consumed by ProjectManager.

These protocols define what the business layer expects from identity,
persistence, and the task service. Concrete implementations live in
``project_service.identity``, ``project_service.database.store`` and
``project_service.integrations.task_service``; tests substitute doubles.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from project_service.database.models.project import Project


class IdentityProvider(Protocol):
    """Resolves the current caller and their role memberships."""

    def current_identity(self) -> str:
        """Return the username of the current caller."""
        ...

    def has_role(self, identity: str, role_name: str) -> bool:
        """Return True if the given identity holds the named role."""
        ...


class ProjectStore(Protocol):
    """Keyed lookup, listing, and persistence of Project records.

    None of the read methods return soft-deleted projects.
    """

    async def find_by_code(self, project_code: str) -> Project | None:
        ...

    async def find_all_by_manager(self, assigned_manager: str) -> list[Project]:
        ...

    async def find_all(self) -> list[Project]:
        ...

    async def count_open_by_manager(self, assigned_manager: str) -> int:
        ...

    async def save(self, project: Project) -> Project:
        ...


class TaskCollaborator(Protocol):
    """Best-effort notifications to the task service.

    Return values are informational only; ProjectManager never waits on
    them in the request path.
    """

    async def complete_all_for_project(self, project_code: str) -> bool:
        """Ask the task service to complete every task of the project."""
        ...

    async def delete_all_for_project(self, project_code: str) -> bool:
        """Ask the task service to delete every task of the project."""
        ...
