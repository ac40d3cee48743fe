"""Project lifecycle management with role-based access control.

ProjectManager is the business layer of the service. It resolves the caller
through an IdentityProvider, reads and writes projects through a
ProjectStore, and tells the task service about project-wide task changes
through a TaskCollaborator.

Access rule for per-project operations:
    - a caller holding the Manager role may only touch projects assigned
      to them;
    - a caller holding the Employee role is always refused;
    - anyone else (e.g. Admin) is allowed.

Example:
    >>> manager = ProjectManager(identity, store, task_client, notifier)
    >>> dto = await manager.create(ProjectDTO(project_code="P-100", project_name="Intranet"))
    >>> await manager.complete("P-100")
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from project_service.database.models.project import Project, ProjectStatus
from project_service.exceptions import (
    InvalidProjectError,
    ProjectAccessDeniedError,
    ProjectAlreadyExistsError,
    ProjectIsCompletedError,
    ProjectNotFoundError,
)
from project_service.services.notifications import BackgroundNotifier
from project_service.services.schemas import DRAFT_FIELDS, ProjectDTO

if TYPE_CHECKING:
    from project_service.services.ports import IdentityProvider, ProjectStore, TaskCollaborator

logger = structlog.get_logger(__name__)

MANAGER_ROLE = "Manager"
EMPLOYEE_ROLE = "Employee"


class ProjectManager:
    """Request-scoped handler for project operations.

    Attributes:
        identity: Resolves the current caller and their roles.
        store: Project persistence.
        tasks: Task service notifications.
        notifier: Runs task notifications detached from the request.
    """

    def __init__(
        self,
        identity: IdentityProvider,
        store: ProjectStore,
        tasks: TaskCollaborator,
        notifier: BackgroundNotifier | None = None,
    ) -> None:
        self.identity = identity
        self.store = store
        self.tasks = tasks
        self.notifier = notifier or BackgroundNotifier()

    async def create(self, draft: ProjectDTO) -> ProjectDTO:
        """Create a project owned by the caller.

        The draft's manager and status are ignored: the caller becomes the
        assigned manager and the project starts open.

        Raises:
            InvalidProjectError: If the draft has no project code.
            ProjectAlreadyExistsError: If the project code is already in use.
        """
        if not draft.project_code:
            raise InvalidProjectError()

        if await self.store.find_by_code(draft.project_code) is not None:
            logger.warning("project_already_exists", project_code=draft.project_code)
            raise ProjectAlreadyExistsError(project_code=draft.project_code)

        project = self._to_record(draft)
        project.assigned_manager = self.identity.current_identity()
        project.project_status = ProjectStatus.open
        project.is_deleted = False

        saved = await self.store.save(project)

        logger.info(
            "project_created",
            project_id=str(saved.id),
            project_code=saved.project_code,
            assigned_manager=saved.assigned_manager,
        )
        return ProjectDTO.model_validate(saved)

    async def read_by_code(self, project_code: str) -> ProjectDTO:
        """Return a project the caller may access.

        Raises:
            ProjectNotFoundError: If no project has that code.
            ProjectAccessDeniedError: If the caller may not access it.
        """
        project = await self._get_existing(project_code)
        self._check_access(project)
        return ProjectDTO.model_validate(project)

    async def read_manager_by_code(self, project_code: str) -> str:
        """Return the assigned manager of a project the caller may access.

        Raises:
            ProjectNotFoundError: If no project has that code.
            ProjectAccessDeniedError: If the caller may not access it.
        """
        project = await self._get_existing(project_code)
        self._check_access(project)
        return project.assigned_manager

    async def list_mine(self) -> list[ProjectDTO]:
        """List the caller's projects with task-count details."""
        projects = await self.store.find_all_by_manager(self.identity.current_identity())
        return [self._retrieve_project_details(project) for project in projects]

    async def list_all(self) -> list[ProjectDTO]:
        """List every project. Authorization is left to the caller."""
        projects = await self.store.find_all()
        return [ProjectDTO.model_validate(project) for project in projects]

    async def list_mine_as_manager(self) -> list[ProjectDTO]:
        """List the caller's projects without task details."""
        projects = await self.store.find_all_by_manager(self.identity.current_identity())
        return [ProjectDTO.model_validate(project) for project in projects]

    async def count_open_for_manager(self, assigned_manager: str) -> int:
        """Count a manager's projects that are not completed."""
        return await self.store.count_open_by_manager(assigned_manager)

    async def exists_and_open(self, project_code: str) -> bool:
        """Guard used before working on a project.

        Returns:
            False if the project does not exist, True if it is open and the
            caller may access it.

        Raises:
            ProjectIsCompletedError: If the project is completed.
            ProjectAccessDeniedError: If the caller may not access it.
        """
        project = await self.store.find_by_code(project_code)
        if project is None:
            return False

        if project.project_status == ProjectStatus.completed:
            raise ProjectIsCompletedError(project_code=project_code)

        self._check_access(project)
        return True

    async def update(self, project_code: str, draft: ProjectDTO) -> ProjectDTO:
        """Replace a project's editable fields.

        id, code, status and assigned manager always keep their stored
        values, whatever the draft says.

        Raises:
            ProjectNotFoundError: If no project has that code.
            ProjectAccessDeniedError: If the caller may not access it.
        """
        existing = await self._get_existing(project_code)
        self._check_access(existing)

        project = self._to_record(draft)
        project.id = existing.id
        project.project_code = existing.project_code
        project.project_status = existing.project_status
        project.assigned_manager = existing.assigned_manager

        updated = await self.store.save(project)

        logger.info(
            "project_updated",
            project_id=str(updated.id),
            project_code=updated.project_code,
        )
        return ProjectDTO.model_validate(updated)

    async def complete(self, project_code: str) -> ProjectDTO:
        """Mark a project completed and ask the task service to complete its tasks.

        Raises:
            ProjectNotFoundError: If no project has that code.
            ProjectAccessDeniedError: If the caller may not access it.
        """
        project = await self._get_existing(project_code)
        self._check_access(project)

        project.project_status = ProjectStatus.completed
        completed = await self.store.save(project)

        self.notifier.schedule("complete_tasks", self.tasks.complete_all_for_project, project_code)

        logger.info(
            "project_completed",
            project_id=str(completed.id),
            project_code=project_code,
        )
        return ProjectDTO.model_validate(completed)

    async def delete(self, project_code: str) -> None:
        """Soft-delete a project and ask the task service to delete its tasks.

        The stored code becomes ``"<code>-<id>"`` so the original code can
        be used again.

        Raises:
            ProjectNotFoundError: If no project has that code.
            ProjectAccessDeniedError: If the caller may not access it.
        """
        project = await self._get_existing(project_code)
        self._check_access(project)

        project.is_deleted = True
        project.project_code = f"{project_code}-{project.id}"

        self.notifier.schedule("delete_tasks", self.tasks.delete_all_for_project, project_code)

        await self.store.save(project)

        logger.info(
            "project_deleted",
            project_id=str(project.id),
            project_code=project_code,
            archived_code=project.project_code,
        )

    async def drain(self, timeout: float | None = None) -> None:
        """Wait for outstanding task notifications."""
        await self.notifier.drain(timeout)

    async def _get_existing(self, project_code: str) -> Project:
        project = await self.store.find_by_code(project_code)
        if project is None:
            logger.warning("project_not_found", project_code=project_code)
            raise ProjectNotFoundError(project_code=project_code)
        return project

    def _check_access(self, project: Project) -> None:
        caller = self.identity.current_identity()

        if (
            self.identity.has_role(caller, MANAGER_ROLE) and caller != project.assigned_manager
        ) or self.identity.has_role(caller, EMPLOYEE_ROLE):
            logger.warning(
                "project_access_denied",
                caller=caller,
                project_code=project.project_code,
                assigned_manager=project.assigned_manager,
            )
            raise ProjectAccessDeniedError(project_code=project.project_code)

    def _retrieve_project_details(self, project: Project) -> ProjectDTO:
        # TODO: fill complete_task_count/unfinished_task_count once the task
        # service exposes per-project counts; until then the view is empty.
        return ProjectDTO()

    @staticmethod
    def _to_record(draft: ProjectDTO) -> Project:
        return Project(**{field: getattr(draft, field) for field in DRAFT_FIELDS})
