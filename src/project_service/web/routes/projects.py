"""Project endpoints for the project service.

All routes live under ``/api/v1/project`` and delegate to a request-scoped
ProjectManager. Business exceptions are translated into HTTP responses by
the handlers in ``project_service.web.errors``.

Example:
    >>> from fastapi import FastAPI
    >>> from project_service.web.routes.projects import create_projects_router
    >>>
    >>> app = FastAPI()
    >>> app.include_router(create_projects_router())
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi import status as http_status
from pydantic import BaseModel, Field

from project_service.logging import get_logger
from project_service.services.project_manager import ProjectManager
from project_service.services.schemas import ProjectDTO
from project_service.web.dependencies import get_project_manager, require_role

logger = get_logger(__name__)

ADMIN_ROLE = "Admin"


class ProjectCreate(ProjectDTO):
    """Request schema for creating a project; the code is mandatory."""

    project_code: str = Field(..., min_length=1, max_length=255)


class ManagerResponse(BaseModel):
    """Assigned manager of a project."""

    project_code: str
    assigned_manager: str


class OpenProjectCountResponse(BaseModel):
    """Number of non-completed projects for a manager."""

    assigned_manager: str
    count: int


class ProjectCheckResponse(BaseModel):
    """Result of the exists-and-open guard."""

    project_code: str
    exists: bool


def create_projects_router() -> APIRouter:
    """Create the project router.

    Routes:
        POST /api/v1/project/create - Create a project owned by the caller
        GET /api/v1/project/read/{code} - Read a project
        GET /api/v1/project/read/manager/{code} - Read a project's manager
        GET /api/v1/project/read/all/details - Caller's projects with task details
        GET /api/v1/project/read/all/admin - Every project (Admin only)
        GET /api/v1/project/read/all/manager - Caller's projects
        GET /api/v1/project/count/manager/{assigned_manager} - Open project count
        GET /api/v1/project/check/{code} - Exists-and-open guard
        PUT /api/v1/project/update/{code} - Update editable fields
        PUT /api/v1/project/complete/{code} - Complete a project
        DELETE /api/v1/project/delete/{code} - Soft-delete a project
    """
    router = APIRouter(prefix="/api/v1/project", tags=["projects"])

    @router.post(
        "/create", response_model=ProjectDTO, status_code=http_status.HTTP_201_CREATED
    )
    async def create_project(
        project_data: ProjectCreate,
        manager: ProjectManager = Depends(get_project_manager),  # noqa: B008
    ) -> ProjectDTO:
        """Create a project; the caller becomes its manager."""
        return await manager.create(project_data)

    @router.get("/read/all/details", response_model=list[ProjectDTO])
    async def read_all_with_details(
        manager: ProjectManager = Depends(get_project_manager),  # noqa: B008
    ) -> list[ProjectDTO]:
        """List the caller's projects with task-count details."""
        return await manager.list_mine()

    @router.get(
        "/read/all/admin",
        response_model=list[ProjectDTO],
        dependencies=[Depends(require_role(ADMIN_ROLE))],
    )
    async def admin_read_all(
        manager: ProjectManager = Depends(get_project_manager),  # noqa: B008
    ) -> list[ProjectDTO]:
        """List every project."""
        projects = await manager.list_all()
        logger.info("projects_listed", scope="all", count=len(projects))
        return projects

    @router.get("/read/all/manager", response_model=list[ProjectDTO])
    async def manager_read_all(
        manager: ProjectManager = Depends(get_project_manager),  # noqa: B008
    ) -> list[ProjectDTO]:
        """List the caller's projects."""
        projects = await manager.list_mine_as_manager()
        logger.info("projects_listed", scope="manager", count=len(projects))
        return projects

    @router.get("/read/manager/{project_code}", response_model=ManagerResponse)
    async def read_manager(
        project_code: str,
        manager: ProjectManager = Depends(get_project_manager),  # noqa: B008
    ) -> ManagerResponse:
        """Read the assigned manager of a project."""
        assigned_manager = await manager.read_manager_by_code(project_code)
        return ManagerResponse(project_code=project_code, assigned_manager=assigned_manager)

    @router.get("/read/{project_code}", response_model=ProjectDTO)
    async def read_project(
        project_code: str,
        manager: ProjectManager = Depends(get_project_manager),  # noqa: B008
    ) -> ProjectDTO:
        """Read a project by code."""
        return await manager.read_by_code(project_code)

    @router.get("/count/manager/{assigned_manager}", response_model=OpenProjectCountResponse)
    async def count_open_for_manager(
        assigned_manager: str,
        manager: ProjectManager = Depends(get_project_manager),  # noqa: B008
    ) -> OpenProjectCountResponse:
        """Count a manager's projects that are not completed."""
        count = await manager.count_open_for_manager(assigned_manager)
        return OpenProjectCountResponse(assigned_manager=assigned_manager, count=count)

    @router.get("/check/{project_code}", response_model=ProjectCheckResponse)
    async def check_project(
        project_code: str,
        manager: ProjectManager = Depends(get_project_manager),  # noqa: B008
    ) -> ProjectCheckResponse:
        """Check that a project exists, is open, and is accessible."""
        exists = await manager.exists_and_open(project_code)
        return ProjectCheckResponse(project_code=project_code, exists=exists)

    @router.put("/update/{project_code}", response_model=ProjectDTO)
    async def update_project(
        project_code: str,
        project_data: ProjectDTO,
        manager: ProjectManager = Depends(get_project_manager),  # noqa: B008
    ) -> ProjectDTO:
        """Replace a project's editable fields."""
        return await manager.update(project_code, project_data)

    @router.put("/complete/{project_code}", response_model=ProjectDTO)
    async def complete_project(
        project_code: str,
        manager: ProjectManager = Depends(get_project_manager),  # noqa: B008
    ) -> ProjectDTO:
        """Mark a project completed."""
        return await manager.complete(project_code)

    @router.delete("/delete/{project_code}", status_code=http_status.HTTP_204_NO_CONTENT)
    async def delete_project(
        project_code: str,
        manager: ProjectManager = Depends(get_project_manager),  # noqa: B008
    ) -> None:
        """Soft-delete a project."""
        await manager.delete(project_code)

    return router
