"""Query functions for the project service database layer."""

from project_service.database.queries.project import (
    count_open_projects_by_manager,
    get_project_by_code,
    list_projects,
    list_projects_by_manager,
    save_project,
)

__all__ = [
    "count_open_projects_by_manager",
    "get_project_by_code",
    "list_projects",
    "list_projects_by_manager",
    "save_project",
]
