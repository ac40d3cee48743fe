"""Data transfer objects for project operations.

ProjectDTO serves as both the draft accepted by create/update and the view
returned by every read. All fields are optional: a draft may leave any of
them out, and the server overrides the ones it owns.
"""

from __future__ import annotations

from datetime import date
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from project_service.database.models.project import ProjectStatus


class ProjectDTO(BaseModel):
    """Project view and draft.

    Attributes:
        id: Store-assigned identifier (ignored on input)
        project_code: Unique business key
        project_name: Human-readable project name
        assigned_manager: Managing user (ignored on input)
        start_date: Planned start date
        end_date: Planned end date
        project_detail: Free-form description
        project_status: Lifecycle status (ignored on input)
        complete_task_count: Completed tasks, when resolved from the task service
        unfinished_task_count: Non-completed tasks, when resolved from the task service
    """

    model_config = ConfigDict(from_attributes=True, use_enum_values=False)

    id: UUID | None = None
    project_code: str | None = Field(default=None, min_length=1, max_length=255)
    project_name: str | None = Field(default=None, max_length=255)
    assigned_manager: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    project_detail: str | None = None
    project_status: ProjectStatus | None = None
    complete_task_count: int | None = None
    unfinished_task_count: int | None = None


# Draft fields copied onto a Project record; the rest are server-owned.
DRAFT_FIELDS = (
    "project_code",
    "project_name",
    "start_date",
    "end_date",
    "project_detail",
)
