"""Integration modules for external systems."""

from __future__ import annotations

from project_service.integrations.task_service import (
    NullTaskCollaborator,
    TaskServiceClient,
    create_task_collaborator,
)

__all__ = [
    "NullTaskCollaborator",
    "TaskServiceClient",
    "create_task_collaborator",
]
