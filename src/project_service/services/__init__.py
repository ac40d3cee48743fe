"""Business layer for the project service."""

from __future__ import annotations

from project_service.services.notifications import BackgroundNotifier
from project_service.services.ports import IdentityProvider, ProjectStore, TaskCollaborator
from project_service.services.project_manager import ProjectManager
from project_service.services.schemas import ProjectDTO

__all__ = [
    "BackgroundNotifier",
    "IdentityProvider",
    "ProjectDTO",
    "ProjectManager",
    "ProjectStore",
    "TaskCollaborator",
]
