"""FastAPI route definitions for the project service."""

from __future__ import annotations

from project_service.web.routes.health import (
    HealthResponse,
    ReadinessResponse,
    create_health_router,
)
from project_service.web.routes.projects import (
    ManagerResponse,
    OpenProjectCountResponse,
    ProjectCheckResponse,
    ProjectCreate,
    create_projects_router,
)

__all__ = [
    # Health
    "HealthResponse",
    "ReadinessResponse",
    "create_health_router",
    # Projects
    "ManagerResponse",
    "OpenProjectCountResponse",
    "ProjectCheckResponse",
    "ProjectCreate",
    "create_projects_router",
]
