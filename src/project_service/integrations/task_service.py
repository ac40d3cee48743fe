"""HTTP client for the task service.

Completing or deleting a project asks the task service to complete or
delete every task belonging to it. Calls are best-effort: failures are
logged and reported as False, never raised, and nothing is retried.
"""

from __future__ import annotations

from urllib.parse import quote

import httpx

from project_service.config import TaskServiceConfig
from project_service.logging import get_logger

logger = get_logger(__name__)


class TaskServiceClient:
    """TaskCollaborator over the task service REST API.

    One instance owns the pooled httpx client for the application;
    ``with_token`` returns a view that forwards a caller's bearer token
    while sharing that pool.
    """

    def __init__(
        self,
        config: TaskServiceConfig,
        http_client: httpx.AsyncClient | None = None,
        bearer_token: str | None = None,
    ) -> None:
        self.config = config
        self.bearer_token = bearer_token
        self._client = http_client

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.config.base_url,
                timeout=self.config.timeout_seconds,
            )
        return self._client

    def with_token(self, bearer_token: str | None) -> TaskServiceClient:
        """Return a client that sends requests on behalf of the given caller."""
        return TaskServiceClient(self.config, self._get_client(), bearer_token)

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def complete_all_for_project(self, project_code: str) -> bool:
        """Ask the task service to complete every task of a project."""
        return await self._send(
            "PUT", f"/api/v1/task/complete/project/{quote(project_code, safe='')}", project_code
        )

    async def delete_all_for_project(self, project_code: str) -> bool:
        """Ask the task service to delete every task of a project."""
        return await self._send(
            "DELETE", f"/api/v1/task/delete/project/{quote(project_code, safe='')}", project_code
        )

    async def _send(self, method: str, path: str, project_code: str) -> bool:
        headers = {"Accept": "application/json"}
        if self.bearer_token:
            headers["Authorization"] = f"Bearer {self.bearer_token}"

        try:
            response = await self._get_client().request(method, path, headers=headers)
        except httpx.RequestError as e:
            logger.error(
                "task_service_request_error",
                method=method,
                path=path,
                project_code=project_code,
                error=str(e),
            )
            return False

        if response.is_success:
            logger.info(
                "task_service_request_sent",
                method=method,
                project_code=project_code,
                status_code=response.status_code,
            )
            return True

        logger.warning(
            "task_service_request_failed",
            method=method,
            project_code=project_code,
            status_code=response.status_code,
            response_text=response.text[:200],
        )
        return False


class NullTaskCollaborator:
    """TaskCollaborator used when the task service integration is disabled."""

    def with_token(self, bearer_token: str | None) -> NullTaskCollaborator:
        return self

    async def close(self) -> None:
        return None

    async def complete_all_for_project(self, project_code: str) -> bool:
        logger.debug("task_service_disabled", action="complete", project_code=project_code)
        return True

    async def delete_all_for_project(self, project_code: str) -> bool:
        logger.debug("task_service_disabled", action="delete", project_code=project_code)
        return True


def create_task_collaborator(config: TaskServiceConfig) -> TaskServiceClient | NullTaskCollaborator:
    """Build the task collaborator selected by configuration."""
    if not config.enabled:
        return NullTaskCollaborator()
    return TaskServiceClient(config)
