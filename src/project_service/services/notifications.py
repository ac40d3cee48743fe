"""Detached delivery of task-service notifications.

Completing or deleting a project tells the task service to complete or
delete the project's tasks. Those calls must not delay the response or
fail the operation, so they run as background asyncio tasks tracked here
until they finish. The tracker is application-scoped; ProjectManager
instances are per request.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from functools import partial

import structlog

logger = structlog.get_logger(__name__)


class BackgroundNotifier:
    """Schedules fire-and-forget notifications and keeps them alive.

    asyncio only holds weak references to tasks, so every scheduled task is
    kept in ``_pending`` until its done callback removes it.
    """

    def __init__(self) -> None:
        self._pending: set[asyncio.Task[bool]] = set()

    @property
    def pending_count(self) -> int:
        """Number of notifications still in flight."""
        return len(self._pending)

    def schedule(
        self,
        action: str,
        send: Callable[[str], Awaitable[bool]],
        project_code: str,
    ) -> asyncio.Task[bool]:
        """Start a notification without waiting for it.

        Args:
            action: Short name of the notification, used in log events.
            send: Collaborator method to call with the project code.
            project_code: Code of the affected project.

        Returns:
            The scheduled task.
        """
        task = asyncio.create_task(
            send(project_code), name=f"task-notification:{action}:{project_code}"
        )
        self._pending.add(task)
        task.add_done_callback(partial(self._on_done, action, project_code))
        logger.debug("task_notification_scheduled", action=action, project_code=project_code)
        return task

    def _on_done(self, action: str, project_code: str, task: asyncio.Task[bool]) -> None:
        self._pending.discard(task)

        if task.cancelled():
            logger.warning("task_notification_cancelled", action=action, project_code=project_code)
            return

        exc = task.exception()
        if exc is not None:
            logger.error(
                "task_notification_failed",
                action=action,
                project_code=project_code,
                error=str(exc),
                error_type=type(exc).__name__,
            )
        elif task.result() is False:
            logger.warning("task_notification_rejected", action=action, project_code=project_code)
        else:
            logger.info("task_notification_delivered", action=action, project_code=project_code)

    async def drain(self, timeout: float | None = None) -> None:
        """Wait for all in-flight notifications to finish.

        Outcomes are already handled by the done callback, so exceptions are
        collected rather than raised. Tasks still running after ``timeout``
        seconds are cancelled.

        Args:
            timeout: Maximum seconds to wait, or None to wait indefinitely.
        """
        if not self._pending:
            return

        pending = list(self._pending)
        logger.info("task_notifications_draining", count=len(pending))
        done, not_done = await asyncio.wait(pending, timeout=timeout)

        for task in not_done:
            task.cancel()
        if not_done:
            await asyncio.gather(*not_done, return_exceptions=True)
            logger.warning("task_notifications_abandoned", count=len(not_done))

        # Let done callbacks run before returning
        await asyncio.sleep(0)
