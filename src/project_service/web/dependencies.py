"""FastAPI dependencies shared by the project service routes.

Every project route authenticates the bearer token, binds the caller to the
log context, and receives a ProjectManager scoped to that caller. The
long-lived collaborators (store, task client, notifier, token verifier)
live on ``app.state``.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from fastapi import Depends, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi import status as http_status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from project_service.exceptions import AuthenticationError
from project_service.identity.token import TokenIdentityProvider
from project_service.logging import bind_caller_context, get_logger
from project_service.services.project_manager import ProjectManager

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def get_caller(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),  # noqa: B008
) -> TokenIdentityProvider:
    """Authenticate the request's bearer token.

    Verification, which may fetch JWKS signing keys over HTTP, runs in the
    threadpool. The caller is bound to the log context on the event loop.

    Raises:
        AuthenticationError: If the token is missing or invalid.
    """
    if credentials is None:
        raise AuthenticationError("Missing bearer token")

    verifier = request.app.state.token_verifier
    identity = await run_in_threadpool(verifier.verify, credentials.credentials)
    bind_caller_context(identity.username)
    return identity


async def get_project_manager(
    request: Request,
    caller: TokenIdentityProvider = Depends(get_caller),  # noqa: B008
) -> ProjectManager:
    """Build a ProjectManager acting on behalf of the authenticated caller."""
    state = request.app.state
    return ProjectManager(
        identity=caller,
        store=state.project_store,
        tasks=state.task_collaborator.with_token(caller.token),
        notifier=state.notifier,
    )


def require_role(role_name: str) -> Callable[..., Awaitable[TokenIdentityProvider]]:
    """Dependency factory rejecting callers without the given role with 403."""

    async def _require_role(
        caller: TokenIdentityProvider = Depends(get_caller),  # noqa: B008
    ) -> TokenIdentityProvider:
        if not caller.has_role(caller.username, role_name):
            logger.warning("role_required", caller=caller.username, role=role_name)
            raise HTTPException(
                status_code=http_status.HTTP_403_FORBIDDEN,
                detail=f"Role {role_name} required",
            )
        return caller

    return _require_role
