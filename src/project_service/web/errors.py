"""Translation of business exceptions into HTTP responses.

Response body: ``{"error": "<ExceptionClass>", "detail": "<message>"}``.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi import status as http_status
from fastapi.responses import JSONResponse

from project_service.exceptions import (
    AuthenticationError,
    InvalidProjectError,
    ProjectAccessDeniedError,
    ProjectAlreadyExistsError,
    ProjectIsCompletedError,
    ProjectNotFoundError,
    ProjectServiceError,
)
from project_service.logging import get_logger

logger = get_logger(__name__)

STATUS_BY_ERROR: dict[type[ProjectServiceError], int] = {
    ProjectNotFoundError: http_status.HTTP_404_NOT_FOUND,
    ProjectAlreadyExistsError: http_status.HTTP_409_CONFLICT,
    ProjectIsCompletedError: http_status.HTTP_409_CONFLICT,
    ProjectAccessDeniedError: http_status.HTTP_403_FORBIDDEN,
    InvalidProjectError: http_status.HTTP_422_UNPROCESSABLE_ENTITY,
}


async def project_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Map a ProjectServiceError subclass to its HTTP status."""
    status_code = STATUS_BY_ERROR.get(type(exc), http_status.HTTP_400_BAD_REQUEST)
    logger.warning(
        "project_request_rejected",
        path=request.url.path,
        error=type(exc).__name__,
        status_code=status_code,
        project_code=getattr(exc, "project_code", None),
    )
    return JSONResponse(
        status_code=status_code,
        content={"error": type(exc).__name__, "detail": str(exc)},
    )


async def authentication_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Reject unauthenticated requests with 401."""
    logger.warning("authentication_failed", path=request.url.path, detail=str(exc))
    return JSONResponse(
        status_code=http_status.HTTP_401_UNAUTHORIZED,
        content={"error": type(exc).__name__, "detail": str(exc)},
        headers={"WWW-Authenticate": "Bearer"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the project service exception handlers on an app."""
    app.add_exception_handler(ProjectServiceError, project_error_handler)
    app.add_exception_handler(AuthenticationError, authentication_error_handler)
