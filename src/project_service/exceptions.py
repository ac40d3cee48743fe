"""Exception hierarchy for the project service.

The business layer raises these; the web layer translates them into HTTP
responses (see ``project_service.web.errors``). Nothing in the core
catches them.
"""

from __future__ import annotations


class ProjectServiceError(Exception):
    """Base exception for project business-rule violations.

    Attributes:
        project_code: Code of the project the operation targeted, if any.
    """

    default_message = "Project operation failed."

    def __init__(self, message: str | None = None, project_code: str | None = None) -> None:
        self.project_code = project_code
        super().__init__(message or self.default_message)


class ProjectNotFoundError(ProjectServiceError):
    """Raised when no project matches the given code."""

    default_message = "Project does not exist."


class ProjectAlreadyExistsError(ProjectServiceError):
    """Raised when creating a project with a code that is already in use."""

    default_message = "Project already exists."


class ProjectIsCompletedError(ProjectServiceError):
    """Raised when a guard check hits a completed project."""

    default_message = "Project is already completed."


class InvalidProjectError(ProjectServiceError):
    """Raised when a project draft lacks a field the operation requires."""

    default_message = "Project code is required."


class ProjectAccessDeniedError(ProjectServiceError):
    """Raised when the caller may not act on the project."""

    default_message = "Access denied, make sure that you are working on your own project."


class AuthenticationError(Exception):
    """Raised when the caller's bearer token is missing or invalid."""

    pass
