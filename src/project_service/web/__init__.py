"""Web interface for the project service.

FastAPI application factory, request logging middleware, and the HTTP
translation of business exceptions.
"""

from __future__ import annotations

from project_service.web.app import create_app
from project_service.web.middleware import RequestLoggingMiddleware

__all__ = [
    "create_app",
    "RequestLoggingMiddleware",
]
