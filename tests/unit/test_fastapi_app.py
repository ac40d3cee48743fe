"""Unit tests for FastAPI application setup.

Tests cover:
- Application factory creates FastAPI instance
- Collaborators placed on app.state
- CORS and request logging middleware
- Health and readiness endpoints
- Correlation ID propagation
- Router registration
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from httpx import ASGITransport, AsyncClient

from project_service.config import ProjectServiceConfig, TaskServiceConfig, WebConfig
from project_service.exceptions import InvalidProjectError
from project_service.identity.token import TokenVerifier
from project_service.integrations.task_service import NullTaskCollaborator, TaskServiceClient
from project_service.services.notifications import BackgroundNotifier
from project_service.web.app import create_app
from project_service.web.middleware import RequestLoggingMiddleware


def _client(app: FastAPI) -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


class TestCreateApp:
    """Test application factory function."""

    def test_returns_fastapi_instance(self) -> None:
        assert isinstance(create_app(), FastAPI)

    def test_app_metadata(self) -> None:
        app = create_app()
        assert app.title == "Project Service"
        assert app.version == "0.1.0"

    def test_app_stores_config_in_state(self) -> None:
        config = ProjectServiceConfig()
        app = create_app(config)
        assert app.state.config is config

    def test_collaborators_on_state(self) -> None:
        """Test that I/O-free collaborators are built by the factory."""
        app = create_app()
        assert isinstance(app.state.token_verifier, TokenVerifier)
        assert isinstance(app.state.task_collaborator, TaskServiceClient)
        assert isinstance(app.state.notifier, BackgroundNotifier)

    def test_disabled_task_service_uses_null_collaborator(self) -> None:
        app = create_app(ProjectServiceConfig(task_service=TaskServiceConfig(enabled=False)))
        assert isinstance(app.state.task_collaborator, NullTaskCollaborator)


class TestMiddleware:
    """Test middleware registration."""

    def test_cors_uses_config_origins(self) -> None:
        origins = ["https://app.example.com", "https://admin.example.com"]
        app = create_app(ProjectServiceConfig(web=WebConfig(cors_origins=origins)))

        cors = [m for m in app.user_middleware if m.cls == CORSMiddleware]
        assert len(cors) == 1
        assert cors[0].kwargs["allow_origins"] == origins
        assert cors[0].kwargs["allow_credentials"] is True

    def test_logging_middleware_is_registered(self) -> None:
        app = create_app()
        assert any(m.cls == RequestLoggingMiddleware for m in app.user_middleware)


class TestHealthEndpoints:
    """Test liveness and readiness endpoints."""

    @pytest.fixture
    def app(self) -> FastAPI:
        app = create_app()
        app.state.session_factory = MagicMock()
        return app

    @pytest.mark.asyncio
    async def test_health_returns_ok(self, app: FastAPI) -> None:
        async with _client(app) as client:
            response = await client.get("/health/")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    @pytest.mark.asyncio
    async def test_readiness_when_db_healthy(self, app: FastAPI) -> None:
        mock_session = AsyncMock()
        app.state.session_factory.return_value.__aenter__ = AsyncMock(return_value=mock_session)
        app.state.session_factory.return_value.__aexit__ = AsyncMock(return_value=None)

        async with _client(app) as client:
            response = await client.get("/health/ready")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "database": "connected"}
        mock_session.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_readiness_when_db_fails(self, app: FastAPI) -> None:
        """Test that readiness reports unhealthy without failing the probe."""
        app.state.session_factory.return_value.__aenter__ = AsyncMock(
            side_effect=Exception("Database connection failed")
        )
        app.state.session_factory.return_value.__aexit__ = AsyncMock(return_value=None)

        async with _client(app) as client:
            response = await client.get("/health/ready")

        assert response.status_code == 200
        assert response.json() == {"status": "unhealthy", "database": "disconnected"}


class TestCorrelationId:
    """Test correlation ID handling in middleware."""

    @pytest.mark.asyncio
    async def test_response_includes_correlation_id(self) -> None:
        async with _client(create_app()) as client:
            response = await client.get("/health/")
        assert response.headers["X-Correlation-ID"]

    @pytest.mark.asyncio
    async def test_response_echoes_provided_correlation_id(self) -> None:
        async with _client(create_app()) as client:
            response = await client.get(
                "/health/", headers={"X-Correlation-ID": "corr-12345"}
            )
        assert response.headers["X-Correlation-ID"] == "corr-12345"

    @pytest.mark.asyncio
    async def test_empty_correlation_id_is_replaced(self) -> None:
        async with _client(create_app()) as client:
            response = await client.get("/health/", headers={"X-Correlation-ID": ""})
        assert response.headers["X-Correlation-ID"]


class TestRequestLogLevel:
    """Test that request_completed is logged at a level matching the status."""

    @pytest.mark.asyncio
    async def test_success_logged_as_info(self) -> None:
        with patch("project_service.web.middleware.logger") as mock_logger:
            async with _client(create_app()) as client:
                await client.get("/health/")

        assert mock_logger.info.call_args.args == ("request_completed",)
        assert mock_logger.info.call_args.kwargs["status_code"] == 200
        mock_logger.warning.assert_not_called()

    @pytest.mark.asyncio
    async def test_rejected_request_logged_as_warning(self) -> None:
        with patch("project_service.web.middleware.logger") as mock_logger:
            async with _client(create_app()) as client:
                response = await client.get("/api/v1/project/read/all/manager")

        assert response.status_code == 401
        mock_logger.warning.assert_called_once()
        assert mock_logger.warning.call_args.args == ("request_completed",)
        assert mock_logger.warning.call_args.kwargs["status_code"] == 401
        mock_logger.error.assert_not_called()


class TestRouterRegistration:
    """Test that routers are registered."""

    def test_routes_exist(self) -> None:
        routes = set(create_app().openapi()["paths"])

        assert "/health/" in routes
        assert "/health/ready" in routes
        assert "/api/v1/project/create" in routes
        assert "/api/v1/project/read/{project_code}" in routes
        assert "/api/v1/project/read/manager/{project_code}" in routes
        assert "/api/v1/project/read/all/details" in routes
        assert "/api/v1/project/read/all/admin" in routes
        assert "/api/v1/project/read/all/manager" in routes
        assert "/api/v1/project/count/manager/{assigned_manager}" in routes
        assert "/api/v1/project/check/{project_code}" in routes
        assert "/api/v1/project/update/{project_code}" in routes
        assert "/api/v1/project/complete/{project_code}" in routes
        assert "/api/v1/project/delete/{project_code}" in routes

    def test_route_methods(self) -> None:
        paths = create_app().openapi()["paths"]

        assert set(paths["/api/v1/project/create"]) == {"post"}
        assert set(paths["/api/v1/project/update/{project_code}"]) == {"put"}
        assert set(paths["/api/v1/project/complete/{project_code}"]) == {"put"}
        assert set(paths["/api/v1/project/delete/{project_code}"]) == {"delete"}


class TestErrorMapping:
    """Test business exception to status translation."""

    @pytest.mark.asyncio
    async def test_invalid_project_is_422(self) -> None:
        app = create_app()

        @app.get("/raise-invalid")
        async def raise_invalid() -> None:
            raise InvalidProjectError()

        async with _client(app) as client:
            response = await client.get("/raise-invalid")

        assert response.status_code == 422
        assert response.json() == {
            "error": "InvalidProjectError",
            "detail": "Project code is required.",
        }
