"""Shared test doubles for the project service.

Provides in-memory stand-ins for the three collaborators of ProjectManager:
an identity provider with fixed roles, a project store that mimics the SQL
store's merge and soft-delete semantics, and a task collaborator that
records every call.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any
from uuid import UUID, uuid4

import jwt
import pytest

from project_service.config import IdentityConfig
from project_service.database.models.project import Project, ProjectStatus
from project_service.services.notifications import BackgroundNotifier
from project_service.services.project_manager import ProjectManager

TEST_ISSUER = "http://identity.test/realms/ticketing"
TEST_CLIENT_ID = "ticketing-app"
TEST_SECRET = "test-secret-key-that-is-long-enough-for-hs256"


@dataclass
class FakeIdentityProvider:
    """Identity provider with a fixed caller and role set."""

    username: str
    roles: set[str] = field(default_factory=set)

    def current_identity(self) -> str:
        return self.username

    def has_role(self, identity: str, role_name: str) -> bool:
        return identity == self.username and role_name in self.roles


class InMemoryProjectStore:
    """ProjectStore keeping projects in a dict keyed by id.

    Saving a project whose id is already stored copies the attributes set on
    the given instance onto the stored one, like ``Session.merge``.
    """

    def __init__(self) -> None:
        self.records: dict[UUID, Project] = {}
        self.save_count = 0

    def add(self, **fields: Any) -> Project:
        """Insert a project directly, bypassing ProjectManager."""
        project = Project(**fields)
        project.id = fields.get("id") or uuid4()
        if project.project_status is None:
            project.project_status = ProjectStatus.open
        if project.is_deleted is None:
            project.is_deleted = False
        self.records[project.id] = project
        return project

    async def find_by_code(self, project_code: str) -> Project | None:
        for project in self.records.values():
            if project.project_code == project_code and not project.is_deleted:
                return project
        return None

    async def find_all_by_manager(self, assigned_manager: str) -> list[Project]:
        return [
            p
            for p in self.records.values()
            if p.assigned_manager == assigned_manager and not p.is_deleted
        ]

    async def find_all(self) -> list[Project]:
        return [p for p in self.records.values() if not p.is_deleted]

    async def count_open_by_manager(self, assigned_manager: str) -> int:
        return sum(
            1
            for p in await self.find_all_by_manager(assigned_manager)
            if p.project_status != ProjectStatus.completed
        )

    async def save(self, project: Project) -> Project:
        self.save_count += 1
        if project.id is not None and project.id in self.records:
            stored = self.records[project.id]
            if stored is not project:
                for key, value in vars(project).items():
                    if not key.startswith("_"):
                        setattr(stored, key, value)
            return stored

        if project.id is None:
            project.id = uuid4()
        if project.is_deleted is None:
            project.is_deleted = False
        self.records[project.id] = project
        return project


class RecordingTaskCollaborator:
    """TaskCollaborator that records calls and can be told to fail."""

    def __init__(self, fail_with: Exception | None = None, result: bool = True) -> None:
        self.completed: list[str] = []
        self.deleted: list[str] = []
        self.fail_with = fail_with
        self.result = result

    async def complete_all_for_project(self, project_code: str) -> bool:
        self.completed.append(project_code)
        if self.fail_with is not None:
            raise self.fail_with
        return self.result

    async def delete_all_for_project(self, project_code: str) -> bool:
        self.deleted.append(project_code)
        if self.fail_with is not None:
            raise self.fail_with
        return self.result


@pytest.fixture
def store() -> InMemoryProjectStore:
    """Empty in-memory project store."""
    return InMemoryProjectStore()


@pytest.fixture
def task_collaborator() -> RecordingTaskCollaborator:
    """Task collaborator recording notifications."""
    return RecordingTaskCollaborator()


@pytest.fixture
def notifier() -> BackgroundNotifier:
    """Fresh notification tracker."""
    return BackgroundNotifier()


@pytest.fixture
def manager_for(
    store: InMemoryProjectStore,
    task_collaborator: RecordingTaskCollaborator,
    notifier: BackgroundNotifier,
) -> Callable[..., ProjectManager]:
    """Factory building a ProjectManager acting as the given caller."""

    def _build(username: str, *roles: str) -> ProjectManager:
        return ProjectManager(
            identity=FakeIdentityProvider(username, set(roles)),
            store=store,
            tasks=task_collaborator,
            notifier=notifier,
        )

    return _build


@pytest.fixture
def identity_config() -> IdentityConfig:
    """Identity configuration using a shared HS256 secret."""
    return IdentityConfig(
        issuer=TEST_ISSUER,
        client_id=TEST_CLIENT_ID,
        secret_key=TEST_SECRET,
        algorithms=["HS256"],
    )


def _mint_token(
    username: str,
    *roles: str,
    issuer: str = TEST_ISSUER,
    secret: str = TEST_SECRET,
    expires_in: int = 300,
    **extra_claims: Any,
) -> str:
    """Mint an HS256 access token carrying client roles."""
    now = int(time.time())
    claims: dict[str, Any] = {
        "sub": str(uuid4()),
        "preferred_username": username,
        "iss": issuer,
        "iat": now,
        "exp": now + expires_in,
        "resource_access": {TEST_CLIENT_ID: {"roles": list(roles)}},
    }
    claims.update(extra_claims)
    return jwt.encode(claims, secret, algorithm="HS256")


@pytest.fixture
def make_token() -> Callable[..., str]:
    """Factory minting signed access tokens for the test issuer."""
    return _mint_token
