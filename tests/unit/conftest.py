"""Shared fixtures for unit tests."""

from typing import Any
from unittest.mock import AsyncMock, MagicMock
from uuid import UUID, uuid4

import pytest

from domain.entities.task import Task, TaskContext
from domain.entities.workspace import WorkspaceRole


class FakeUnitOfWork:
    """Fake Unit of Work with AsyncMock repositories for unit testing."""

    def __init__(self) -> None:
        self.tasks = AsyncMock()
        self.projects = AsyncMock()
        self.activities = AsyncMock()
        self.labels = AsyncMock()
        self.workspaces = AsyncMock()
        self.profiles = AsyncMock()
        self.resources = AsyncMock()
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass

    def grant(self, role: WorkspaceRole | None) -> None:
        """Make ``resources.role_of`` answer ``role`` for every lookup."""
        self.resources.role_of.return_value = role

    def place_task(self, task: Task, workspace_id: UUID) -> None:
        """Make ``task`` resolvable by both the repository and the resolver."""
        self.tasks.get.return_value = task
        self.resources.resolve_task_context.return_value = TaskContext(
            task_id=task.id, workspace_id=workspace_id, creator_id=task.created_by
        )
        self.resources.resolve_project_workspace.return_value = workspace_id


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def events() -> MagicMock:
    """Stand-in event bus recording ``publish`` calls."""
    return MagicMock()


@pytest.fixture
def user_id() -> UUID:
    """A random user ID."""
    return uuid4()


@pytest.fixture
def workspace_id() -> UUID:
    """A random workspace ID."""
    return uuid4()


@pytest.fixture
def project_id() -> UUID:
    return uuid4()


@pytest.fixture
def actor_id() -> UUID:
    """A random actor ID (distinct from user_id)."""
    return uuid4()
