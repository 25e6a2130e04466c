"""Unit tests for LabelService."""

from uuid import UUID, uuid4

import pytest

from core.exceptions import (
    LabelNotFoundError,
    LabelWorkspaceMismatchError,
    PermissionDeniedError,
    WorkspaceNotFoundError,
)
from domain.entities.task import Label, Task
from domain.entities.workspace import WorkspaceRole
from domain.services.label_service import LabelService
from domain.services.policy_engine import PolicyEngine
from tests.unit.conftest import FakeUnitOfWork


@pytest.fixture
def service(uow: FakeUnitOfWork) -> LabelService:
    uow.labels.create.side_effect = lambda label: label
    return LabelService(lambda: uow, PolicyEngine(lambda: uow))


@pytest.fixture
def task(uow: FakeUnitOfWork, workspace_id: UUID, project_id: UUID) -> Task:
    task = Task(project_id=project_id, title="Poster", created_by=uuid4())
    uow.place_task(task, workspace_id)
    return task


class TestCreateLabel:
    @pytest.mark.asyncio
    async def test_teacher_labels_foreign_task(
        self,
        service: LabelService,
        uow: FakeUnitOfWork,
        task: Task,
        user_id: UUID,
        workspace_id: UUID,
    ):
        uow.grant(WorkspaceRole.TEACHER)

        label = await service.create_label(user_id, workspace_id, "urgent", "#FF0000", task.id)

        assert label.task_id == task.id
        assert label.workspace_id == workspace_id
        assert uow.committed

    @pytest.mark.asyncio
    async def test_task_from_other_workspace_is_rejected(
        self, service: LabelService, uow: FakeUnitOfWork, task: Task, user_id: UUID
    ):
        uow.grant(WorkspaceRole.OWNER)

        with pytest.raises(LabelWorkspaceMismatchError):
            await service.create_label(user_id, uuid4(), "urgent", "#FF0000", task.id)

        uow.labels.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_outsider_cannot_label_task(
        self,
        service: LabelService,
        uow: FakeUnitOfWork,
        task: Task,
        user_id: UUID,
        workspace_id: UUID,
    ):
        uow.grant(None)

        with pytest.raises(PermissionDeniedError):
            await service.create_label(user_id, workspace_id, "urgent", "#FF0000", task.id)

    @pytest.mark.asyncio
    async def test_workspace_label_needs_membership(
        self, service: LabelService, uow: FakeUnitOfWork, user_id: UUID, workspace_id: UUID
    ):
        uow.grant(None)

        with pytest.raises(PermissionDeniedError):
            await service.create_label(user_id, workspace_id, "backlog", "#00FF00")

        uow.grant(WorkspaceRole.MEMBER)
        label = await service.create_label(user_id, workspace_id, "backlog", "#00FF00")
        assert label.task_id is None

    @pytest.mark.asyncio
    async def test_workspace_label_in_unknown_workspace(
        self, service: LabelService, uow: FakeUnitOfWork, user_id: UUID, workspace_id: UUID
    ):
        uow.workspaces.get.return_value = None

        with pytest.raises(WorkspaceNotFoundError):
            await service.create_label(user_id, workspace_id, "backlog", "#00FF00")

        uow.resources.role_of.assert_not_awaited()


class TestDeleteLabel:
    @pytest.mark.asyncio
    async def test_deletes_task_label(
        self,
        service: LabelService,
        uow: FakeUnitOfWork,
        task: Task,
        user_id: UUID,
        workspace_id: UUID,
    ):
        uow.grant(WorkspaceRole.TEACHER)
        label = Label(workspace_id=workspace_id, name="urgent", color="#FF0000", task_id=task.id)
        uow.labels.get.return_value = label
        uow.labels.delete.return_value = True

        assert await service.delete_label(label.id, user_id) is label
        uow.labels.delete.assert_awaited_once_with(label.id)

    @pytest.mark.asyncio
    async def test_missing_label(self, service: LabelService, uow: FakeUnitOfWork, user_id: UUID):
        uow.labels.get.return_value = None

        with pytest.raises(LabelNotFoundError):
            await service.delete_label(uuid4(), user_id)


class TestListForTask:
    @pytest.mark.asyncio
    async def test_lists_labels(
        self,
        service: LabelService,
        uow: FakeUnitOfWork,
        task: Task,
        user_id: UUID,
        workspace_id: UUID,
    ):
        uow.grant(WorkspaceRole.MEMBER)
        labels = [Label(workspace_id=workspace_id, name="a", color="#000000", task_id=task.id)]
        uow.labels.get_for_task.return_value = labels

        assert await service.list_for_task(task.id, user_id) == labels
