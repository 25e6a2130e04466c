"""Unit tests for ActivityService (activity feed and comments)."""

from uuid import UUID, uuid4

import pytest

from core.exceptions import (
    CommentNotFoundError,
    NotCommentAuthorError,
    PermissionDeniedError,
    TaskNotFoundError,
)
from domain.entities.activity import ActivityEntry
from domain.entities.task import Task
from domain.entities.workspace import WorkspaceRole
from domain.services.activity_service import ActivityService
from domain.services.policy_engine import PolicyEngine
from tests.unit.conftest import FakeUnitOfWork


@pytest.fixture
def service(uow: FakeUnitOfWork) -> ActivityService:
    return ActivityService(lambda: uow, PolicyEngine(lambda: uow))


@pytest.fixture
def task(uow: FakeUnitOfWork, workspace_id: UUID, project_id: UUID) -> Task:
    task = Task(project_id=project_id, title="Lab report", created_by=uuid4())
    uow.place_task(task, workspace_id)
    return task


def _comment(task: Task, author_id: UUID) -> ActivityEntry:
    return ActivityEntry(task_id=task.id, user_id=author_id, type="comment", content="Nice")


# --- get_task_activity ---


class TestGetTaskActivity:
    @pytest.mark.asyncio
    async def test_returns_trail(
        self, service: ActivityService, uow: FakeUnitOfWork, task: Task, user_id: UUID
    ):
        uow.grant(WorkspaceRole.TEACHER)
        entries = [
            ActivityEntry(
                task_id=task.id, user_id=user_id, type="create", content="created the task"
            )
        ]
        uow.activities.get_for_task.return_value = entries

        assert await service.get_task_activity(task.id, user_id) == entries
        uow.activities.get_for_task.assert_awaited_once_with(task.id)

    @pytest.mark.asyncio
    async def test_outsider_denied(
        self, service: ActivityService, uow: FakeUnitOfWork, task: Task, user_id: UUID
    ):
        uow.grant(None)

        with pytest.raises(PermissionDeniedError):
            await service.get_task_activity(task.id, user_id)

    @pytest.mark.asyncio
    async def test_missing_task(self, service: ActivityService, uow: FakeUnitOfWork, user_id: UUID):
        uow.tasks.get.return_value = None

        with pytest.raises(TaskNotFoundError):
            await service.get_task_activity(uuid4(), user_id)


# --- create_comment ---


class TestCreateComment:
    @pytest.mark.asyncio
    async def test_teacher_comments_on_foreign_task(
        self, service: ActivityService, uow: FakeUnitOfWork, task: Task, user_id: UUID
    ):
        uow.grant(WorkspaceRole.TEACHER)
        uow.activities.create.side_effect = lambda entry: entry

        result = await service.create_comment(task.id, user_id, "Please add sources")

        assert result.type == "comment"
        assert result.user_id == user_id
        assert result.content == "Please add sources"
        assert uow.committed

    @pytest.mark.asyncio
    async def test_outsider_cannot_comment(
        self, service: ActivityService, uow: FakeUnitOfWork, task: Task, user_id: UUID
    ):
        uow.grant(None)

        with pytest.raises(PermissionDeniedError):
            await service.create_comment(task.id, user_id, "hi")

        uow.activities.create.assert_not_awaited()


# --- update_comment / delete_comment ---


class TestCommentOwnership:
    @pytest.mark.asyncio
    async def test_author_updates_comment(
        self, service: ActivityService, uow: FakeUnitOfWork, task: Task, user_id: UUID
    ):
        comment = _comment(task, user_id)
        uow.activities.get.return_value = comment
        uow.activities.update_content.return_value = ActivityEntry(
            task_id=task.id, user_id=user_id, type="comment", content="Edited", id=comment.id
        )

        result = await service.update_comment(comment.id, user_id, "Edited")

        assert result.content == "Edited"
        uow.activities.update_content.assert_awaited_once_with(comment.id, "Edited")
        assert uow.committed

    @pytest.mark.asyncio
    async def test_owner_role_cannot_edit_someone_elses_comment(
        self, service: ActivityService, uow: FakeUnitOfWork, task: Task, user_id: UUID
    ):
        uow.grant(WorkspaceRole.OWNER)
        comment = _comment(task, uuid4())
        uow.activities.get.return_value = comment

        with pytest.raises(NotCommentAuthorError):
            await service.update_comment(comment.id, user_id, "Edited")

        uow.activities.update_content.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_author_deletes_comment(
        self, service: ActivityService, uow: FakeUnitOfWork, task: Task, user_id: UUID
    ):
        comment = _comment(task, user_id)
        uow.activities.get.return_value = comment
        uow.activities.delete.return_value = True

        await service.delete_comment(comment.id, user_id)

        uow.activities.delete.assert_awaited_once_with(comment.id)
        assert uow.committed

    @pytest.mark.asyncio
    async def test_non_author_cannot_delete(
        self, service: ActivityService, uow: FakeUnitOfWork, task: Task, user_id: UUID
    ):
        comment = _comment(task, uuid4())
        uow.activities.get.return_value = comment

        with pytest.raises(NotCommentAuthorError):
            await service.delete_comment(comment.id, user_id)

        uow.activities.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_generated_entries_are_not_comments(
        self, service: ActivityService, uow: FakeUnitOfWork, task: Task, user_id: UUID
    ):
        uow.activities.get.return_value = ActivityEntry(
            task_id=task.id, user_id=user_id, type="status_changed", content="changed the status"
        )

        with pytest.raises(CommentNotFoundError):
            await service.delete_comment(uuid4(), user_id)

    @pytest.mark.asyncio
    async def test_missing_comment(
        self, service: ActivityService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.activities.get.return_value = None

        with pytest.raises(CommentNotFoundError):
            await service.update_comment(uuid4(), user_id, "x")
