"""Task service layer: authorize, write, then publish."""

from collections.abc import Callable
from datetime import datetime
from typing import Any
from uuid import UUID

from core.exceptions import InvalidAssigneeError, ProjectNotFoundError, TaskNotFoundError
from domain.entities.activity import ActivityTypes, Topics
from domain.entities.task import DEFAULT_PRIORITY, DEFAULT_STATUS, Task
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.event_bus import EventBus
from domain.services.policy_engine import Action, PolicyEngine

MODIFY_DENIED = "You do not have permission to modify this task"


class TaskService:
    """Service layer for Task business logic.

    Every mutation runs the policy check before opening its write
    transaction and publishes its event only after the commit.
    """

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        policy: PolicyEngine,
        events: EventBus,
    ) -> None:
        self._uow_factory = uow_factory
        self._policy = policy
        self._events = events

    async def list_tasks(self, project_id: UUID, actor_id: UUID) -> list[Task]:
        """Get all tasks of a project. Requires read access."""
        await self._policy.require(
            actor_id,
            Action.READ,
            project_id,
            "You do not have permission to view tasks in this project",
        )
        async with self._uow_factory() as uow:
            return await uow.tasks.get_for_project(project_id)

    async def get_task(self, task_id: UUID, actor_id: UUID) -> Task:
        """Get a single task. Requires read access to its project."""
        async with self._uow_factory() as uow:
            task = await self._get_task(uow, task_id)
        await self._policy.require(
            actor_id,
            Action.READ,
            task.project_id,
            "You do not have permission to view this task",
        )
        return task

    async def create_task(
        self,
        project_id: UUID,
        actor_id: UUID,
        title: str,
        description: str = "",
        status: str | None = None,
        priority: str | None = None,
        due_date: datetime | None = None,
        assignee_id: UUID | None = None,
    ) -> Task:
        """Create a task in a project. Requires create access."""
        await self._policy.require(
            actor_id,
            Action.CREATE,
            project_id,
            "You do not have permission to create tasks in this project",
        )

        async with self._uow_factory() as uow:
            if assignee_id is not None:
                project = await uow.projects.get(project_id)
                if not project:
                    raise ProjectNotFoundError(str(project_id))
                await self._check_assignee(uow, assignee_id, project.workspace_id)

            number = await uow.tasks.get_max_number(project_id) + 1
            task = Task(
                project_id=project_id,
                title=title,
                description=description or "",
                status=status or DEFAULT_STATUS,
                priority=priority or DEFAULT_PRIORITY,
                due_date=due_date,
                assignee_id=assignee_id,
                created_by=actor_id,
                number=number,
            )
            created = await uow.tasks.create(task)
            await uow.commit()

        self._publish(
            Topics.TASK_CREATED,
            created,
            actor_id,
            type=ActivityTypes.CREATE,
            content="created the task",
        )
        return created

    async def update_status(self, task_id: UUID, actor_id: UUID, status: str) -> Task:
        """Change a task's status."""
        await self._policy.require(actor_id, Action.MODIFY, task_id, MODIFY_DENIED)

        async with self._uow_factory() as uow:
            task = await self._get_task(uow, task_id)
            old_status = task.status
            task.status = status
            updated = await uow.tasks.update(task)
            await uow.commit()

        self._publish(
            Topics.TASK_STATUS_CHANGED,
            updated,
            actor_id,
            type=ActivityTypes.STATUS_CHANGED,
            oldStatus=old_status,
            newStatus=updated.status,
        )
        return updated

    async def update_priority(self, task_id: UUID, actor_id: UUID, priority: str) -> Task:
        """Change a task's priority."""
        await self._policy.require(actor_id, Action.MODIFY, task_id, MODIFY_DENIED)

        async with self._uow_factory() as uow:
            task = await self._get_task(uow, task_id)
            old_priority = task.priority
            task.priority = priority
            updated = await uow.tasks.update(task)
            await uow.commit()

        self._publish(
            Topics.TASK_PRIORITY_CHANGED,
            updated,
            actor_id,
            type=ActivityTypes.PRIORITY_CHANGED,
            oldPriority=old_priority,
            newPriority=updated.priority,
        )
        return updated

    async def update_assignee(
        self, task_id: UUID, actor_id: UUID, assignee_id: UUID | None
    ) -> Task:
        """Assign a task to a user, or unassign it when ``assignee_id`` is None."""
        await self._policy.require(actor_id, Action.MODIFY, task_id, MODIFY_DENIED)

        async with self._uow_factory() as uow:
            task = await self._get_task(uow, task_id)
            if assignee_id is not None:
                context = await uow.resources.resolve_task_context(task_id)
                if context is None:
                    raise TaskNotFoundError(str(task_id))
                await self._check_assignee(uow, assignee_id, context.workspace_id)

            old_assignee = task.assignee_id
            task.assignee_id = assignee_id
            updated = await uow.tasks.update(task)

            assignee_name: str | None = None
            if assignee_id is not None:
                profile = await uow.profiles.get(assignee_id)
                assignee_name = profile.label if profile else str(assignee_id)

            await uow.commit()

        if assignee_id is None:
            self._publish(
                Topics.TASK_UNASSIGNED,
                updated,
                actor_id,
                type=ActivityTypes.UNASSIGNED,
                oldAssignee=old_assignee,
            )
        else:
            self._publish(
                Topics.TASK_ASSIGNEE_CHANGED,
                updated,
                actor_id,
                type=ActivityTypes.ASSIGNEE_CHANGED,
                oldAssignee=old_assignee,
                newAssignee=assignee_name,
            )
        return updated

    async def update_due_date(self, task_id: UUID, actor_id: UUID, due_date: datetime) -> Task:
        """Change a task's due date."""
        await self._policy.require(actor_id, Action.MODIFY, task_id, MODIFY_DENIED)

        async with self._uow_factory() as uow:
            task = await self._get_task(uow, task_id)
            old_due_date = task.due_date
            task.due_date = due_date
            updated = await uow.tasks.update(task)
            await uow.commit()

        self._publish(
            Topics.TASK_DUE_DATE_CHANGED,
            updated,
            actor_id,
            type=ActivityTypes.DUE_DATE_CHANGED,
            oldDueDate=old_due_date,
            newDueDate=due_date,
        )
        return updated

    async def update_title(self, task_id: UUID, actor_id: UUID, title: str) -> Task:
        """Rename a task."""
        await self._policy.require(actor_id, Action.MODIFY, task_id, MODIFY_DENIED)

        async with self._uow_factory() as uow:
            task = await self._get_task(uow, task_id)
            old_title = task.title
            task.title = title
            updated = await uow.tasks.update(task)
            await uow.commit()

        self._publish(
            Topics.TASK_TITLE_CHANGED,
            updated,
            actor_id,
            type=ActivityTypes.TITLE_CHANGED,
            oldTitle=old_title,
            newTitle=updated.title,
        )
        return updated

    async def update_description(self, task_id: UUID, actor_id: UUID, description: str) -> Task:
        """Replace a task's description."""
        await self._policy.require(actor_id, Action.MODIFY, task_id, MODIFY_DENIED)

        async with self._uow_factory() as uow:
            task = await self._get_task(uow, task_id)
            task.description = description
            updated = await uow.tasks.update(task)
            await uow.commit()

        self._publish(
            Topics.TASK_DESCRIPTION_CHANGED,
            updated,
            actor_id,
            type=ActivityTypes.DESCRIPTION_CHANGED,
        )
        return updated

    async def delete_task(self, task_id: UUID, actor_id: UUID) -> Task:
        """Delete a task. Needs the same permission as modifying it.

        No event is published: the task's activity trail goes with it.
        """
        await self._policy.require(
            actor_id,
            Action.MODIFY,
            task_id,
            "You do not have permission to delete this task",
        )

        async with self._uow_factory() as uow:
            task = await self._get_task(uow, task_id)
            if not await uow.tasks.delete(task_id):
                raise TaskNotFoundError(str(task_id))
            await uow.commit()

        return task

    def _publish(self, topic: str, task: Task, actor_id: UUID, **fields: Any) -> None:
        self._events.publish(
            topic,
            {"taskId": task.id, "userId": actor_id, "title": task.title, **fields},
        )

    @staticmethod
    async def _get_task(uow: IUnitOfWork, task_id: UUID) -> Task:
        task = await uow.tasks.get(task_id)
        if not task:
            raise TaskNotFoundError(str(task_id))
        return task

    @staticmethod
    async def _check_assignee(uow: IUnitOfWork, assignee_id: UUID, workspace_id: UUID) -> None:
        if not await uow.workspaces.get_member(workspace_id, assignee_id):
            raise InvalidAssigneeError(str(assignee_id), str(workspace_id))
