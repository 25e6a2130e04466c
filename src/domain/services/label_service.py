"""Label service layer."""

from collections.abc import Callable
from uuid import UUID

from core.exceptions import (
    LabelNotFoundError,
    LabelWorkspaceMismatchError,
    TaskNotFoundError,
    WorkspaceNotFoundError,
)
from domain.entities.task import Label
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.policy_engine import Action, PolicyEngine


class LabelService:
    """Service layer for workspace labels and task labels."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork], policy: PolicyEngine) -> None:
        self._uow_factory = uow_factory
        self._policy = policy

    async def list_for_task(self, task_id: UUID, actor_id: UUID) -> list[Label]:
        """Get the labels attached to a task. Requires read access."""
        async with self._uow_factory() as uow:
            task = await uow.tasks.get(task_id)
            if not task:
                raise TaskNotFoundError(str(task_id))

        await self._policy.require(actor_id, Action.READ, task.project_id)

        async with self._uow_factory() as uow:
            return await uow.labels.get_for_task(task_id)

    async def create_label(
        self,
        actor_id: UUID,
        workspace_id: UUID,
        name: str,
        color: str,
        task_id: UUID | None = None,
    ) -> Label:
        """Create a label, attached to ``task_id`` when given.

        Attaching needs assign-label access on the task, and the task must
        live in ``workspace_id``. A workspace label needs an existing workspace
        and membership in it.
        """
        if task_id is not None:
            await self._policy.require(
                actor_id,
                Action.ASSIGN_LABEL,
                task_id,
                "You do not have permission to assign labels to this task",
            )
            async with self._uow_factory() as uow:
                task_workspace_id = await self._task_workspace(uow, task_id)
            if task_workspace_id != workspace_id:
                raise LabelWorkspaceMismatchError(str(task_id), str(workspace_id))
        else:
            async with self._uow_factory() as uow:
                if not await uow.workspaces.get(workspace_id):
                    raise WorkspaceNotFoundError(str(workspace_id))
            await self._policy.require_member(actor_id, workspace_id)

        async with self._uow_factory() as uow:
            created = await uow.labels.create(
                Label(workspace_id=workspace_id, name=name, color=color, task_id=task_id)
            )
            await uow.commit()
            return created

    async def delete_label(self, label_id: UUID, actor_id: UUID) -> Label:
        """Delete a label, with the same rule that governs creating it."""
        async with self._uow_factory() as uow:
            label = await uow.labels.get(label_id)
            if not label:
                raise LabelNotFoundError(str(label_id))

        if label.task_id is not None:
            await self._policy.require(
                actor_id,
                Action.ASSIGN_LABEL,
                label.task_id,
                "You do not have permission to remove labels from this task",
            )
        else:
            await self._policy.require_member(actor_id, label.workspace_id)

        async with self._uow_factory() as uow:
            if not await uow.labels.delete(label_id):
                raise LabelNotFoundError(str(label_id))
            await uow.commit()

        return label

    @staticmethod
    async def _task_workspace(uow: IUnitOfWork, task_id: UUID) -> UUID:
        context = await uow.resources.resolve_task_context(task_id)
        if context is None:
            raise TaskNotFoundError(str(task_id))
        return context.workspace_id
