"""Role-based policy engine gating every task, comment and label mutation."""

from collections.abc import Awaitable, Callable
from enum import Enum, StrEnum
from uuid import UUID

import structlog

from core.exceptions import PermissionDeniedError, ProjectNotFoundError, TaskNotFoundError
from domain.entities.workspace import WorkspaceRole
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class Action(StrEnum):
    """The fixed set of actions a policy decision can be asked about."""

    READ = "read"
    CREATE = "create"
    MODIFY = "modify"
    COMMENT = "comment"
    ASSIGN_LABEL = "assign_label"


class Grant(Enum):
    """How a (role, action) pair is granted."""

    ALWAYS = "always"
    OWN_ONLY = "own_only"


# Every role may do everything inside its workspace, except that a
# teacher may only modify the tasks it created.
POLICY: dict[tuple[WorkspaceRole, Action], Grant] = {
    (role, action): Grant.ALWAYS for role in WorkspaceRole for action in Action
}
POLICY[(WorkspaceRole.TEACHER, Action.MODIFY)] = Grant.OWN_ONLY


def decide(role: WorkspaceRole | None, action: Action, *, is_creator: bool = False) -> bool:
    """Pure decision over the policy table.

    Args:
        role: The actor's role in the resource's workspace, None without one.
        action: The action being checked.
        is_creator: Whether the actor created the resource (tasks only).
    """
    if role is None:
        return False
    grant = POLICY.get((role, action))
    if grant is Grant.ALWAYS:
        return True
    if grant is Grant.OWN_ONLY:
        return is_creator
    return False


class PolicyEngine:
    """Resolves a resource to its workspace and evaluates the policy table.

    Never mutates state. A resource that does not exist raises a NotFound
    error; a denied check returns False (``require`` turns it into
    PermissionDeniedError).
    """

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def role_of(self, actor_id: UUID, workspace_id: UUID) -> WorkspaceRole | None:
        """Get the actor's role in a workspace, or None without a membership."""
        async with self._uow_factory() as uow:
            return await uow.resources.role_of(actor_id, workspace_id)

    async def can_read(self, actor_id: UUID, project_id: UUID) -> bool:
        """Any member of the project's workspace may read its tasks."""
        return await self._check_project(actor_id, Action.READ, project_id)

    async def can_create(self, actor_id: UUID, project_id: UUID) -> bool:
        """Any member of the project's workspace may create tasks in it."""
        return await self._check_project(actor_id, Action.CREATE, project_id)

    async def can_modify(self, actor_id: UUID, task_id: UUID) -> bool:
        """Members may modify any task; teachers only the tasks they created."""
        return await self._check_task(actor_id, Action.MODIFY, task_id)

    async def can_comment(self, actor_id: UUID, task_id: UUID) -> bool:
        """Any member of the task's workspace may comment on it."""
        return await self._check_task(actor_id, Action.COMMENT, task_id)

    async def can_assign_label(self, actor_id: UUID, task_id: UUID) -> bool:
        """Any member of the task's workspace may attach or detach labels."""
        return await self._check_task(actor_id, Action.ASSIGN_LABEL, task_id)

    async def check(self, actor_id: UUID, action: Action, resource_id: UUID) -> bool:
        """Dispatch to the named check for ``action``."""
        checks: dict[Action, Callable[[UUID, UUID], Awaitable[bool]]] = {
            Action.READ: self.can_read,
            Action.CREATE: self.can_create,
            Action.MODIFY: self.can_modify,
            Action.COMMENT: self.can_comment,
            Action.ASSIGN_LABEL: self.can_assign_label,
        }
        return await checks[action](actor_id, resource_id)

    async def require(
        self,
        actor_id: UUID,
        action: Action,
        resource_id: UUID,
        message: str | None = None,
    ) -> None:
        """Raise PermissionDeniedError unless ``check`` allows the action."""
        if not await self.check(actor_id, action, resource_id):
            logger.info(
                "permission_denied",
                actor_id=str(actor_id),
                action=action.value,
                resource_id=str(resource_id),
            )
            raise PermissionDeniedError(action.value, str(resource_id), message)

    async def require_member(self, actor_id: UUID, workspace_id: UUID) -> WorkspaceRole:
        """Raise PermissionDeniedError unless the actor holds any role in the workspace."""
        role = await self.role_of(actor_id, workspace_id)
        if role is None:
            raise PermissionDeniedError(
                "access",
                str(workspace_id),
                "You are not a member of this workspace",
            )
        return role

    async def _check_project(self, actor_id: UUID, action: Action, project_id: UUID) -> bool:
        async with self._uow_factory() as uow:
            workspace_id = await uow.resources.resolve_project_workspace(project_id)
            if workspace_id is None:
                raise ProjectNotFoundError(str(project_id))
            role = await uow.resources.role_of(actor_id, workspace_id)
        return decide(role, action)

    async def _check_task(self, actor_id: UUID, action: Action, task_id: UUID) -> bool:
        async with self._uow_factory() as uow:
            context = await uow.resources.resolve_task_context(task_id)
            if context is None:
                raise TaskNotFoundError(str(task_id))
            role = await uow.resources.role_of(actor_id, context.workspace_id)
        is_creator = context.creator_id is not None and context.creator_id == actor_id
        return decide(role, action, is_creator=is_creator)
