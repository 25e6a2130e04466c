"""Resource resolver protocol.

The policy engine never decides on raw resource data: every check first
resolves the resource to its owning workspace through this contract.
"""

from typing import Protocol
from uuid import UUID

from domain.entities.task import TaskContext
from domain.entities.workspace import WorkspaceRole


class IResourceResolver(Protocol):
    """Read-only lookups consumed by the policy engine."""

    async def resolve_task_context(self, task_id: UUID) -> TaskContext | None:
        """Resolve task -> project -> workspace and task -> creator.

        Returns None if the task does not exist.
        """
        ...

    async def resolve_project_workspace(self, project_id: UUID) -> UUID | None:
        """Resolve a project to its workspace ID, or None if it does not exist."""
        ...

    async def role_of(self, user_id: UUID, workspace_id: UUID) -> WorkspaceRole | None:
        """Get the user's role in a workspace, or None without a membership."""
        ...
