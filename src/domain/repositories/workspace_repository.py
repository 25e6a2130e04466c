"""Workspace repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.workspace import Workspace, WorkspaceMember


class IWorkspaceRepository(Protocol):
    """Repository interface for Workspace entities and memberships."""

    async def get(self, id: UUID) -> Workspace | None:
        """Get a workspace by ID."""
        ...

    async def create(self, workspace: Workspace) -> Workspace:
        """Create a new workspace. Provisioning only; no route calls it."""
        ...

    async def get_member(self, workspace_id: UUID, user_id: UUID) -> WorkspaceMember | None:
        """Get a membership. Unknown stored roles yield None."""
        ...

    async def add_member(self, member: WorkspaceMember) -> WorkspaceMember:
        """Add a member to a workspace. Provisioning only; no route calls it."""
        ...
