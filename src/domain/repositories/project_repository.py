"""Project repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.workspace import Project


class IProjectRepository(Protocol):
    """Repository interface for Project entities."""

    async def get(self, id: UUID) -> Project | None:
        """Get a project by ID."""
        ...

    async def create(self, project: Project) -> Project:
        """Create a new project. Provisioning only; no route calls it."""
        ...
