"""Task repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.task import Task


class ITaskRepository(Protocol):
    """Repository interface for Task entities."""

    async def get(self, id: UUID) -> Task | None:
        """Get a task by ID."""
        ...

    async def get_for_project(self, project_id: UUID) -> list[Task]:
        """Get all tasks of a project, ordered by position then number."""
        ...

    async def get_max_number(self, project_id: UUID) -> int:
        """Get the highest task number used in a project (0 if none)."""
        ...

    async def create(self, task: Task) -> Task:
        """Create a new task."""
        ...

    async def update(self, task: Task) -> Task:
        """Update an existing task."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a task and return success status."""
        ...
