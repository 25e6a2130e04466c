"""Label repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.task import Label


class ILabelRepository(Protocol):
    """Repository interface for Label entities."""

    async def get(self, id: UUID) -> Label | None:
        """Get a label by ID."""
        ...

    async def get_for_task(self, task_id: UUID) -> list[Label]:
        """Get all labels attached to a task."""
        ...

    async def create(self, label: Label) -> Label:
        """Create a new label."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a label and return success status."""
        ...
