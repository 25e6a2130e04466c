"""Activity repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.activity import ActivityEntry


class IActivityRepository(Protocol):
    """Repository interface for ActivityEntry entities."""

    async def create(self, entry: ActivityEntry) -> ActivityEntry:
        """Append a new activity entry."""
        ...

    async def get(self, id: UUID) -> ActivityEntry | None:
        """Get an activity entry by ID."""
        ...

    async def get_for_task(self, task_id: UUID) -> list[ActivityEntry]:
        """Get the activity trail of a task, oldest first."""
        ...

    async def update_content(self, id: UUID, content: str) -> ActivityEntry | None:
        """Replace the content of an entry. Returns None if it does not exist."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete an entry and return success status."""
        ...
