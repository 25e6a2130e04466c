"""Profile repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.profile import Profile


class IProfileRepository(Protocol):
    """Repository interface for user profiles."""

    async def get(self, id: UUID) -> Profile | None:
        """Get a profile by user ID."""
        ...
