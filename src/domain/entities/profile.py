"""Profile domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass
class Profile:
    """Domain entity for a user profile."""

    id: UUID = field(default_factory=uuid4)
    email: str = ""
    display_name: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def label(self) -> str:
        """Name shown in activity sentences."""
        return self.display_name or self.email or str(self.id)
