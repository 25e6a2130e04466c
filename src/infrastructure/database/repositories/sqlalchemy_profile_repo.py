"""SQLAlchemy implementation of Profile repository."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.profile import Profile
from infrastructure.database.models import ProfileModel


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Profile | None:
        model = await self._session.get(ProfileModel, id)
        if not model:
            return None
        return Profile(
            id=model.id,
            email=model.email,
            display_name=model.display_name,
            created_at=model.created_at,
        )
