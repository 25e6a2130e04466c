"""SQLAlchemy implementation of Activity repository."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.activity import ActivityEntry
from infrastructure.database.models import ActivityModel


class SQLAlchemyActivityRepository:
    """SQLAlchemy implementation of IActivityRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, entry: ActivityEntry) -> ActivityEntry:
        """Append a new activity entry."""
        model = self._to_model(entry)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def get(self, id: UUID) -> ActivityEntry | None:
        """Get an activity entry by ID."""
        model = await self._session.get(ActivityModel, id)
        return self._to_entity(model) if model else None

    async def get_for_task(self, task_id: UUID) -> list[ActivityEntry]:
        """Get the activity trail of a task, oldest first."""
        stmt = (
            select(ActivityModel)
            .where(ActivityModel.task_id == task_id)
            .order_by(ActivityModel.created_at)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def update_content(self, id: UUID, content: str) -> ActivityEntry | None:
        """Replace the content of an entry."""
        model = await self._session.get(ActivityModel, id)
        if not model:
            return None

        model.content = content
        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, id: UUID) -> bool:
        """Delete an entry."""
        model = await self._session.get(ActivityModel, id)
        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    def _to_entity(self, model: ActivityModel) -> ActivityEntry:
        """Convert ORM model to domain entity."""
        return ActivityEntry(
            id=model.id,
            task_id=model.task_id,
            user_id=model.user_id,
            type=model.type,
            content=model.content or "",
            created_at=model.created_at,
        )

    def _to_model(self, entity: ActivityEntry) -> ActivityModel:
        """Convert domain entity to ORM model."""
        return ActivityModel(
            id=entity.id,
            task_id=entity.task_id,
            user_id=entity.user_id,
            type=entity.type,
            content=entity.content,
            created_at=entity.created_at,
        )
