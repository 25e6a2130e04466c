"""SQLAlchemy implementation of Label repository."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.task import Label
from infrastructure.database.models import LabelModel


class SQLAlchemyLabelRepository:
    """SQLAlchemy implementation of ILabelRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Label | None:
        """Get a label by ID."""
        model = await self._session.get(LabelModel, id)
        return self._to_entity(model) if model else None

    async def get_for_task(self, task_id: UUID) -> list[Label]:
        """Get all labels attached to a task."""
        stmt = (
            select(LabelModel)
            .where(LabelModel.task_id == task_id)
            .order_by(LabelModel.created_at)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, label: Label) -> Label:
        """Create a new label."""
        model = LabelModel(
            id=label.id,
            workspace_id=label.workspace_id,
            task_id=label.task_id,
            name=label.name,
            color=label.color,
            created_at=label.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def delete(self, id: UUID) -> bool:
        """Delete a label."""
        model = await self._session.get(LabelModel, id)
        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    def _to_entity(self, model: LabelModel) -> Label:
        return Label(
            id=model.id,
            workspace_id=model.workspace_id,
            task_id=model.task_id,
            name=model.name,
            color=model.color,
            created_at=model.created_at,
        )
