"""SQLAlchemy implementation of Task repository."""

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.task import Task
from infrastructure.database.models import TaskModel


class SQLAlchemyTaskRepository:
    """SQLAlchemy implementation of ITaskRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Task | None:
        """Get a task by ID."""
        model = await self._session.get(TaskModel, id)
        return self._to_entity(model) if model else None

    async def get_for_project(self, project_id: UUID) -> list[Task]:
        """Get all tasks of a project."""
        stmt = (
            select(TaskModel)
            .where(TaskModel.project_id == project_id)
            .order_by(TaskModel.position, TaskModel.number)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def get_max_number(self, project_id: UUID) -> int:
        """Get the highest task number used in a project (0 if none)."""
        stmt = select(func.max(TaskModel.number)).where(TaskModel.project_id == project_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() or 0

    async def create(self, task: Task) -> Task:
        """Create a new task."""
        model = self._to_model(task)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, task: Task) -> Task:
        """Update an existing task."""
        model = await self._session.get(TaskModel, task.id)

        if not model:
            raise ValueError(f"Task {task.id} not found")

        model.title = task.title
        model.description = task.description
        model.status = task.status
        model.priority = task.priority
        model.due_date = task.due_date
        model.assignee_id = task.assignee_id
        model.position = task.position

        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, id: UUID) -> bool:
        """Delete a task together with its activity and labels."""
        model = await self._session.get(TaskModel, id)

        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    def _to_entity(self, model: TaskModel) -> Task:
        """Convert ORM model to domain entity."""
        return Task(
            id=model.id,
            project_id=model.project_id,
            title=model.title,
            created_by=model.created_by,
            assignee_id=model.assignee_id,
            description=model.description or "",
            status=model.status,
            priority=model.priority,
            due_date=model.due_date,
            number=model.number,
            position=model.position,
            created_at=model.created_at,
        )

    def _to_model(self, entity: Task) -> TaskModel:
        """Convert domain entity to ORM model."""
        return TaskModel(
            id=entity.id,
            project_id=entity.project_id,
            title=entity.title,
            created_by=entity.created_by,
            assignee_id=entity.assignee_id,
            description=entity.description,
            status=entity.status,
            priority=entity.priority,
            due_date=entity.due_date,
            number=entity.number,
            position=entity.position,
            created_at=entity.created_at,
        )
