"""SQLAlchemy implementation of Project repository."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.workspace import Project
from infrastructure.database.models import ProjectModel


class SQLAlchemyProjectRepository:
    """SQLAlchemy implementation of IProjectRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Project | None:
        """Get a project by ID."""
        model = await self._session.get(ProjectModel, id)
        return self._to_entity(model) if model else None

    async def create(self, project: Project) -> Project:
        """Create a new project."""
        model = ProjectModel(
            id=project.id,
            workspace_id=project.workspace_id,
            name=project.name,
            slug=project.slug,
            description=project.description,
            created_at=project.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    def _to_entity(self, model: ProjectModel) -> Project:
        return Project(
            id=model.id,
            workspace_id=model.workspace_id,
            name=model.name,
            slug=model.slug,
            description=model.description,
            created_at=model.created_at,
        )
