"""SQLAlchemy implementation of the resource resolver."""

from uuid import UUID

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.task import TaskContext
from domain.entities.workspace import WorkspaceRole, parse_role
from infrastructure.database.models import ProjectModel, TaskModel, WorkspaceMemberModel

logger = structlog.get_logger()


class SQLAlchemyResourceResolver:
    """Resolves tasks and projects to their owning workspace."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def resolve_task_context(self, task_id: UUID) -> TaskContext | None:
        stmt = (
            select(TaskModel.id, ProjectModel.workspace_id, TaskModel.created_by)
            .join(ProjectModel, TaskModel.project_id == ProjectModel.id)
            .where(TaskModel.id == task_id)
        )
        result = await self._session.execute(stmt)
        row = result.one_or_none()
        if row is None:
            return None

        return TaskContext(task_id=row.id, workspace_id=row.workspace_id, creator_id=row.created_by)

    async def resolve_project_workspace(self, project_id: UUID) -> UUID | None:
        stmt = select(ProjectModel.workspace_id).where(ProjectModel.id == project_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def role_of(self, user_id: UUID, workspace_id: UUID) -> WorkspaceRole | None:
        """Get the user's role in a workspace.

        A stored role outside the known set counts as no membership.
        """
        stmt = select(WorkspaceMemberModel.role).where(
            WorkspaceMemberModel.workspace_id == workspace_id,
            WorkspaceMemberModel.user_id == user_id,
        )
        result = await self._session.execute(stmt)
        raw = result.scalar_one_or_none()
        if raw is None:
            return None

        role = parse_role(raw)
        if role is None:
            logger.warning(
                "unknown_workspace_role",
                workspace_id=str(workspace_id),
                user_id=str(user_id),
                role=raw,
            )
        return role
