"""SQLAlchemy implementation of Workspace repository."""

from uuid import UUID

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.workspace import Workspace, WorkspaceMember, parse_role
from infrastructure.database.models import WorkspaceMemberModel, WorkspaceModel

logger = structlog.get_logger()


class SQLAlchemyWorkspaceRepository:
    """SQLAlchemy implementation of IWorkspaceRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Workspace | None:
        """Get a workspace by ID."""
        model = await self._session.get(WorkspaceModel, id)
        return self._to_entity(model) if model else None

    async def create(self, workspace: Workspace) -> Workspace:
        """Create a new workspace."""
        model = WorkspaceModel(
            id=workspace.id,
            name=workspace.name,
            slug=workspace.slug,
            description=workspace.description,
            created_at=workspace.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def get_member(self, workspace_id: UUID, user_id: UUID) -> WorkspaceMember | None:
        """Get a specific membership."""
        stmt = select(WorkspaceMemberModel).where(
            WorkspaceMemberModel.workspace_id == workspace_id,
            WorkspaceMemberModel.user_id == user_id,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if not model:
            return None

        role = parse_role(model.role)
        if role is None:
            logger.warning(
                "unknown_workspace_role",
                workspace_id=str(workspace_id),
                user_id=str(user_id),
                role=model.role,
            )
            return None

        return WorkspaceMember(
            workspace_id=model.workspace_id,
            user_id=model.user_id,
            role=role,
            joined_at=model.joined_at,
        )

    async def add_member(self, member: WorkspaceMember) -> WorkspaceMember:
        """Add a member to a workspace."""
        model = WorkspaceMemberModel(
            workspace_id=member.workspace_id,
            user_id=member.user_id,
            role=member.role.value,
            joined_at=member.joined_at,
        )
        self._session.add(model)
        await self._session.flush()
        return member

    def _to_entity(self, model: WorkspaceModel) -> Workspace:
        """Convert ORM model to domain entity."""
        return Workspace(
            id=model.id,
            name=model.name,
            slug=model.slug,
            description=model.description,
            created_at=model.created_at,
        )
