"""SQLAlchemy Unit of Work implementation."""

from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from infrastructure.database.repositories.sqlalchemy_activity_repo import SQLAlchemyActivityRepository
from infrastructure.database.repositories.sqlalchemy_label_repo import SQLAlchemyLabelRepository
from infrastructure.database.repositories.sqlalchemy_profile_repo import SQLAlchemyProfileRepository
from infrastructure.database.repositories.sqlalchemy_project_repo import SQLAlchemyProjectRepository
from infrastructure.database.repositories.sqlalchemy_resource_resolver import SQLAlchemyResourceResolver
from infrastructure.database.repositories.sqlalchemy_task_repo import SQLAlchemyTaskRepository
from infrastructure.database.repositories.sqlalchemy_workspace_repo import SQLAlchemyWorkspaceRepository


class SQLAlchemyUnitOfWork:
    """Unit of Work implementation using SQLAlchemy.

    Every repository handed out shares the session opened on ``__aenter__``.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: Optional[AsyncSession] = None

    @property
    def session(self) -> AsyncSession:
        if not self._session:
            raise RuntimeError("UnitOfWork not initialized. Use as context manager.")
        return self._session

    @property
    def tasks(self) -> SQLAlchemyTaskRepository:
        return SQLAlchemyTaskRepository(self.session)

    @property
    def projects(self) -> SQLAlchemyProjectRepository:
        return SQLAlchemyProjectRepository(self.session)

    @property
    def activities(self) -> SQLAlchemyActivityRepository:
        return SQLAlchemyActivityRepository(self.session)

    @property
    def labels(self) -> SQLAlchemyLabelRepository:
        return SQLAlchemyLabelRepository(self.session)

    @property
    def workspaces(self) -> SQLAlchemyWorkspaceRepository:
        return SQLAlchemyWorkspaceRepository(self.session)

    @property
    def profiles(self) -> SQLAlchemyProfileRepository:
        return SQLAlchemyProfileRepository(self.session)

    @property
    def resources(self) -> SQLAlchemyResourceResolver:
        """Read-only lookups used by the policy engine."""
        return SQLAlchemyResourceResolver(self.session)

    async def commit(self) -> None:
        """Commit the current transaction."""
        if self._session:
            await self._session.commit()

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        if self._session:
            await self._session.rollback()

    async def __aenter__(self) -> "SQLAlchemyUnitOfWork":
        self._session = self._session_factory()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[Exception],
        exc_tb: Any,
    ) -> None:
        if self._session:
            if exc_type:
                await self.rollback()
            await self._session.close()
            self._session = None
