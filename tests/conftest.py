"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator
from dataclasses import dataclass
from pathlib import Path
from typing import Callable
from uuid import UUID, uuid4

# Disable rate limiting in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.entities.workspace import Project, Workspace, WorkspaceMember, WorkspaceRole
from domain.services.event_bus import EventBus
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser
from infrastructure.database.models import Base, ProfileModel
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


@pytest.fixture
async def engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """A fresh SQLite database file per test, with all tables created."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def uow_factory(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[[], SQLAlchemyUnitOfWork]:
    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    return factory


@dataclass
class Tenant:
    """One workspace with a project and a user per role, plus an outsider."""

    workspace_id: UUID
    project_id: UUID
    owner: TokenUser
    member: TokenUser
    teacher: TokenUser
    second_teacher: TokenUser
    outsider: TokenUser


def _user(name: str) -> TokenUser:
    return TokenUser(id=uuid4(), email=f"{name}@example.com", display_name=name.title())


@pytest.fixture
async def tenant(
    session_factory: async_sessionmaker[AsyncSession],
    uow_factory: Callable[[], SQLAlchemyUnitOfWork],
) -> Tenant:
    """Seed a workspace where owner, member and teacher each hold a role."""
    owner, member, teacher, second_teacher, outsider = (
        _user(name) for name in ("olivia", "mateo", "tanja", "tomas", "oscar")
    )
    async with session_factory() as session:
        for user in (owner, member, teacher, second_teacher, outsider):
            session.add(
                ProfileModel(id=user.id, email=user.email, display_name=user.display_name)
            )
        await session.commit()

    async with uow_factory() as uow:
        workspace = await uow.workspaces.create(Workspace(name="Class 7b", slug="class-7b"))
        project = await uow.projects.create(
            Project(workspace_id=workspace.id, name="Homework", slug="homework")
        )
        for user, role in (
            (owner, WorkspaceRole.OWNER),
            (member, WorkspaceRole.MEMBER),
            (teacher, WorkspaceRole.TEACHER),
            (second_teacher, WorkspaceRole.TEACHER),
        ):
            await uow.workspaces.add_member(
                WorkspaceMember(workspace_id=workspace.id, user_id=user.id, role=role)
            )
        await uow.commit()

    return Tenant(
        workspace_id=workspace.id,
        project_id=project.id,
        owner=owner,
        member=member,
        teacher=teacher,
        second_teacher=second_teacher,
        outsider=outsider,
    )


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    return JWTAuthProvider(
        secret_key="test-secret-key",
        algorithm="HS256",
        expire_minutes=30,
    )


@pytest.fixture
def auth_headers(auth_provider: JWTAuthProvider) -> Callable[[TokenUser], dict[str, str]]:
    """Build bearer headers for any user."""

    def build(user: TokenUser) -> dict[str, str]:
        return {"Authorization": f"Bearer {auth_provider.create_token(user)}"}

    return build


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client against the module-level app (no database)."""
    from main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def event_bus(uow_factory: Callable[[], SQLAlchemyUnitOfWork]) -> EventBus:
    from main import build_event_bus

    return build_event_bus(uow_factory)


@pytest.fixture
async def api_client(
    uow_factory: Callable[[], SQLAlchemyUnitOfWork],
    auth_provider: JWTAuthProvider,
    event_bus: EventBus,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Test client wired to the per-test database.

    - Overrides the UoW factory so every service uses the test database
    - Overrides the auth provider so tokens from ``auth_headers`` validate
    - Installs the event bus directly (ASGITransport does not run lifespan)
    """
    from api.dependencies.auth import get_auth_provider
    from api.v1.dependencies import get_uow_factory
    from main import create_app

    app = create_app()
    app.state.event_bus = event_bus
    app.dependency_overrides[get_uow_factory] = lambda: uow_factory
    app.dependency_overrides[get_auth_provider] = lambda: auth_provider

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    await event_bus.drain(timeout=5)
    app.dependency_overrides.clear()
