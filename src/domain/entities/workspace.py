"""Workspace, membership and project domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID, uuid4


class WorkspaceRole(StrEnum):
    """Closed set of workspace roles.

    Roles are flat: every role may read, create, comment and label inside
    its workspace. TEACHER is the one restricted role and may only modify
    tasks it created.
    """

    OWNER = "owner"
    ADMIN = "admin"
    MEMBER = "member"
    TEACHER = "teacher"


def parse_role(value: str | None) -> WorkspaceRole | None:
    """Map a stored role string to a WorkspaceRole, or None if unrecognised."""
    if value is None:
        return None
    try:
        return WorkspaceRole(value.strip().lower())
    except ValueError:
        return None


@dataclass
class Workspace:
    """Domain entity for a Workspace (the tenant boundary)."""

    name: str
    id: UUID = field(default_factory=uuid4)
    slug: str | None = None
    description: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class WorkspaceMember:
    """Domain entity for a (user, workspace, role) binding."""

    workspace_id: UUID
    user_id: UUID
    role: WorkspaceRole = WorkspaceRole.MEMBER
    joined_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class Project:
    """Domain entity for a Project. Always owned by exactly one workspace."""

    workspace_id: UUID
    name: str
    slug: str
    id: UUID = field(default_factory=uuid4)
    description: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
