"""Task and label domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

DEFAULT_STATUS = "to-do"
DEFAULT_PRIORITY = "low"


@dataclass
class Task:
    """Domain entity for a Task inside a project."""

    project_id: UUID
    title: str
    id: UUID = field(default_factory=uuid4)
    created_by: UUID | None = None
    assignee_id: UUID | None = None
    description: str = ""
    status: str = DEFAULT_STATUS
    priority: str = DEFAULT_PRIORITY
    due_date: datetime | None = None
    number: int = 1
    position: int = 0
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass(frozen=True)
class TaskContext:
    """What the policy engine needs to know about a task."""

    task_id: UUID
    workspace_id: UUID
    creator_id: UUID | None


@dataclass
class Label:
    """Domain entity for a Label.

    A label with a task_id is attached to that task; without one it is a
    workspace-level label.
    """

    workspace_id: UUID
    name: str
    color: str
    id: UUID = field(default_factory=uuid4)
    task_id: UUID | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
