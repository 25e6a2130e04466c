"""Activity entry domain entity, activity types and event topics."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

# --- Event Topics ---
# Format: {entity_type}.{change}


class Topics:
    """Event bus topics published by the task mutators."""

    TASK_CREATED = "task.created"
    TASK_STATUS_CHANGED = "task.status_changed"
    TASK_PRIORITY_CHANGED = "task.priority_changed"
    TASK_ASSIGNEE_CHANGED = "task.assignee_changed"
    TASK_UNASSIGNED = "task.unassigned"
    TASK_DUE_DATE_CHANGED = "task.due_date_changed"
    TASK_TITLE_CHANGED = "task.title_changed"
    TASK_DESCRIPTION_CHANGED = "task.description_changed"


class ActivityTypes:
    """Values stored in ActivityEntry.type."""

    CREATE = "create"
    STATUS_CHANGED = "status_changed"
    PRIORITY_CHANGED = "priority_changed"
    ASSIGNEE_CHANGED = "assignee_changed"
    UNASSIGNED = "unassigned"
    DUE_DATE_CHANGED = "due_date_changed"
    TITLE_CHANGED = "title_changed"
    DESCRIPTION_CHANGED = "description_changed"
    COMMENT = "comment"


@dataclass
class ActivityEntry:
    """Domain entity for one line of a task's activity trail."""

    task_id: UUID
    user_id: UUID
    type: str
    content: str
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def is_comment(self) -> bool:
        return self.type == ActivityTypes.COMMENT
