"""Pydantic schemas for Task API."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class TaskCreate(BaseModel):
    """Schema for creating a Task."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field("", max_length=10000)
    status: str | None = Field(None, min_length=1, max_length=50)
    priority: str | None = Field(None, min_length=1, max_length=50)
    due_date: datetime | None = None
    assignee_id: UUID | None = None


class StatusUpdate(BaseModel):
    status: str = Field(..., min_length=1, max_length=50)


class PriorityUpdate(BaseModel):
    priority: str = Field(..., min_length=1, max_length=50)


class AssigneeUpdate(BaseModel):
    """``assignee_id: null`` unassigns the task."""

    assignee_id: UUID | None = None


class DueDateUpdate(BaseModel):
    due_date: datetime


class TitleUpdate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)


class DescriptionUpdate(BaseModel):
    description: str = Field(..., max_length=10000)


class TaskResponse(BaseModel):
    """Schema for Task response."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "project_id": "223e4567-e89b-12d3-a456-426614174000",
                "number": 4,
                "title": "Grade the midterm essays",
                "description": "",
                "status": "in-progress",
                "priority": "high",
                "due_date": "2026-03-05T00:00:00",
                "assignee_id": None,
                "created_by": "323e4567-e89b-12d3-a456-426614174000",
                "position": 0,
                "created_at": "2026-01-28T10:00:00",
            }
        },
    )

    id: UUID
    project_id: UUID
    number: int
    title: str
    description: str
    status: str
    priority: str
    due_date: datetime | None
    assignee_id: UUID | None
    created_by: UUID | None
    position: int
    created_at: datetime


class TaskDetailResponse(BaseModel):
    data: TaskResponse


class TaskListResponse(BaseModel):
    data: list[TaskResponse]
    meta: dict[str, Any] = Field(default_factory=dict)
