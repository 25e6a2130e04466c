"""Pydantic schemas for the activity trail and comments."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class CommentCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=5000)


class CommentUpdate(BaseModel):
    content: str = Field(..., min_length=1, max_length=5000)


class ActivityEntryResponse(BaseModel):
    """One entry of a task's trail: a recorded change or a comment."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    task_id: UUID
    user_id: UUID
    type: str
    content: str
    created_at: datetime


class ActivityEntryDetailResponse(BaseModel):
    data: ActivityEntryResponse


class ActivityListResponse(BaseModel):
    data: list[ActivityEntryResponse]
    meta: dict[str, Any] = Field(default_factory=dict)
