"""Pydantic schemas for Label API."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class LabelCreate(BaseModel):
    """Schema for creating a Label. Set ``task_id`` to attach it to a task."""

    workspace_id: UUID
    name: str = Field(..., min_length=1, max_length=50)
    color: str = Field(..., pattern=r"^#[0-9A-Fa-f]{6}$")
    task_id: UUID | None = None


class LabelResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    workspace_id: UUID
    task_id: UUID | None
    name: str
    color: str
    created_at: datetime


class LabelDetailResponse(BaseModel):
    data: LabelResponse


class LabelListResponse(BaseModel):
    data: list[LabelResponse]
    meta: dict[str, Any] = Field(default_factory=dict)
