"""Label API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_label_service
from api.v1.schemas.label import (
    LabelCreate,
    LabelDetailResponse,
    LabelListResponse,
    LabelResponse,
)
from core.rate_limit import limiter
from domain.services.label_service import LabelService

router = APIRouter(prefix="/labels", tags=["labels"])
task_labels_router = APIRouter(prefix="/tasks/{task_id}/labels", tags=["labels"])


@task_labels_router.get(
    "",
    response_model=LabelListResponse,
    summary="List the labels attached to a task",
    responses={
        403: {"description": "No role in the task's workspace"},
        404: {"description": "Task not found"},
    },
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_task_labels(
    request: Request,
    task_id: UUID,
    user: CurrentUser,
    service: LabelService = Depends(get_label_service),
) -> LabelListResponse:
    labels = await service.list_for_task(task_id, user.id)
    return LabelListResponse(
        data=[LabelResponse.model_validate(label) for label in labels],
        meta={"total": len(labels)},
    )


@router.post(
    "",
    response_model=LabelDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a label",
    responses={
        201: {"description": "Label created"},
        400: {"description": "Task belongs to another workspace"},
        403: {"description": "Not permitted"},
        404: {"description": "Task not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def create_label(
    request: Request,
    body: LabelCreate,
    user: CurrentUser,
    service: LabelService = Depends(get_label_service),
) -> LabelDetailResponse:
    """Create a workspace label, or attach a new label to ``task_id``."""
    label = await service.create_label(
        user.id,
        body.workspace_id,
        name=body.name,
        color=body.color,
        task_id=body.task_id,
    )
    return LabelDetailResponse(data=LabelResponse.model_validate(label))


@router.delete(
    "/{label_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a label",
    responses={
        204: {"description": "Label deleted"},
        403: {"description": "Not permitted"},
        404: {"description": "Label not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def delete_label(
    request: Request,
    label_id: UUID,
    user: CurrentUser,
    service: LabelService = Depends(get_label_service),
) -> None:
    await service.delete_label(label_id, user.id)
    return None
