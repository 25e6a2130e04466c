"""Activity trail and comment API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_activity_service
from api.v1.schemas.activity import (
    ActivityEntryDetailResponse,
    ActivityEntryResponse,
    ActivityListResponse,
    CommentCreate,
    CommentUpdate,
)
from core.rate_limit import limiter
from domain.services.activity_service import ActivityService

task_activity_router = APIRouter(prefix="/tasks/{task_id}", tags=["activity"])
comments_router = APIRouter(prefix="/comments", tags=["comments"])


@task_activity_router.get(
    "/activity",
    response_model=ActivityListResponse,
    summary="Get a task's activity trail",
    responses={
        200: {"description": "Recorded changes and comments, oldest first"},
        403: {"description": "No role in the task's workspace"},
        404: {"description": "Task not found"},
    },
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_task_activity(
    request: Request,
    task_id: UUID,
    user: CurrentUser,
    service: ActivityService = Depends(get_activity_service),
) -> ActivityListResponse:
    entries = await service.get_task_activity(task_id, user.id)
    return ActivityListResponse(
        data=[ActivityEntryResponse.model_validate(e) for e in entries],
        meta={"total": len(entries)},
    )


@task_activity_router.post(
    "/comments",
    response_model=ActivityEntryDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Comment on a task",
    responses={
        201: {"description": "Comment created"},
        403: {"description": "No role in the task's workspace"},
        404: {"description": "Task not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def create_comment(
    request: Request,
    task_id: UUID,
    body: CommentCreate,
    user: CurrentUser,
    service: ActivityService = Depends(get_activity_service),
) -> ActivityEntryDetailResponse:
    entry = await service.create_comment(task_id, user.id, body.content)
    return ActivityEntryDetailResponse(data=ActivityEntryResponse.model_validate(entry))


@comments_router.put(
    "/{comment_id}",
    response_model=ActivityEntryDetailResponse,
    summary="Edit a comment",
    responses={
        403: {"description": "Caller is not the comment's author"},
        404: {"description": "Comment not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_comment(
    request: Request,
    comment_id: UUID,
    body: CommentUpdate,
    user: CurrentUser,
    service: ActivityService = Depends(get_activity_service),
) -> ActivityEntryDetailResponse:
    """Edit a comment. Only its author may do this, whatever their role."""
    entry = await service.update_comment(comment_id, user.id, body.content)
    return ActivityEntryDetailResponse(data=ActivityEntryResponse.model_validate(entry))


@comments_router.delete(
    "/{comment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a comment",
    responses={
        204: {"description": "Comment deleted"},
        403: {"description": "Caller is not the comment's author"},
        404: {"description": "Comment not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def delete_comment(
    request: Request,
    comment_id: UUID,
    user: CurrentUser,
    service: ActivityService = Depends(get_activity_service),
) -> None:
    await service.delete_comment(comment_id, user.id)
    return None
