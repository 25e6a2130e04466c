"""Task API routes."""

from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_task_service
from api.v1.schemas.common import ErrorResponse
from api.v1.schemas.task import (
    AssigneeUpdate,
    DescriptionUpdate,
    DueDateUpdate,
    PriorityUpdate,
    StatusUpdate,
    TaskCreate,
    TaskDetailResponse,
    TaskListResponse,
    TaskResponse,
    TitleUpdate,
)
from core.rate_limit import limiter
from domain.entities.task import Task
from domain.services.task_service import TaskService

project_tasks_router = APIRouter(prefix="/projects/{project_id}/tasks", tags=["tasks"])
router = APIRouter(prefix="/tasks", tags=["tasks"])

_FORBIDDEN: dict[int | str, dict[str, Any]] = {
    403: {"model": ErrorResponse, "description": "Not permitted for the caller's role"}
}
_NOT_FOUND: dict[int | str, dict[str, Any]] = {
    404: {"model": ErrorResponse, "description": "Task not found"}
}
_BAD_ASSIGNEE: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Assignee is not a workspace member"}
}


def _detail(task: Task) -> TaskDetailResponse:
    return TaskDetailResponse(data=TaskResponse.model_validate(task))


@project_tasks_router.get(
    "",
    response_model=TaskListResponse,
    summary="List the tasks of a project",
    responses={**_FORBIDDEN, 404: {"description": "Project not found"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_tasks(
    request: Request,
    project_id: UUID,
    user: CurrentUser,
    service: TaskService = Depends(get_task_service),
) -> TaskListResponse:
    """Get every task of a project, ordered by position then number."""
    tasks = await service.list_tasks(project_id, user.id)
    return TaskListResponse(
        data=[TaskResponse.model_validate(t) for t in tasks],
        meta={"total": len(tasks)},
    )


@project_tasks_router.post(
    "",
    response_model=TaskDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a task",
    responses={
        201: {"description": "Task created successfully"},
        **_BAD_ASSIGNEE,
        **_FORBIDDEN,
        404: {"description": "Project not found"},
        422: {"description": "Validation error"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def create_task(
    request: Request,
    project_id: UUID,
    body: TaskCreate,
    user: CurrentUser,
    service: TaskService = Depends(get_task_service),
) -> TaskDetailResponse:
    """Create a task in a project. The caller becomes its creator."""
    task = await service.create_task(
        project_id,
        user.id,
        title=body.title,
        description=body.description,
        status=body.status,
        priority=body.priority,
        due_date=body.due_date,
        assignee_id=body.assignee_id,
    )
    return _detail(task)


@router.get(
    "/{task_id}",
    response_model=TaskDetailResponse,
    summary="Get a task",
    responses={**_FORBIDDEN, **_NOT_FOUND},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_task(
    request: Request,
    task_id: UUID,
    user: CurrentUser,
    service: TaskService = Depends(get_task_service),
) -> TaskDetailResponse:
    return _detail(await service.get_task(task_id, user.id))


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a task",
    responses={204: {"description": "Task deleted"}, **_FORBIDDEN, **_NOT_FOUND},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def delete_task(
    request: Request,
    task_id: UUID,
    user: CurrentUser,
    service: TaskService = Depends(get_task_service),
) -> None:
    """Delete a task along with its activity trail and labels."""
    await service.delete_task(task_id, user.id)
    return None


@router.put(
    "/{task_id}/status",
    response_model=TaskDetailResponse,
    summary="Change a task's status",
    responses={**_FORBIDDEN, **_NOT_FOUND},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_status(
    request: Request,
    task_id: UUID,
    body: StatusUpdate,
    user: CurrentUser,
    service: TaskService = Depends(get_task_service),
) -> TaskDetailResponse:
    return _detail(await service.update_status(task_id, user.id, body.status))


@router.put(
    "/{task_id}/priority",
    response_model=TaskDetailResponse,
    summary="Change a task's priority",
    responses={**_FORBIDDEN, **_NOT_FOUND},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_priority(
    request: Request,
    task_id: UUID,
    body: PriorityUpdate,
    user: CurrentUser,
    service: TaskService = Depends(get_task_service),
) -> TaskDetailResponse:
    return _detail(await service.update_priority(task_id, user.id, body.priority))


@router.put(
    "/{task_id}/assignee",
    response_model=TaskDetailResponse,
    summary="Assign or unassign a task",
    responses={**_BAD_ASSIGNEE, **_FORBIDDEN, **_NOT_FOUND},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_assignee(
    request: Request,
    task_id: UUID,
    body: AssigneeUpdate,
    user: CurrentUser,
    service: TaskService = Depends(get_task_service),
) -> TaskDetailResponse:
    """Set the assignee. A null ``assignee_id`` unassigns the task."""
    return _detail(await service.update_assignee(task_id, user.id, body.assignee_id))


@router.put(
    "/{task_id}/due-date",
    response_model=TaskDetailResponse,
    summary="Change a task's due date",
    responses={**_FORBIDDEN, **_NOT_FOUND},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_due_date(
    request: Request,
    task_id: UUID,
    body: DueDateUpdate,
    user: CurrentUser,
    service: TaskService = Depends(get_task_service),
) -> TaskDetailResponse:
    return _detail(await service.update_due_date(task_id, user.id, body.due_date))


@router.put(
    "/{task_id}/title",
    response_model=TaskDetailResponse,
    summary="Rename a task",
    responses={**_FORBIDDEN, **_NOT_FOUND},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_title(
    request: Request,
    task_id: UUID,
    body: TitleUpdate,
    user: CurrentUser,
    service: TaskService = Depends(get_task_service),
) -> TaskDetailResponse:
    return _detail(await service.update_title(task_id, user.id, body.title))


@router.put(
    "/{task_id}/description",
    response_model=TaskDetailResponse,
    summary="Change a task's description",
    responses={**_FORBIDDEN, **_NOT_FOUND},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_description(
    request: Request,
    task_id: UUID,
    body: DescriptionUpdate,
    user: CurrentUser,
    service: TaskService = Depends(get_task_service),
) -> TaskDetailResponse:
    return _detail(await service.update_description(task_id, user.id, body.description))
