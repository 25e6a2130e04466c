"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"

    # Authorization errors (403)
    FORBIDDEN = "FORBIDDEN"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    NOT_COMMENT_AUTHOR = "NOT_COMMENT_AUTHOR"

    # Not found errors (404)
    TASK_NOT_FOUND = "TASK_NOT_FOUND"
    PROJECT_NOT_FOUND = "PROJECT_NOT_FOUND"
    LABEL_NOT_FOUND = "LABEL_NOT_FOUND"
    COMMENT_NOT_FOUND = "COMMENT_NOT_FOUND"
    WORKSPACE_NOT_FOUND = "WORKSPACE_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    LABEL_WORKSPACE_MISMATCH = "LABEL_WORKSPACE_MISMATCH"
    INVALID_ASSIGNEE = "INVALID_ASSIGNEE"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class NotFoundError(AppException):
    """A resource id did not resolve. Never retried."""

    def __init__(self, error_code: ErrorCode, message: str, details: Any | None = None) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=404,
            details=details,
        )


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class AuthorizationError(AppException):
    """Authorization failed."""

    def __init__(
        self,
        message: str = "Access denied",
        error_code: ErrorCode = ErrorCode.FORBIDDEN,
        details: Any | None = None,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=403,
            details=details,
        )


class PermissionDeniedError(AuthorizationError):
    """The actor's role does not allow the action on the resource."""

    def __init__(self, action: str, resource_id: str, message: str | None = None) -> None:
        super().__init__(
            message=message or f"You do not have permission to {action} this resource",
            error_code=ErrorCode.PERMISSION_DENIED,
            details={"action": action, "resource_id": resource_id},
        )


class NotCommentAuthorError(AuthorizationError):
    """Only the author of a comment may change it."""

    def __init__(self, comment_id: str) -> None:
        super().__init__(
            message="Only the author can change this comment",
            error_code=ErrorCode.NOT_COMMENT_AUTHOR,
            details={"comment_id": comment_id},
        )


class TaskNotFoundError(NotFoundError):
    """Task not found."""

    def __init__(self, task_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.TASK_NOT_FOUND,
            message=f"Task not found: {task_id}",
            details={"task_id": task_id},
        )


class ProjectNotFoundError(NotFoundError):
    """Project not found."""

    def __init__(self, project_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROJECT_NOT_FOUND,
            message=f"Project not found: {project_id}",
            details={"project_id": project_id},
        )


class LabelNotFoundError(NotFoundError):
    """Label not found."""

    def __init__(self, label_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.LABEL_NOT_FOUND,
            message=f"Label not found: {label_id}",
            details={"label_id": label_id},
        )


class CommentNotFoundError(NotFoundError):
    """Comment not found."""

    def __init__(self, comment_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.COMMENT_NOT_FOUND,
            message=f"Comment not found: {comment_id}",
            details={"comment_id": comment_id},
        )


class WorkspaceNotFoundError(NotFoundError):
    """Workspace not found."""

    def __init__(self, workspace_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.WORKSPACE_NOT_FOUND,
            message=f"Workspace not found: {workspace_id}",
            details={"workspace_id": workspace_id},
        )


class LabelWorkspaceMismatchError(AppException):
    """A label can only be attached to a task of its own workspace."""

    def __init__(self, task_id: str, workspace_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.LABEL_WORKSPACE_MISMATCH,
            message="Task does not belong to the label's workspace",
            status_code=400,
            details={"task_id": task_id, "workspace_id": workspace_id},
        )


class InvalidAssigneeError(AppException):
    """Tasks can only be assigned to members of their workspace."""

    def __init__(self, assignee_id: str, workspace_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.INVALID_ASSIGNEE,
            message="Assignee is not a member of the task's workspace",
            status_code=400,
            details={"assignee_id": assignee_id, "workspace_id": workspace_id},
        )
