"""Activity service layer: task activity feed and comments."""

from collections.abc import Callable
from uuid import UUID

import structlog

from core.exceptions import CommentNotFoundError, NotCommentAuthorError, TaskNotFoundError
from domain.entities.activity import ActivityEntry, ActivityTypes
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.policy_engine import Action, PolicyEngine

logger = structlog.get_logger()


class ActivityService:
    """Service layer for reading activity and writing comments.

    Comments are written synchronously, not through the event bus. Editing
    and deleting a comment is gated by authorship alone: workspace roles do
    not grant access to someone else's comment.
    """

    def __init__(self, uow_factory: Callable[[], IUnitOfWork], policy: PolicyEngine) -> None:
        self._uow_factory = uow_factory
        self._policy = policy

    async def get_task_activity(self, task_id: UUID, actor_id: UUID) -> list[ActivityEntry]:
        """Get the activity trail of a task, oldest first.

        Requires read access to the task's project.
        """
        async with self._uow_factory() as uow:
            task = await uow.tasks.get(task_id)
            if not task:
                raise TaskNotFoundError(str(task_id))

        await self._policy.require(
            actor_id,
            Action.READ,
            task.project_id,
            "You do not have permission to view this task",
        )

        async with self._uow_factory() as uow:
            return await uow.activities.get_for_task(task_id)

    async def create_comment(self, task_id: UUID, actor_id: UUID, content: str) -> ActivityEntry:
        """Add a comment to a task. Requires comment access."""
        await self._policy.require(
            actor_id,
            Action.COMMENT,
            task_id,
            "You do not have permission to comment on this task",
        )

        async with self._uow_factory() as uow:
            created = await uow.activities.create(
                ActivityEntry(
                    task_id=task_id,
                    user_id=actor_id,
                    type=ActivityTypes.COMMENT,
                    content=content,
                )
            )
            await uow.commit()

        logger.info("comment_created", task_id=str(task_id), comment_id=str(created.id))
        return created

    async def update_comment(self, comment_id: UUID, actor_id: UUID, content: str) -> ActivityEntry:
        """Edit a comment. Only its author may do so."""
        async with self._uow_factory() as uow:
            await self._get_own_comment(uow, comment_id, actor_id)
            updated = await uow.activities.update_content(comment_id, content)
            if not updated:
                raise CommentNotFoundError(str(comment_id))
            await uow.commit()
            return updated

    async def delete_comment(self, comment_id: UUID, actor_id: UUID) -> None:
        """Delete a comment. Only its author may do so."""
        async with self._uow_factory() as uow:
            await self._get_own_comment(uow, comment_id, actor_id)
            if not await uow.activities.delete(comment_id):
                raise CommentNotFoundError(str(comment_id))
            await uow.commit()

        logger.info("comment_deleted", comment_id=str(comment_id))

    @staticmethod
    async def _get_own_comment(
        uow: IUnitOfWork, comment_id: UUID, actor_id: UUID
    ) -> ActivityEntry:
        entry = await uow.activities.get(comment_id)
        # Generated activity entries are not comments and cannot be edited.
        if not entry or not entry.is_comment:
            raise CommentNotFoundError(str(comment_id))
        if entry.user_id != actor_id:
            raise NotCommentAuthorError(str(comment_id))
        return entry
