"""Turns task events into human-readable activity entries."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any
from uuid import UUID

import structlog

from domain.entities.activity import ActivityEntry, Topics
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.event_bus import EventBus, EventHandler, EventPayload

logger = structlog.get_logger()

# Every recorded event must carry these.
BASE_FIELDS = ("taskId", "userId", "type")


def to_normal_case(value: Any) -> str:
    """Render a slug-like value as words: ``in-progress`` -> ``In Progress``."""
    words = str(value).replace("-", " ").replace("_", " ").split()
    return " ".join(word[:1].upper() + word[1:].lower() for word in words)


def format_short_date(value: str | date | datetime) -> str:
    """Render a date as abbreviated month and day, e.g. ``Mar 5``.

    Raises:
        ValueError: If ``value`` is a string that is not an ISO date.
    """
    if isinstance(value, str):
        value = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    return f"{value:%b} {value.day}"


@dataclass(frozen=True)
class ActivityRule:
    """Required payload fields and sentence renderer for one topic."""

    required: tuple[str, ...]
    render: Callable[[EventPayload], str]


RULES: dict[str, ActivityRule] = {
    Topics.TASK_CREATED: ActivityRule(
        required=("content",),
        render=lambda p: str(p["content"]),
    ),
    Topics.TASK_STATUS_CHANGED: ActivityRule(
        required=("oldStatus", "newStatus"),
        render=lambda p: (
            f"changed the status from {to_normal_case(p['oldStatus'])}"
            f" to {to_normal_case(p['newStatus'])}"
        ),
    ),
    Topics.TASK_PRIORITY_CHANGED: ActivityRule(
        required=("oldPriority", "newPriority"),
        render=lambda p: f"changed the priority from {p['oldPriority']} to {p['newPriority']}",
    ),
    Topics.TASK_ASSIGNEE_CHANGED: ActivityRule(
        required=("newAssignee",),
        render=lambda p: f"assigned the task to {p['newAssignee']}",
    ),
    Topics.TASK_UNASSIGNED: ActivityRule(
        required=(),
        render=lambda p: "unassigned the task",
    ),
    Topics.TASK_DUE_DATE_CHANGED: ActivityRule(
        required=("newDueDate",),
        render=lambda p: f"changed the due date to {format_short_date(p['newDueDate'])}",
    ),
    Topics.TASK_TITLE_CHANGED: ActivityRule(
        required=("newTitle",),
        render=lambda p: f'changed the title to "{p["newTitle"]}"',
    ),
    Topics.TASK_DESCRIPTION_CHANGED: ActivityRule(
        required=(),
        render=lambda p: "updated the description",
    ),
}


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _coerce_id(value: Any) -> Any:
    # In-process publishers send UUIDs; string ids are parsed when possible.
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        return value


class ActivityRecorder:
    """Event bus subscriber that persists one ActivityEntry per event.

    The recorder trusts its events: authorization already happened in the
    mutator that published them. Events missing a required field are
    dropped without error.
    """

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def register(self, bus: EventBus) -> None:
        """Subscribe one handler per known topic."""
        for topic in RULES:
            bus.subscribe(topic, self._handler_for(topic))

    def _handler_for(self, topic: str) -> EventHandler:
        async def handle(payload: EventPayload) -> None:
            await self.record(topic, payload)

        handle.__qualname__ = f"ActivityRecorder.record[{topic}]"
        return handle

    async def record(self, topic: str, payload: EventPayload) -> ActivityEntry | None:
        """Validate, render and persist the entry for one event.

        Returns:
            The created entry, or None when the event was dropped.
        """
        rule = RULES.get(topic)
        if rule is None:
            logger.warning("activity_topic_unknown", topic=topic)
            return None

        missing = [name for name in (*BASE_FIELDS, *rule.required) if _is_blank(payload.get(name))]
        if missing:
            logger.debug("activity_event_dropped", topic=topic, missing=missing)
            return None

        try:
            content = rule.render(payload)
        except (AttributeError, TypeError, ValueError) as exc:
            logger.warning("activity_event_malformed", topic=topic, error=str(exc))
            return None

        entry = ActivityEntry(
            task_id=_coerce_id(payload["taskId"]),
            user_id=_coerce_id(payload["userId"]),
            type=str(payload["type"]),
            content=content,
        )

        async with self._uow_factory() as uow:
            created = await uow.activities.create(entry)
            await uow.commit()

        logger.info(
            "activity_recorded",
            topic=topic,
            task_id=str(entry.task_id),
            activity_id=str(created.id),
        )
        return created
