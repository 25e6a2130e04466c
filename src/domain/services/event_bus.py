"""In-process publish/subscribe bus for domain events.

Mutators publish after their write has committed. Each subscribed handler
runs as its own asyncio task, so ``publish`` returns as soon as the
handlers are scheduled. A failing handler is logged and never reaches
the publisher or the other handlers of the same event.
"""

import asyncio
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

import structlog

logger = structlog.get_logger()

EventPayload = dict[str, Any]
EventHandler = Callable[[EventPayload], Awaitable[None]]


def _handler_name(handler: EventHandler) -> str:
    return getattr(handler, "__qualname__", None) or repr(handler)


class EventBus:
    """Topic -> handlers register, built once at startup and injected.

    Subscriptions are only accepted until ``seal`` is called; after that
    the register is read-only.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = {}
        self._pending: set[asyncio.Task[None]] = set()
        self._sealed = False

    @property
    def sealed(self) -> bool:
        return self._sealed

    @property
    def pending(self) -> int:
        """Number of handler tasks that have not finished yet."""
        return len(self._pending)

    def subscribe(self, topic: str, handler: EventHandler) -> None:
        """Register ``handler`` for ``topic``. Handlers run in registration order."""
        if self._sealed:
            raise RuntimeError(f"EventBus is sealed; cannot subscribe to {topic!r}")
        self._handlers.setdefault(topic, []).append(handler)
        logger.debug("event_handler_subscribed", topic=topic, handler=_handler_name(handler))

    def seal(self) -> None:
        """Stop accepting subscriptions."""
        self._sealed = True

    def topics(self) -> list[str]:
        return sorted(self._handlers)

    def handler_count(self, topic: str) -> int:
        return len(self._handlers.get(topic, ()))

    def publish(self, topic: str, payload: Mapping[str, Any]) -> None:
        """Schedule every handler of ``topic`` and return without awaiting them.

        Each handler receives its own shallow copy of the payload.

        Raises:
            RuntimeError: If called outside a running event loop.
        """
        handlers = self._handlers.get(topic)
        if not handlers:
            logger.debug("event_without_subscribers", topic=topic)
            return

        loop = asyncio.get_running_loop()
        for handler in handlers:
            task = loop.create_task(self._run(topic, handler, dict(payload)))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)

    async def drain(self, timeout: float | None = None) -> int:
        """Wait for in-flight handlers, including ones scheduled meanwhile.

        Args:
            timeout: Seconds to wait in total; None waits indefinitely.

        Returns:
            The number of handler tasks still running when the wait ended.
        """
        loop = asyncio.get_running_loop()
        deadline = None if timeout is None else loop.time() + timeout

        while self._pending:
            remaining = None if deadline is None else deadline - loop.time()
            if remaining is not None and remaining <= 0:
                break
            await asyncio.wait(set(self._pending), timeout=remaining)

        abandoned = len(self._pending)
        if abandoned:
            logger.warning("event_bus_drain_timeout", abandoned=abandoned)
        else:
            logger.info("event_bus_drained")
        return abandoned

    async def _run(self, topic: str, handler: EventHandler, payload: EventPayload) -> None:
        try:
            await handler(payload)
        except Exception:
            logger.exception(
                "event_handler_failed",
                topic=topic,
                handler=_handler_name(handler),
                task_id=str(payload.get("taskId")),
            )
