"""Dependency injection factories for API v1.

Everything hangs off ``get_uow_factory`` so a single override swaps the
database for every service. The event bus is built once by the
application lifespan and read from ``app.state``.
"""

from typing import Callable

from fastapi import Depends, Request

from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.activity_service import ActivityService
from domain.services.event_bus import EventBus
from domain.services.label_service import LabelService
from domain.services.policy_engine import PolicyEngine
from domain.services.task_service import TaskService
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


def get_uow_factory() -> Callable[[], IUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


def get_event_bus(request: Request) -> EventBus:
    """The sealed bus created at startup."""
    return request.app.state.event_bus


def get_policy_engine(
    uow_factory: Callable[[], IUnitOfWork] = Depends(get_uow_factory),
) -> PolicyEngine:
    return PolicyEngine(uow_factory)


def get_task_service(
    uow_factory: Callable[[], IUnitOfWork] = Depends(get_uow_factory),
    policy: PolicyEngine = Depends(get_policy_engine),
    events: EventBus = Depends(get_event_bus),
) -> TaskService:
    """Get Task service instance."""
    return TaskService(uow_factory, policy, events)


def get_activity_service(
    uow_factory: Callable[[], IUnitOfWork] = Depends(get_uow_factory),
    policy: PolicyEngine = Depends(get_policy_engine),
) -> ActivityService:
    """Get Activity service instance."""
    return ActivityService(uow_factory, policy)


def get_label_service(
    uow_factory: Callable[[], IUnitOfWork] = Depends(get_uow_factory),
    policy: PolicyEngine = Depends(get_policy_engine),
) -> LabelService:
    """Get Label service instance."""
    return LabelService(uow_factory, policy)
