"""Main FastAPI application entry point."""

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from api.exception_handlers import setup_exception_handlers
from api.middleware.request_context import RequestContextMiddleware
from api.routes.health import router as health_router
from api.v1 import router as v1_router
from api.v1.dependencies import get_uow_factory
from core.config import settings
from core.logging import setup_logging
from core.rate_limit import limiter, rate_limit_exceeded_handler
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.activity_recorder import ActivityRecorder
from domain.services.event_bus import EventBus

logger = structlog.get_logger()

setup_logging()


def build_event_bus(uow_factory: Callable[[], IUnitOfWork]) -> EventBus:
    """Create the event bus with every subscriber registered, then seal it."""
    bus = EventBus()
    ActivityRecorder(uow_factory).register(bus)
    bus.seal()
    logger.info("event_bus_ready", topics=bus.topics())
    return bus


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build the event bus on startup and drain it on shutdown."""
    app.state.event_bus = build_event_bus(get_uow_factory())
    yield
    await app.state.event_bus.drain(settings.event_bus_drain_timeout_seconds)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        title=settings.app_name,
        description=(
            "## Multi-tenant Task Tracker\n\n"
            "Workspaces own projects, projects own tasks. Every task change is "
            "checked against the caller's workspace role and written to the "
            "task's activity trail.\n\n"
            "### Roles\n"
            "- **owner**, **admin**, **member**: full access inside the workspace\n"
            "- **teacher**: full access, except that only tasks they created "
            "can be modified\n\n"
            "Comments can only be edited or deleted by their author.\n\n"
            "### Authentication\n"
            "All endpoints (except `/health`) require a valid JWT token "
            "in the Authorization header:\n"
            "```\nAuthorization: Bearer <your_token>\n```\n\n"
            "### Rate Limits\n"
            "- GET endpoints: 30 requests/minute\n"
            "- POST/PUT/DELETE: 10 requests/minute"
        ),
        version="1.0.0",
        debug=settings.debug,
        openapi_tags=[
            {"name": "health", "description": "Health check endpoints"},
            {"name": "tasks", "description": "Task operations"},
            {"name": "activity", "description": "Task activity trail"},
            {"name": "comments", "description": "Comment editing and removal"},
            {"name": "labels", "description": "Workspace and task labels"},
        ],
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # LIFO order: last added is outermost
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(v1_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=not settings.is_production,
    )
