"""Health check endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import settings
from infrastructure.database.session import get_async_session

router = APIRouter(tags=["health"])


class EventBusHealth(BaseModel):
    sealed: bool
    topics: list[str]
    pending_handlers: int


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    timestamp: str
    environment: str
    database: str | None = None
    event_bus: EventBusHealth | None = None


@router.get("/health", response_model=HealthResponse, summary="Basic health check")
async def health_check() -> HealthResponse:
    """Liveness check. Touches no dependencies."""
    return HealthResponse(
        status="healthy",
        version="1.0.0",
        timestamp=datetime.now(timezone.utc).isoformat(),
        environment=settings.app_env,
    )


@router.get(
    "/health/detailed",
    response_model=HealthResponse,
    summary="Detailed health check",
)
async def detailed_health_check(
    request: Request,
    db: AsyncSession = Depends(get_async_session),
) -> HealthResponse:
    """Check database connectivity and report the event bus state."""
    try:
        await db.execute(text("SELECT 1"))
        db_status = "healthy"
    except SQLAlchemyError as e:
        db_status = f"unhealthy: {e}"

    bus = getattr(request.app.state, "event_bus", None)
    bus_health = None
    if bus is not None:
        bus_health = EventBusHealth(
            sealed=bus.sealed,
            topics=bus.topics(),
            pending_handlers=bus.pending,
        )

    healthy = db_status == "healthy" and bus_health is not None and bus_health.sealed
    return HealthResponse(
        status="healthy" if healthy else "degraded",
        version="1.0.0",
        timestamp=datetime.now(timezone.utc).isoformat(),
        environment=settings.app_env,
        database=db_status,
        event_bus=bus_health,
    )
