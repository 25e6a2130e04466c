"""Unit tests for RequestContextMiddleware."""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from structlog.testing import capture_logs

from api.middleware.request_context import RequestContextMiddleware


def _create_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(RequestContextMiddleware)

    @app.get("/test")
    async def _():
        return {"ok": True}

    return app


class TestRequestContextMiddleware:
    @pytest.mark.asyncio
    async def test_generates_request_id(self):
        transport = ASGITransport(app=_create_app())
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            response = await c.get("/test")

        assert len(response.headers["x-request-id"]) == 36

    @pytest.mark.asyncio
    async def test_echoes_incoming_request_id(self):
        transport = ASGITransport(app=_create_app())
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            response = await c.get("/test", headers={"X-Request-ID": "abc-123"})

        assert response.headers["x-request-id"] == "abc-123"

    @pytest.mark.asyncio
    async def test_logs_completed_request(self):
        transport = ASGITransport(app=_create_app())
        with capture_logs() as logs:
            async with AsyncClient(transport=transport, base_url="http://test") as c:
                await c.get("/test")

        completed = [log for log in logs if log["event"] == "request_completed"]
        assert len(completed) == 1
        assert completed[0]["status_code"] == 200
