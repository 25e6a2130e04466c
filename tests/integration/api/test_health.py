"""Tests for health check endpoints."""

import pytest
from httpx import AsyncClient


class TestHealthEndpoint:
    @pytest.mark.asyncio
    async def test_health_returns_200(self, client: AsyncClient) -> None:
        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == "1.0.0"
        assert "timestamp" in data

    @pytest.mark.asyncio
    async def test_health_has_request_id(self, client: AsyncClient) -> None:
        response = await client.get("/health")

        assert "x-request-id" in response.headers

    @pytest.mark.asyncio
    async def test_api_requires_auth(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/tasks/00000000-0000-0000-0000-000000000000")

        assert response.status_code == 401
        assert response.json()["error_code"] == "UNAUTHORIZED"
