"""Integration tests for comment editing rules."""

from typing import Callable

import pytest
from httpx import AsyncClient

from domain.services.event_bus import EventBus
from infrastructure.auth.provider import TokenUser
from tests.conftest import Tenant

Headers = Callable[[TokenUser], dict[str, str]]


@pytest.fixture
async def task_id(api_client: AsyncClient, tenant: Tenant, auth_headers: Headers) -> str:
    response = await api_client.post(
        f"/api/v1/projects/{tenant.project_id}/tasks",
        json={"title": "Field trip form"},
        headers=auth_headers(tenant.owner),
    )
    return response.json()["data"]["id"]


@pytest.fixture
async def comment_id(
    api_client: AsyncClient, tenant: Tenant, auth_headers: Headers, task_id: str
) -> str:
    response = await api_client.post(
        f"/api/v1/tasks/{task_id}/comments",
        json={"content": "Signed by parents?"},
        headers=auth_headers(tenant.member),
    )
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["type"] == "comment"
    assert data["user_id"] == str(tenant.member.id)
    return data["id"]


class TestComments:
    @pytest.mark.asyncio
    async def test_author_edits_and_deletes(
        self, api_client: AsyncClient, tenant: Tenant, auth_headers: Headers, comment_id: str
    ) -> None:
        edited = await api_client.put(
            f"/api/v1/comments/{comment_id}",
            json={"content": "Signed by both parents?"},
            headers=auth_headers(tenant.member),
        )
        deleted = await api_client.delete(
            f"/api/v1/comments/{comment_id}", headers=auth_headers(tenant.member)
        )

        assert edited.status_code == 200
        assert edited.json()["data"]["content"] == "Signed by both parents?"
        assert deleted.status_code == 204

    @pytest.mark.asyncio
    async def test_workspace_owner_cannot_touch_others_comment(
        self, api_client: AsyncClient, tenant: Tenant, auth_headers: Headers, comment_id: str
    ) -> None:
        edited = await api_client.put(
            f"/api/v1/comments/{comment_id}",
            json={"content": "Overwritten"},
            headers=auth_headers(tenant.owner),
        )
        deleted = await api_client.delete(
            f"/api/v1/comments/{comment_id}", headers=auth_headers(tenant.owner)
        )

        assert edited.status_code == 403
        assert edited.json()["error_code"] == "NOT_COMMENT_AUTHOR"
        assert deleted.status_code == 403

    @pytest.mark.asyncio
    async def test_comment_appears_in_trail(
        self,
        api_client: AsyncClient,
        tenant: Tenant,
        auth_headers: Headers,
        event_bus: EventBus,
        task_id: str,
        comment_id: str,
    ) -> None:
        await event_bus.drain(timeout=5)

        response = await api_client.get(
            f"/api/v1/tasks/{task_id}/activity", headers=auth_headers(tenant.teacher)
        )

        types = [entry["type"] for entry in response.json()["data"]]
        assert types == ["create", "comment"]

    @pytest.mark.asyncio
    async def test_generated_entry_is_not_editable(
        self,
        api_client: AsyncClient,
        tenant: Tenant,
        auth_headers: Headers,
        event_bus: EventBus,
        task_id: str,
    ) -> None:
        await event_bus.drain(timeout=5)
        trail = await api_client.get(
            f"/api/v1/tasks/{task_id}/activity", headers=auth_headers(tenant.owner)
        )
        created_entry = trail.json()["data"][0]

        response = await api_client.put(
            f"/api/v1/comments/{created_entry['id']}",
            json={"content": "rewritten history"},
            headers=auth_headers(tenant.owner),
        )

        assert response.status_code == 404
        assert response.json()["error_code"] == "COMMENT_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_outsider_cannot_comment(
        self, api_client: AsyncClient, tenant: Tenant, auth_headers: Headers, task_id: str
    ) -> None:
        response = await api_client.post(
            f"/api/v1/tasks/{task_id}/comments",
            json={"content": "hello"},
            headers=auth_headers(tenant.outsider),
        )

        assert response.status_code == 403
