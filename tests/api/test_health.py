"""Tests for health endpoints."""

import pytest
from httpx import AsyncClient

from billbook import __version__
from billbook.infrastructure.storage.sqlite import close_connection_pool


@pytest.fixture
async def health_client(client: AsyncClient):
    yield client
    await close_connection_pool()


@pytest.mark.parametrize("path", ["/health", "/api/health"])
async def test_health_check(health_client: AsyncClient, path: str):
    response = await health_client.get(path)

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["database"] is True
    assert data["version"] == __version__


async def test_health_needs_no_token(health_client: AsyncClient):
    response = await health_client.get("/health")
    assert response.status_code != 401


async def test_request_id_is_echoed(health_client: AsyncClient):
    response = await health_client.get("/health", headers={"X-Request-ID": "abc123"})

    assert response.headers["x-request-id"] == "abc123"
    assert "x-response-time" in response.headers
