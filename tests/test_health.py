"""
Health endpoint tests - liveness and search engine readiness.
"""

import pytest
from httpx import AsyncClient

from catalog_graphql.api.v1.endpoints import health


class FakePingClient:
    def __init__(self, up: bool):
        self.up = up

    async def ping(self):
        return self.up


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    """GET /api/v1/health returns 200 and status ok."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_ready(client: AsyncClient, monkeypatch):
    async def fake_es():
        return FakePingClient(True)

    monkeypatch.setattr(health, "get_elasticsearch", fake_es)
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 200
    assert response.json()["status"] == "ready"


@pytest.mark.asyncio
async def test_not_ready_when_engine_down(client: AsyncClient, monkeypatch):
    async def fake_es():
        return FakePingClient(False)

    monkeypatch.setattr(health, "get_elasticsearch", fake_es)
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 503
    assert response.json() == {"status": "unavailable", "search_engine": False}
