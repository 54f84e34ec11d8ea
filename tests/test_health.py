"""Tests for the health check."""
import pytest
from httpx import AsyncClient

from ngo_api.core.config import settings


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "env": settings.ENV, "version": settings.VERSION}


@pytest.mark.asyncio
async def test_unknown_route_uses_error_envelope(client: AsyncClient):
    response = await client.get("/no-existe")

    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}
