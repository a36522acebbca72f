"""Tests for service endpoints."""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health(api_client: AsyncClient) -> None:
    response = await api_client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "Cronara API"}


@pytest.mark.asyncio
async def test_unknown_route_uses_error_shape(api_client: AsyncClient) -> None:
    response = await api_client.get("/api/nothing-here")

    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}
