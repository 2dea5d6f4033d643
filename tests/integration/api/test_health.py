"""Integration tests for the health endpoints."""

from unittest.mock import AsyncMock, patch

import pytest
from httpx import AsyncClient

from authcore.infrastructure.persistence.database import DatabaseManager


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["service"] == "authcore"


@pytest.mark.asyncio
async def test_live(client: AsyncClient):
    response = await client.get("/live")

    assert response.status_code == 200
    assert response.json()["status"] == "alive"


@pytest.mark.asyncio
async def test_ready_reports_database_down(client: AsyncClient):
    with patch.object(DatabaseManager, "check_connection", AsyncMock(return_value=False)):
        response = await client.get("/ready")

    assert response.status_code == 503
    assert response.json()["database"] == "disconnected"


@pytest.mark.asyncio
async def test_correlation_id_is_echoed(client: AsyncClient):
    response = await client.get("/live", headers={"X-Correlation-ID": "cid_test"})

    assert response.headers["X-Correlation-ID"] == "cid_test"
