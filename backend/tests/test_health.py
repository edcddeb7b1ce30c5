"""
Menu API — Health Check Tests
=============================
"""

from unittest.mock import AsyncMock

import pytest


@pytest.mark.asyncio
async def test_health_ok(test_client):
    response = await test_client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["db"] is True
    assert body["uptime_seconds"] >= 0


@pytest.mark.asyncio
async def test_health_database_down(test_app, test_client):
    test_app.state.database.ping = AsyncMock(side_effect=OSError("connection refused"))

    response = await test_client.get("/health")

    assert response.status_code == 500
    body = response.json()
    assert body["status"] == "error"
    assert body["db"] is False
