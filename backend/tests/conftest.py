"""
Menu API — Test Configuration (conftest.py)
===========================================

What:  Shared pytest fixtures for the whole suite.
How:   Unit tests get a mocked AsyncSession; API tests get a real app wired
       to a throwaway SQLite file (aiosqlite) and an httpx AsyncClient.

Fixture Hierarchy:
    ├── mock_db_session: AsyncMock standing in for AsyncSession
    ├── test_settings:   Settings pointing at tmp_path/menu.db
    ├── test_app:        create_app(test_settings) with tables created
    └── test_client:     httpx AsyncClient over ASGITransport
"""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# Set BEFORE any menu_api import: `menu_api.config.settings` and the
# module-level app in menu_api.main are built at import time.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_LEVEL"] = "WARNING"

from menu_api.config import Settings  # noqa: E402
from menu_api.main import create_app  # noqa: E402


@pytest.fixture
def mock_db_session():
    """
    Mock async database session.

    Usage:
        mock_db_session.execute.return_value = result
        await service.update(mock_db_session, 1, {"nombre": "x"})
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.scalar = AsyncMock(return_value=0)
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'menu.db'}",
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def test_app(test_settings):
    """
    Application bound to an empty SQLite database.

    ASGITransport does not run the lifespan, so the schema is created here.
    """
    app = create_app(test_settings)
    await app.state.database.create_all()
    yield app
    await app.state.database.dispose()


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def categoria(test_client):
    response = await test_client.post("/api/categorias", json={"nombre": "Hamburguesas"})
    return response.json()["data"]


@pytest_asyncio.fixture
async def producto(test_client, categoria):
    response = await test_client.post(
        "/api/productos",
        json={
            "categoria_id": categoria["id"],
            "nombre": "Cheeseburger Especial",
            "descripcion": "Carne y queso con salsa especial",
            "precio": 45.5,
            "disponible": True,
        },
    )
    return response.json()["data"]


@pytest_asyncio.fixture
async def ingrediente(test_client):
    response = await test_client.post(
        "/api/ingredientes", json={"nombre": "Queso amarillo", "perecedero": True}
    )
    return response.json()["data"]
