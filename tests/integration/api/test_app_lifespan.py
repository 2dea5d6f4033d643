"""Integration tests for application startup against a file database."""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import inspect, select
from sqlalchemy.ext.asyncio import create_async_engine

from authcore.infrastructure.api.app import create_app
from authcore.infrastructure.persistence.models import UserModel


@pytest.fixture
def file_settings(test_settings, tmp_path):
    """Test settings pointing at a SQLite file under tmp_path."""
    return test_settings.model_copy(
        update={"database_url": f"sqlite+aiosqlite:///{tmp_path / 'authcore.db'}"}
    )


@pytest.mark.asyncio
async def test_startup_initializes_configured_database(file_settings, tmp_path):
    app = create_app(file_settings)

    async with app.router.lifespan_context(app):
        assert app.state.db_manager.settings.database_url == file_settings.database_url
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            response = await ac.get("/ready")

        assert response.status_code == 200
        assert response.json()["database"] == "connected"

    assert (tmp_path / "authcore.db").exists()
    engine = create_async_engine(file_settings.database_url)
    async with engine.connect() as conn:
        tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
    await engine.dispose()
    assert "users" in tables


@pytest.mark.asyncio
async def test_requests_use_configured_database(file_settings):
    app = create_app(file_settings)

    async with app.router.lifespan_context(app):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            response = await ac.post(
                "/api/v1/auth/signup",
                json={"email": "ann@example.com", "password": "pw1", "name": "Ann"},
            )

    assert response.status_code == 201

    engine = create_async_engine(file_settings.database_url)
    async with engine.connect() as conn:
        result = await conn.execute(select(UserModel.email))
        emails = result.scalars().all()
    await engine.dispose()
    assert emails == ["ann@example.com"]
