"""Unit tests for the command-line interface."""

import asyncio
from datetime import timedelta
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from authcore import __version__
from authcore.cli import cli
from authcore.core.config import Settings
from authcore.domain.entities import User, utcnow
from authcore.infrastructure.persistence.database import (
    DatabaseManager,
    close_database,
    init_database,
)
from authcore.infrastructure.persistence.repositories import UserRepository


def test_version():
    result = CliRunner().invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_info_shows_token_lifetimes(test_settings):
    with patch("authcore.cli.get_settings", return_value=test_settings):
        result = CliRunner().invoke(cli, ["info"])

    assert result.exit_code == 0
    assert "Session:       7 days" in result.output
    assert "Verification:  24 hours" in result.output
    assert "Reset:         1 hours" in result.output


def test_init_db_refuses_production():
    settings = Settings(_env_file=None, environment="production", secret_key="a" * 64)

    with patch("authcore.cli.get_settings", return_value=settings):
        result = CliRunner().invoke(cli, ["init-db"])

    assert result.exit_code == 1
    assert "Use migrations instead of init-db" in result.output


def test_serve_passes_overrides_to_uvicorn(test_settings):
    with (
        patch("authcore.cli.get_settings", return_value=test_settings),
        patch("uvicorn.run") as run,
    ):
        result = CliRunner().invoke(cli, ["serve", "--port", "9000"])

    assert result.exit_code == 0
    args, kwargs = run.call_args
    assert args[0] == "authcore.infrastructure.api.app:app"
    assert kwargs["port"] == 9000
    assert kwargs["host"] == test_settings.host


@pytest.fixture
def file_settings(test_settings, tmp_path):
    return test_settings.model_copy(
        update={"database_url": f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}"}
    )


async def _seed(settings, *users: User) -> None:
    db = DatabaseManager(settings)
    try:
        await init_database(db)
        async with db.session() as session:
            repo = UserRepository(session)
            for user in users:
                await repo.create(user)
            await repo.commit()
    finally:
        await close_database(db)


async def _load(settings, email: str) -> User | None:
    db = DatabaseManager(settings)
    try:
        async with db.session() as session:
            return await UserRepository(session).get_by_email(email)
    finally:
        await close_database(db)


def test_init_db_creates_configured_database(file_settings, tmp_path):
    with patch("authcore.cli.get_settings", return_value=file_settings):
        result = CliRunner().invoke(cli, ["init-db", "--force"])

    assert result.exit_code == 0
    assert "Database initialized successfully." in result.output
    assert (tmp_path / "cli.db").exists()


def test_purge_tokens_clears_only_expired(file_settings):
    past = utcnow() - timedelta(hours=1)
    future = utcnow() + timedelta(hours=1)
    asyncio.run(
        _seed(
            file_settings,
            User(
                id="user-1",
                email="ann@example.com",
                password_hash="$argon2id$ann",
                name="Ann",
                verification_token="123456",
                verification_token_expires_at=past,
            ),
            User(
                id="user-2",
                email="bob@example.com",
                password_hash="$argon2id$bob",
                name="Bob",
                is_verified=True,
                reset_password_token="a" * 40,
                reset_password_token_expires_at=past,
            ),
            User(
                id="user-3",
                email="cy@example.com",
                password_hash="$argon2id$cy",
                name="Cy",
                verification_token="654321",
                verification_token_expires_at=future,
            ),
        )
    )

    with patch("authcore.cli.get_settings", return_value=file_settings):
        result = CliRunner().invoke(cli, ["purge-tokens"])

    assert result.exit_code == 0
    assert "Cleared 1 verification code(s) and 1 reset token(s)." in result.output

    ann = asyncio.run(_load(file_settings, "ann@example.com"))
    assert ann.verification_token is None
    assert ann.is_verified is False
    bob = asyncio.run(_load(file_settings, "bob@example.com"))
    assert bob.reset_password_token is None
    cy = asyncio.run(_load(file_settings, "cy@example.com"))
    assert cy.verification_token == "654321"
