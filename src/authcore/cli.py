"""Command-line interface for authcore.

This module provides the CLI commands for running and managing
the authcore service.
"""

import asyncio
from typing import NoReturn

import click

from authcore import __version__
from authcore.core.config import get_settings
from authcore.core.logging import configure_logging, get_logger


@click.group()
@click.version_option(version=__version__, prog_name="authcore")
def cli() -> None:
    """authcore - credential and token lifecycle service.

    Settings are read from AUTHCORE_* environment variables and .env.
    """


@cli.command()
@click.option("--host", type=str, default=None, help="Host to bind to (overrides config)")
@click.option("--port", type=int, default=None, help="Port to bind to (overrides config)")
@click.option(
    "--workers", type=int, default=None, help="Number of worker processes (overrides config)"
)
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload for development")
def serve(host: str | None, port: int | None, workers: int | None, reload: bool) -> None:
    """Start the authcore server."""
    import uvicorn

    settings = get_settings()
    bind_host = host or settings.host
    bind_port = port or settings.port
    bind_workers = workers or settings.workers

    configure_logging(settings)
    logger = get_logger(__name__)
    logger.info(
        "Starting authcore server",
        host=bind_host,
        port=bind_port,
        workers=bind_workers,
        reload=reload,
        environment=settings.environment,
    )

    uvicorn.run(
        "authcore.infrastructure.api.app:app",
        host=bind_host,
        port=bind_port,
        workers=1 if reload else bind_workers,
        reload=reload,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


@cli.command()
@click.option("--force", is_flag=True, help="Skip confirmation prompt")
def init_db(force: bool) -> None:
    """Create the database tables.

    Use this only in development. In production, run ``alembic upgrade head``.
    """
    from authcore.infrastructure.persistence.database import (
        DatabaseManager,
        close_database,
        init_database,
    )

    settings = get_settings()
    configure_logging(settings)

    if settings.is_production and not force:
        click.echo(
            "ERROR: Running in production mode. Use migrations instead of init-db.",
            err=True,
        )
        raise SystemExit(1)

    if not force:
        click.confirm("This will create all database tables. Continue?", abort=True, default=False)

    async def initialize() -> None:
        db = DatabaseManager(settings)
        try:
            await init_database(db)
            click.echo("Database initialized successfully.")
        finally:
            await close_database(db)

    asyncio.run(initialize())


@cli.command()
def purge_tokens() -> None:
    """Clear expired verification codes and reset tokens."""
    from authcore.domain.entities import utcnow
    from authcore.infrastructure.persistence.database import DatabaseManager, close_database
    from authcore.infrastructure.persistence.repositories import UserRepository

    settings = get_settings()
    configure_logging(settings)
    logger = get_logger(__name__)

    async def purge() -> tuple[int, int]:
        db = DatabaseManager(settings)
        try:
            async with db.session() as session:
                repo = UserRepository(session)
                counts = await repo.clear_expired_tokens(utcnow())
                await repo.commit()
                return counts
        finally:
            await close_database(db)

    verification, reset = asyncio.run(purge())
    logger.info("Expired tokens purged", verification=verification, reset=reset)
    click.echo(f"Cleared {verification} verification code(s) and {reset} reset token(s).")


@cli.command()
def info() -> None:
    """Display authcore configuration."""
    settings = get_settings()

    click.echo(f"""
authcore v{settings.app_version}
{'=' * 40}

Configuration:
  Environment:   {settings.environment}
  Debug:         {settings.debug}
  API Prefix:    {settings.api_prefix}
  Client URL:    {settings.client_url}

Server:
  Host:          {settings.host}
  Port:          {settings.port}
  Workers:       {settings.workers}

Database:
  URL:           {settings.database_url}

Tokens:
  Session:       {settings.session_expire_days} days
  Verification:  {settings.verification_token_expire_hours} hours
  Reset:         {settings.reset_token_expire_hours} hours

Email:
  Provider:      {settings.email_provider}
  From:          {settings.email_from_name} <{settings.email_from}>

Logging:
  Level:         {settings.log_level}
  Format:        {settings.log_format}
""")


def main() -> NoReturn:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
