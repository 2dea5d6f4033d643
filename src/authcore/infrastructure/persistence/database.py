"""Async engine and session handling for the user store.

One DatabaseManager per application owns the SQLAlchemy 2.0 async engine. SQLite
(aiosqlite) is the development default; PostgreSQL (asyncpg) gets a sized
connection pool.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from authcore.core.config import Settings
from authcore.core.logging import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """Declarative base for the ORM models."""


class DatabaseManager:
    """Lazily builds the engine and session factory from settings."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def is_sqlite(self) -> bool:
        return self.settings.database_url.startswith("sqlite")

    def _engine_options(self) -> dict[str, Any]:
        if self.is_sqlite:
            return {"connect_args": {"check_same_thread": False}}
        return {
            "pool_size": self.settings.db_pool_size,
            "max_overflow": self.settings.db_max_overflow,
            "pool_timeout": self.settings.db_pool_timeout,
            "pool_recycle": self.settings.db_pool_recycle,
        }

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            self._engine = create_async_engine(
                self.settings.database_url,
                echo=self.settings.db_echo,
                **self._engine_options(),
            )
            logger.info(
                "User store engine created",
                database_url=self._engine.url.render_as_string(hide_password=True),
            )
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        # Entities stay readable after commit
        if self._session_factory is None:
            self._session_factory = async_sessionmaker(
                bind=self.engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=False,
            )
        return self._session_factory

    async def create_tables(self) -> None:
        """Create missing tables from the model metadata (development only)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("User store tables created")

    async def disconnect(self) -> None:
        """Dispose the engine; the next access builds a fresh one."""
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("User store engine disposed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Yield a session; an exception escaping the block rolls it back.

        Committing is left to the caller (``UserRepository.commit``).
        """
        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    async def check_connection(self) -> bool:
        """Run ``SELECT 1`` and report whether the store answered."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            logger.error("User store unreachable", error=str(e))
            return False
        return True


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding one session per request.

    Sessions come from the DatabaseManager that ``create_app`` placed on
    ``app.state``.
    """
    db: DatabaseManager = request.app.state.db_manager
    async with db.session() as session:
        yield session


def _ensure_sqlite_directory(database_url: str) -> None:
    # sqlite+aiosqlite:///path/to/file.db
    db_path = database_url.split(":///")[-1]
    if db_path and db_path != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)


async def init_database(db: DatabaseManager) -> None:
    """Check connectivity and, outside production, create the users table.

    Production schemas are managed by ``alembic upgrade head``.

    Raises:
        RuntimeError: If the store cannot be reached.
    """
    # Registers UserModel on Base.metadata
    from authcore.infrastructure.persistence.models import UserModel  # noqa: F401

    if db.is_sqlite:
        _ensure_sqlite_directory(db.settings.database_url)

    if not await db.check_connection():
        raise RuntimeError("Failed to connect to the user store")

    if db.settings.is_production:
        logger.info("Skipping table creation in production, run migrations instead")
    else:
        await db.create_tables()


async def close_database(db: DatabaseManager) -> None:
    """Dispose the engine owned by ``db``."""
    await db.disconnect()
