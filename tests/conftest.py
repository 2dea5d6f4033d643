"""Pytest configuration for all tests."""

from typing import Any, AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from authcore.core.config import Settings
from authcore.infrastructure.auth.password_hasher import PasswordHasher
from authcore.infrastructure.persistence.database import Base
from authcore.infrastructure.persistence.models import UserModel  # noqa: F401
from authcore.infrastructure.services.email.email_provider import EmailProvider

TEST_SECRET_KEY = "test-secret-key-for-session-signing-0123456789"


class RecordingEmailProvider(EmailProvider):
    """Email provider that keeps sent messages in memory.

    Set ``fail`` to make every send raise, as an unreachable mail server would.
    """

    def __init__(self) -> None:
        self.sent: list[dict[str, Any]] = []
        self.fail = False

    async def send_email(
        self,
        to: str,
        subject: str,
        html_body: str,
        text_body: str,
        from_email: str,
        from_name: str,
    ) -> bool:
        if self.fail:
            raise ConnectionError("Mail server unavailable")
        self.sent.append(
            {"to": to, "subject": subject, "html_body": html_body, "text_body": text_body}
        )
        return True


@pytest.fixture
def test_settings() -> Settings:
    """Settings for tests, with cheap Argon2 parameters."""
    return Settings(
        environment="testing",
        secret_key=TEST_SECRET_KEY,
        database_url="sqlite+aiosqlite:///:memory:",
        client_url="http://client.test",
        session_cookie_secure=False,
        argon2_time_cost=1,
        argon2_memory_cost=1024,
        argon2_parallelism=1,
        email_provider="console",
        _env_file=None,
    )


@pytest.fixture
def password_hasher(test_settings: Settings) -> PasswordHasher:
    return PasswordHasher(test_settings)


@pytest.fixture
def email_provider() -> RecordingEmailProvider:
    return RecordingEmailProvider()


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session.

    Uses an in-memory SQLite database for testing.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session_maker = sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_maker() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def client(
    db_session: AsyncSession,
    test_settings: Settings,
    email_provider: RecordingEmailProvider,
) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with the database and mail provider overridden."""
    from authcore.infrastructure.api.app import create_app
    from authcore.infrastructure.api.dependencies import get_email_service
    from authcore.infrastructure.persistence.database import get_db_session
    from authcore.infrastructure.services.email_service import EmailService

    app = create_app(test_settings)
    app.dependency_overrides[get_db_session] = lambda: db_session
    app.dependency_overrides[get_email_service] = lambda: EmailService(
        test_settings, provider=email_provider
    )

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides = {}
