"""FastAPI dependencies for the auth routes.

Wires settings, the password hasher, the session issuer, the email service
and the per-request AuthService, and resolves the session cookie to a user ID.
"""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from authcore.core.config import Settings
from authcore.core.logging import get_logger
from authcore.domain.services.auth_service import AuthService
from authcore.infrastructure.auth.password_hasher import PasswordHasher
from authcore.infrastructure.auth.session_issuer import SessionError, SessionIssuer
from authcore.infrastructure.persistence.database import get_db_session
from authcore.infrastructure.persistence.repositories import UserRepository
from authcore.infrastructure.services.email_service import EmailService

logger = get_logger(__name__)


def get_app_settings(request: Request) -> Settings:
    """Return the settings the application was created with."""
    return request.app.state.settings


SettingsDep = Annotated[Settings, Depends(get_app_settings)]


def get_session_issuer(settings: SettingsDep) -> SessionIssuer:
    """Build the session issuer from settings."""
    return SessionIssuer(settings)


def get_password_hasher(request: Request) -> PasswordHasher:
    """Return the hasher built once for the application."""
    return request.app.state.password_hasher


def get_email_service(settings: SettingsDep) -> EmailService:
    """Build the email service with the configured provider."""
    return EmailService(settings)


def get_auth_service(
    settings: SettingsDep,
    session: Annotated[AsyncSession, Depends(get_db_session)],
    email_service: Annotated[EmailService, Depends(get_email_service)],
    session_issuer: Annotated[SessionIssuer, Depends(get_session_issuer)],
    password_hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
) -> AuthService:
    """Build a per-request AuthService bound to the request's database session."""
    return AuthService(
        settings=settings,
        user_repo=UserRepository(session),
        email_service=email_service,
        session_issuer=session_issuer,
        password_hasher=password_hasher,
    )


def get_current_user_id(
    request: Request,
    session_issuer: Annotated[SessionIssuer, Depends(get_session_issuer)],
) -> str:
    """Resolve the session cookie to the user ID it was issued for.

    Raises:
        HTTPException: 401 if the cookie is missing, invalid or expired.
    """
    credential = request.cookies.get(session_issuer.cookie_name)
    if not credential:
        logger.info("Authentication failed: no session cookie")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized - no token provided",
        )

    try:
        return session_issuer.check_auth(credential)
    except SessionError as e:
        logger.info("Authentication failed: invalid session", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized - invalid token",
        ) from e


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
SessionIssuerDep = Annotated[SessionIssuer, Depends(get_session_issuer)]
CurrentUserIdDep = Annotated[str, Depends(get_current_user_id)]
