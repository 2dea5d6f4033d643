"""Account state machine for signup, verification, login and password reset.

Each user moves along two independent axes:

- ``Unverified(code, expiry) -> Verified``
- ``NoPendingReset <-> PendingReset(token, expiry)``

Every transition is committed to the user store before any email is
requested. A failed email turns the result into a partial success
(``notification_error`` set) and never undoes the committed transition.
"""

import uuid
from dataclasses import dataclass, replace
from datetime import timedelta
from typing import Awaitable

from authcore.core.config import Settings
from authcore.core.logging import get_logger
from authcore.domain.entities.user import User, UserProjection, utcnow
from authcore.domain.exceptions import (
    ConflictError,
    InvalidCredentialsError,
    InvalidOrExpiredError,
    NotFoundError,
    NotifierFault,
    ValidationError,
)
from authcore.infrastructure.auth.password_hasher import PasswordHasher
from authcore.infrastructure.auth.session_issuer import SessionIssuer
from authcore.infrastructure.persistence.repositories.user_repository import UserRepository
from authcore.infrastructure.services.email_service import EmailService
from authcore.infrastructure.services.token_service import TokenService

logger = get_logger(__name__)

FORGOT_PASSWORD_MESSAGE = "If an account with that email exists, a password reset link has been sent"
INVALID_VERIFICATION_MESSAGE = "Invalid or expired verification code"
INVALID_RESET_MESSAGE = "Invalid or expired reset token"

# Retries when a fresh verification code collides with a pending one
_CODE_ATTEMPTS = 5


@dataclass
class AuthResult:
    """Outcome of a successful state machine operation.

    Attributes:
        message: Human-readable confirmation.
        user: Projection of the affected user, if the operation returns one.
        session_token: Session credential to place in the cookie.
        clear_session: Whether the transport should drop the session cookie.
        notification_error: Set when the transition committed but the email
            could not be sent.
    """

    message: str
    user: UserProjection | None = None
    session_token: str | None = None
    clear_session: bool = False
    notification_error: str | None = None

    @property
    def partial(self) -> bool:
        return self.notification_error is not None


class AuthService:
    """Service orchestrating the credential and token lifecycle."""

    def __init__(
        self,
        settings: Settings,
        user_repo: UserRepository,
        email_service: EmailService,
        session_issuer: SessionIssuer,
        token_service: TokenService | None = None,
        password_hasher: PasswordHasher | None = None,
    ) -> None:
        """Initialize the auth service.

        Args:
            settings: Application settings (token lifetimes, client URL).
            user_repo: Repository for user operations.
            email_service: Service for sending emails.
            session_issuer: Issuer of session credentials.
            token_service: Generator for verification codes and reset tokens.
            password_hasher: Argon2 hasher; built from settings when omitted.
        """
        self.settings = settings
        self.user_repo = user_repo
        self.email_service = email_service
        self.session_issuer = session_issuer
        self.token_service = token_service or TokenService(settings.verification_code_length)
        self.password_hasher = password_hasher or PasswordHasher(settings)

    async def _notify(self, send: Awaitable[None], user_id: str) -> str | None:
        try:
            await send
        except NotifierFault as e:
            logger.warning("Notification failed after commit", user_id=user_id, error=e.message)
            return e.message
        return None

    async def _new_verification_code(self) -> str:
        code = self.token_service.verification_token()
        for _ in range(_CODE_ATTEMPTS - 1):
            if not await self.user_repo.verification_token_in_use(code):
                break
            code = self.token_service.verification_token()
        return code

    async def signup(self, email: str, password: str, name: str) -> AuthResult:
        """Register an unverified user and send the verification code.

        Raises:
            ValidationError: If any field is empty.
            ConflictError: If the email is already registered.
            RepositoryFault: If the user store fails.
        """
        if not email or not password or not name:
            raise ValidationError("All fields are required")

        # The unique constraint at insert is the authoritative check
        if await self.user_repo.email_exists(email):
            logger.info("Signup failed: email already registered", email=email)
            raise ConflictError("User already exists")

        password_hash = await self.password_hasher.hash_async(password)
        code = await self._new_verification_code()
        now = utcnow()

        user = User(
            id=str(uuid.uuid4()),
            email=email,
            password_hash=password_hash,
            name=name,
            verification_token=code,
            verification_token_expires_at=now
            + timedelta(hours=self.settings.verification_token_expire_hours),
            created_at=now,
            updated_at=now,
        )
        user = await self.user_repo.create(user)
        await self.user_repo.commit()

        session_token = self.session_issuer.issue(user.id)
        logger.info("User signed up", user_id=user.id)

        notification_error = await self._notify(
            self.email_service.send_verification_email(user.email, code), user.id
        )
        return AuthResult(
            message="User created successfully",
            user=user.to_projection(),
            session_token=session_token,
            notification_error=notification_error,
        )

    async def verify_email(self, code: str) -> AuthResult:
        """Consume a verification code and mark the user verified.

        Wrong, expired and already-used codes are indistinguishable.

        Raises:
            InvalidOrExpiredError: If no pending, unexpired code matches.
        """
        if not code:
            raise InvalidOrExpiredError(INVALID_VERIFICATION_MESSAGE)

        now = utcnow()
        user = await self.user_repo.get_by_verification_token(code, now)
        if user is None:
            logger.info("Email verification failed: code invalid or expired")
            raise InvalidOrExpiredError(INVALID_VERIFICATION_MESSAGE)

        if not await self.user_repo.consume_verification_token(user.id, code, now):
            # Lost the race to a concurrent verification
            await self.user_repo.rollback()
            logger.info("Email verification failed: code already consumed", user_id=user.id)
            raise InvalidOrExpiredError(INVALID_VERIFICATION_MESSAGE)
        await self.user_repo.commit()

        verified = replace(
            user,
            is_verified=True,
            verification_token=None,
            verification_token_expires_at=None,
            updated_at=now,
        )
        logger.info("Email verified successfully", user_id=user.id)

        notification_error = await self._notify(
            self.email_service.send_welcome_email(verified.email, verified.name), user.id
        )
        return AuthResult(
            message="Email verified successfully",
            user=verified.to_projection(),
            notification_error=notification_error,
        )

    async def login(self, email: str, password: str) -> AuthResult:
        """Check credentials and open a session.

        Raises:
            ValidationError: If email or password is empty.
            InvalidCredentialsError: If the email is unknown or the password
                is wrong (same message for both).
        """
        if not email or not password:
            raise ValidationError("Email and password are required")

        user = await self.user_repo.get_by_email(email)
        if user is None:
            await self.password_hasher.verify_dummy_async(password)
            logger.info("Login failed: unknown email")
            raise InvalidCredentialsError("Invalid credentials")

        if not await self.password_hasher.verify_async(password, user.password_hash):
            logger.info("Login failed: invalid password", user_id=user.id)
            raise InvalidCredentialsError("Invalid credentials")

        now = utcnow()
        await self.user_repo.update_last_login(user.id, now)
        if self.password_hasher.needs_rehash(user.password_hash):
            new_hash = await self.password_hasher.hash_async(password)
            await self.user_repo.update_password_hash(user.id, new_hash)
            logger.info("Password hash upgraded", user_id=user.id)
        await self.user_repo.commit()

        session_token = self.session_issuer.issue(user.id)
        last_login_at = max(now, user.last_login_at) if user.last_login_at else now
        logger.info("User logged in successfully", user_id=user.id)

        return AuthResult(
            message="Logged in successfully",
            user=replace(user, last_login_at=last_login_at).to_projection(),
            session_token=session_token,
        )

    async def logout(self) -> AuthResult:
        """End the session. Stateless, so nothing on the user record changes."""
        return AuthResult(message="Logged out successfully", clear_session=True)

    async def forgot_password(self, email: str, base_url: str | None = None) -> AuthResult:
        """Start a password reset.

        Unknown emails get the same response and cause no mutation. A new
        request overwrites any pending reset, so only the latest token works.

        Args:
            email: Email address of the account.
            base_url: Base of the reset link. Defaults to ``settings.client_url``.

        Raises:
            ValidationError: If email is empty.
        """
        if not email:
            raise ValidationError("Email is required")

        user = await self.user_repo.get_by_email(email)
        if user is None:
            logger.info("Password reset requested for unknown email")
            return AuthResult(message=FORGOT_PASSWORD_MESSAGE)

        token = self.token_service.reset_token()
        expires_at = utcnow() + timedelta(hours=self.settings.reset_token_expire_hours)
        await self.user_repo.set_reset_token(user.id, token, expires_at)
        await self.user_repo.commit()
        logger.info("Password reset token issued", user_id=user.id)

        reset_url = f"{(base_url or self.settings.client_url).rstrip('/')}/reset-password/{token}"
        notification_error = await self._notify(
            self.email_service.send_password_reset_email(user.email, reset_url), user.id
        )
        return AuthResult(message=FORGOT_PASSWORD_MESSAGE, notification_error=notification_error)

    async def reset_password(self, token: str, new_password: str) -> AuthResult:
        """Consume a reset token and replace the password hash.

        Raises:
            ValidationError: If the new password is empty.
            InvalidOrExpiredError: If no pending, unexpired token matches.
        """
        if not new_password:
            raise ValidationError("Password is required")
        if not token:
            raise InvalidOrExpiredError(INVALID_RESET_MESSAGE)

        user = await self.user_repo.get_by_reset_token(token, utcnow())
        if user is None:
            logger.info("Password reset failed: token invalid or expired")
            raise InvalidOrExpiredError(INVALID_RESET_MESSAGE)

        password_hash = await self.password_hasher.hash_async(new_password)
        # Expiry is re-checked after hashing, inside the conditional update
        if not await self.user_repo.consume_reset_token(user.id, token, password_hash, utcnow()):
            await self.user_repo.rollback()
            logger.info("Password reset failed: token consumed or expired", user_id=user.id)
            raise InvalidOrExpiredError(INVALID_RESET_MESSAGE)
        await self.user_repo.commit()
        logger.info("Password reset successfully", user_id=user.id)

        notification_error = await self._notify(
            self.email_service.send_reset_success_email(user.email), user.id
        )
        return AuthResult(message="Password reset successfully", notification_error=notification_error)

    async def check_auth(self, user_id: str) -> AuthResult:
        """Resolve the session's user without touching the password hash.

        Raises:
            NotFoundError: If the user no longer exists.
        """
        projection = await self.user_repo.get_projection_by_id(user_id)
        if projection is None:
            logger.info("Session check failed: user not found", user_id=user_id)
            raise NotFoundError("User not found")
        return AuthResult(message="Authenticated", user=projection)
