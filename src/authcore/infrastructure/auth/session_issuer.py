"""Session credential service.

Issues and checks the signed session credential (a JWT) that identifies a
user on subsequent requests, and places it in or removes it from the
HTTP-only session cookie. Sessions are stateless: there is no server-side
revocation list, so clearing the cookie is the only logout mechanism.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from starlette.responses import Response

from authcore.core.config import Settings


class SessionError(Exception):
    """Base exception for session credential errors."""

    pass


class SessionExpiredError(SessionError):
    """Raised when a session credential has expired."""

    pass


class InvalidSessionError(SessionError):
    """Raised when a session credential is malformed or tampered with."""

    pass


class SessionIssuer:
    """Creates, validates and transports session credentials."""

    ALGORITHM = "HS256"
    ISSUER = "authcore"
    TOKEN_TYPE = "session"

    def __init__(self, settings: Settings) -> None:
        """Initialize the session issuer.

        Args:
            settings: Application settings providing the signing secret,
                session lifetime and cookie options.
        """
        self._secret_key = settings.secret_key
        self.lifetime = timedelta(days=settings.session_expire_days)
        self.cookie_name = settings.session_cookie_name
        self.cookie_secure = settings.session_cookie_secure

    def issue(self, user_id: str, expires_delta: timedelta | None = None) -> str:
        """Create a signed session credential for a user.

        Args:
            user_id: The user's unique identifier.
            expires_delta: Custom lifetime. Defaults to the configured session lifetime.

        Returns:
            Encoded JWT session credential.
        """
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta if expires_delta is not None else self.lifetime)

        payload = {
            "iss": self.ISSUER,
            "sub": user_id,
            "iat": now,
            "exp": expire,
            "type": self.TOKEN_TYPE,
        }
        return jwt.encode(payload, self._secret_key, algorithm=self.ALGORITHM)

    def decode(self, credential: str) -> dict[str, Any]:
        """Decode and validate a session credential.

        Raises:
            SessionExpiredError: If the credential has expired.
            InvalidSessionError: If the signature, issuer or type is wrong.
        """
        try:
            payload = jwt.decode(
                credential,
                self._secret_key,
                algorithms=[self.ALGORITHM],
                issuer=self.ISSUER,
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise SessionExpiredError("Session has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidSessionError("Invalid session") from e

        if payload.get("type") != self.TOKEN_TYPE:
            raise InvalidSessionError("Not a session credential")
        return payload

    def check_auth(self, credential: str) -> str:
        """Resolve a session credential to the user ID it was issued for."""
        return self.decode(credential)["sub"]

    def set_cookie(self, response: Response, credential: str) -> None:
        """Place the credential in an HTTP-only, same-site strict cookie."""
        response.set_cookie(
            key=self.cookie_name,
            value=credential,
            max_age=int(self.lifetime.total_seconds()),
            httponly=True,
            secure=self.cookie_secure,
            samesite="strict",
        )

    def clear(self, response: Response) -> None:
        """Instruct the client to drop the session cookie."""
        response.delete_cookie(
            key=self.cookie_name,
            httponly=True,
            secure=self.cookie_secure,
            samesite="strict",
        )
