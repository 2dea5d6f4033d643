"""Authentication infrastructure components.

This module provides password hashing and the session credential service.
"""

from authcore.infrastructure.auth.password_hasher import PasswordHasher
from authcore.infrastructure.auth.session_issuer import (
    InvalidSessionError,
    SessionError,
    SessionExpiredError,
    SessionIssuer,
)

__all__ = [
    "InvalidSessionError",
    "PasswordHasher",
    "SessionError",
    "SessionExpiredError",
    "SessionIssuer",
]
