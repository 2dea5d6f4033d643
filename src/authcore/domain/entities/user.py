"""User entity and its outward-facing projection.

The entity carries the password hash and the pending token pairs. The
projection is the only shape that leaves the service layer and has no
password hash field at all.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone


def utcnow() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class UserProjection:
    """Read-only view of a user with sensitive fields omitted.

    Attributes:
        id: User ID (UUID string).
        email: User's email address.
        name: Display name.
        is_verified: Whether the email address has been verified.
        last_login_at: Timestamp of the last successful login.
        created_at: Timestamp when the user was created.
        updated_at: Timestamp when the user was last updated.
    """

    id: str
    email: str
    name: str
    is_verified: bool
    last_login_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class User:
    """User entity for the credential and token lifecycle.

    A token and its expiry are always set or cleared together, and a
    verified user never carries a pending verification token.

    Attributes:
        id: Unique identifier (UUID string).
        email: User's email address (unique).
        password_hash: Hashed password (never store plaintext).
        name: Display name.
        is_verified: Whether the email address has been verified.
        verification_token: Pending email verification code.
        verification_token_expires_at: Expiry of the verification code.
        reset_password_token: Pending password reset token.
        reset_password_token_expires_at: Expiry of the reset token.
        last_login_at: Timestamp of last successful login (nullable).
        created_at: Timestamp when the user was created.
        updated_at: Timestamp when the user was last updated.
    """

    id: str
    email: str
    password_hash: str
    name: str
    is_verified: bool = False
    verification_token: str | None = None
    verification_token_expires_at: datetime | None = None
    reset_password_token: str | None = None
    reset_password_token_expires_at: datetime | None = None
    last_login_at: datetime | None = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def __post_init__(self) -> None:
        """Validate user data after initialization."""
        if not self.id:
            raise ValueError("User ID is required")
        if not self.email:
            raise ValueError("Email is required")
        if not self.password_hash:
            raise ValueError("Password hash is required")
        if not self.name:
            raise ValueError("Name is required")
        if (self.verification_token is None) != (self.verification_token_expires_at is None):
            raise ValueError("Verification token and expiry must be set together")
        if (self.reset_password_token is None) != (self.reset_password_token_expires_at is None):
            raise ValueError("Reset token and expiry must be set together")
        if self.is_verified and self.verification_token is not None:
            raise ValueError("A verified user cannot have a pending verification token")

    def to_projection(self) -> UserProjection:
        """Build the outward-facing view of this user."""
        return UserProjection(
            id=self.id,
            email=self.email,
            name=self.name,
            is_verified=self.is_verified,
            last_login_at=self.last_login_at,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
