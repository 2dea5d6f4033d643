"""SQLAlchemy model for the users table."""

from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, String, false, func
from sqlalchemy.orm import Mapped, mapped_column

from authcore.infrastructure.persistence.database import Base


class UserModel(Base):
    """SQLAlchemy model for the users table.

    Token columns come in pairs with their expiry; the check constraints keep
    each pair set or cleared together and forbid a pending verification on a
    verified user.

    Attributes:
        id: Primary key (UUID string).
        email: User's email address (unique).
        password_hash: Argon2id hash of the password.
        name: Display name.
        is_verified: Whether the email has been verified.
        verification_token: Pending verification code.
        verification_token_expires_at: Expiry of the verification code.
        reset_password_token: Pending password reset token.
        reset_password_token_expires_at: Expiry of the reset token.
        last_login_at: Timestamp of last successful login.
        created_at: Timestamp when the user was created.
        updated_at: Timestamp when the user was last updated.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="User ID (UUID)",
    )
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="User email address",
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Hashed password (argon2id)",
    )
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name",
    )
    is_verified: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
        comment="Whether the email address has been verified",
    )
    verification_token: Mapped[str | None] = mapped_column(
        String(32),
        nullable=True,
        index=True,
        comment="Pending email verification code",
    )
    verification_token_expires_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    reset_password_token: Mapped[str | None] = mapped_column(
        String(128),
        nullable=True,
        unique=True,
        index=True,
        comment="Pending password reset token",
    )
    reset_password_token_expires_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    last_login_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        comment="Timestamp of last successful login",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    __table_args__ = (
        CheckConstraint(
            "(verification_token IS NULL) = (verification_token_expires_at IS NULL)",
            name="ck_users_verification_token_pair",
        ),
        CheckConstraint(
            "(reset_password_token IS NULL) = (reset_password_token_expires_at IS NULL)",
            name="ck_users_reset_token_pair",
        ),
        CheckConstraint(
            "NOT (is_verified AND verification_token IS NOT NULL)",
            name="ck_users_verified_has_no_pending_token",
        ),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, is_verified={self.is_verified})>"
