"""User repository for database operations.

Returns domain entities and projections, never ORM models. Lookups return
``None`` for "no matching record"; storage failures surface as
``RepositoryFault`` and email collisions as ``ConflictError``.

Token consumption is a single conditional UPDATE whose WHERE clause repeats
the token and expiry checks, so two concurrent consumers of the same token
cannot both succeed.
"""

import functools
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, TypeVar

from sqlalchemy import and_, or_, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from authcore.core.logging import get_logger
from authcore.domain.entities.user import User, UserProjection
from authcore.domain.exceptions import ConflictError, RepositoryFault
from authcore.infrastructure.persistence.models import UserModel

logger = get_logger(__name__)

T = TypeVar("T")


def _storage_errors(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
    """Translate SQLAlchemy failures into RepositoryFault."""

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> T:
        try:
            return await func(*args, **kwargs)
        except SQLAlchemyError as e:
            logger.error("User store operation failed", operation=func.__name__, error=str(e))
            raise RepositoryFault() from e

    return wrapper


def _as_utc(value: datetime | None) -> datetime | None:
    # SQLite hands back naive datetimes
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class UserRepository:
    """Repository for user database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    @staticmethod
    def _to_model(entity: User) -> UserModel:
        """Convert domain entity to infrastructure model."""
        return UserModel(
            id=entity.id,
            email=entity.email,
            password_hash=entity.password_hash,
            name=entity.name,
            is_verified=entity.is_verified,
            verification_token=entity.verification_token,
            verification_token_expires_at=entity.verification_token_expires_at,
            reset_password_token=entity.reset_password_token,
            reset_password_token_expires_at=entity.reset_password_token_expires_at,
            last_login_at=entity.last_login_at,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        """Convert infrastructure model to domain entity."""
        return User(
            id=model.id,
            email=model.email,
            password_hash=model.password_hash,
            name=model.name,
            is_verified=model.is_verified,
            verification_token=model.verification_token,
            verification_token_expires_at=_as_utc(model.verification_token_expires_at),
            reset_password_token=model.reset_password_token,
            reset_password_token_expires_at=_as_utc(model.reset_password_token_expires_at),
            last_login_at=_as_utc(model.last_login_at),
            created_at=_as_utc(model.created_at),
            updated_at=_as_utc(model.updated_at),
        )

    async def _one(self, *criteria: Any) -> User | None:
        # Bulk updates skip the identity map, so loaded rows must be refreshed
        result = await self.session.execute(
            select(UserModel)
            .where(*criteria)
            .limit(1)
            .execution_options(populate_existing=True)
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def create(self, user: User) -> User:
        """Create a new user.

        The unique constraint on email is the authoritative duplicate guard.

        Args:
            user: User entity to persist.

        Returns:
            The persisted user entity.

        Raises:
            ConflictError: If the email is already registered.
            RepositoryFault: If the write fails for any other reason.
        """
        model = self._to_model(user)
        self.session.add(model)
        try:
            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            logger.info("User insert rejected by unique constraint", email=user.email)
            raise ConflictError() from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("User insert failed", error=str(e))
            raise RepositoryFault() from e
        return self._to_entity(model)

    @_storage_errors
    async def get_by_id(self, user_id: str) -> User | None:
        """Get a user by ID."""
        return await self._one(UserModel.id == user_id)

    @_storage_errors
    async def get_by_email(self, email: str) -> User | None:
        """Get a user by email (exact, case-sensitive match)."""
        return await self._one(UserModel.email == email)

    @_storage_errors
    async def email_exists(self, email: str) -> bool:
        """Check if an email is already registered."""
        result = await self.session.execute(
            select(UserModel.id).where(UserModel.email == email).limit(1)
        )
        return result.scalar_one_or_none() is not None

    @_storage_errors
    async def get_projection_by_id(self, user_id: str) -> UserProjection | None:
        """Load the outward-facing view of a user without reading the password hash.

        Args:
            user_id: User ID (UUID string).

        Returns:
            UserProjection if found, None otherwise.
        """
        result = await self.session.execute(
            select(
                UserModel.id,
                UserModel.email,
                UserModel.name,
                UserModel.is_verified,
                UserModel.last_login_at,
                UserModel.created_at,
                UserModel.updated_at,
            ).where(UserModel.id == user_id)
        )
        row = result.one_or_none()
        if row is None:
            return None
        return UserProjection(
            id=row.id,
            email=row.email,
            name=row.name,
            is_verified=row.is_verified,
            last_login_at=_as_utc(row.last_login_at),
            created_at=_as_utc(row.created_at),
            updated_at=_as_utc(row.updated_at),
        )

    @_storage_errors
    async def get_by_verification_token(self, token: str, now: datetime) -> User | None:
        """Find the user with a pending verification code that expires after ``now``."""
        return await self._one(
            UserModel.verification_token == token,
            UserModel.verification_token_expires_at > now,
        )

    @_storage_errors
    async def verification_token_in_use(self, token: str) -> bool:
        """Check whether a verification code is already pending for some user."""
        result = await self.session.execute(
            select(UserModel.id).where(UserModel.verification_token == token).limit(1)
        )
        return result.scalar_one_or_none() is not None

    @_storage_errors
    async def get_by_reset_token(self, token: str, now: datetime) -> User | None:
        """Find the user with a pending reset token that expires after ``now``."""
        return await self._one(
            UserModel.reset_password_token == token,
            UserModel.reset_password_token_expires_at > now,
        )

    @_storage_errors
    async def consume_verification_token(self, user_id: str, token: str, now: datetime) -> bool:
        """Mark a user verified and clear the verification pair, if the code is still valid.

        Returns:
            True if this call consumed the code, False if it was already
            consumed, replaced or expired.
        """
        result = await self.session.execute(
            update(UserModel)
            .where(
                UserModel.id == user_id,
                UserModel.verification_token == token,
                UserModel.verification_token_expires_at > now,
            )
            .values(
                is_verified=True,
                verification_token=None,
                verification_token_expires_at=None,
                updated_at=now,
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    @_storage_errors
    async def set_reset_token(self, user_id: str, token: str, expires_at: datetime) -> None:
        """Store a reset token pair, overwriting any pending reset."""
        await self.session.execute(
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(
                reset_password_token=token,
                reset_password_token_expires_at=expires_at,
            )
            .execution_options(synchronize_session=False)
        )

    @_storage_errors
    async def consume_reset_token(
        self, user_id: str, token: str, password_hash: str, now: datetime
    ) -> bool:
        """Replace the password hash and clear the reset pair, if the token is still valid.

        Returns:
            True if this call consumed the token, False otherwise.
        """
        result = await self.session.execute(
            update(UserModel)
            .where(
                UserModel.id == user_id,
                UserModel.reset_password_token == token,
                UserModel.reset_password_token_expires_at > now,
            )
            .values(
                password_hash=password_hash,
                reset_password_token=None,
                reset_password_token_expires_at=None,
                updated_at=now,
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    @_storage_errors
    async def update_last_login(self, user_id: str, at: datetime) -> None:
        """Record a successful login; the timestamp never moves backwards."""
        await self.session.execute(
            update(UserModel)
            .where(
                UserModel.id == user_id,
                or_(UserModel.last_login_at.is_(None), UserModel.last_login_at <= at),
            )
            .values(last_login_at=at)
            .execution_options(synchronize_session=False)
        )

    @_storage_errors
    async def update_password_hash(self, user_id: str, password_hash: str) -> None:
        """Replace a user's password hash (used to upgrade outdated hashes)."""
        await self.session.execute(
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(password_hash=password_hash)
            .execution_options(synchronize_session=False)
        )

    @_storage_errors
    async def clear_expired_tokens(self, now: datetime) -> tuple[int, int]:
        """Clear expired verification and reset token pairs.

        Verification state is left untouched; a user whose code expired stays
        unverified with no pending code.

        Returns:
            Tuple of (verification pairs cleared, reset pairs cleared).
        """
        verification = await self.session.execute(
            update(UserModel)
            .where(
                and_(
                    UserModel.verification_token.is_not(None),
                    UserModel.verification_token_expires_at <= now,
                )
            )
            .values(verification_token=None, verification_token_expires_at=None)
            .execution_options(synchronize_session=False)
        )
        reset = await self.session.execute(
            update(UserModel)
            .where(
                and_(
                    UserModel.reset_password_token.is_not(None),
                    UserModel.reset_password_token_expires_at <= now,
                )
            )
            .values(reset_password_token=None, reset_password_token_expires_at=None)
            .execution_options(synchronize_session=False)
        )
        return verification.rowcount, reset.rowcount

    @_storage_errors
    async def commit(self) -> None:
        """Commit the unit of work."""
        await self.session.commit()

    async def rollback(self) -> None:
        """Roll back the unit of work."""
        await self.session.rollback()
