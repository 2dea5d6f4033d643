"""Password hashing utility using Argon2.

Provides secure password hashing and verification using the Argon2id algorithm,
which is the winner of the Password Hashing Competition and recommended by OWASP.
Cost parameters come from settings; hashing is CPU-bound, so the async
variants push the work onto a worker thread.
"""

import asyncio
from functools import cached_property

from argon2 import PasswordHasher as Argon2Hasher
from argon2.exceptions import InvalidHashError, VerificationError

from authcore.core.config import Settings


class PasswordHasher:
    """Argon2id hasher configured from the argon2_* settings.

    Hashes produced with other cost parameters still verify; ``needs_rehash``
    reports them as outdated so login can upgrade them.
    """

    def __init__(self, settings: Settings) -> None:
        self._hasher = Argon2Hasher(
            time_cost=settings.argon2_time_cost,
            memory_cost=settings.argon2_memory_cost,
            parallelism=settings.argon2_parallelism,
        )

    def hash(self, password: str) -> str:
        """Hash a password using Argon2id.

        Args:
            password: The plaintext password to hash.

        Returns:
            The hashed password string.
        """
        return self._hasher.hash(password)

    def verify(self, password: str, hashed: str) -> bool:
        """Verify a password against a hash.

        Uses constant-time comparison to prevent timing attacks. A malformed
        hash is reported as a mismatch rather than an error.

        Returns:
            True if the password matches, False otherwise.
        """
        try:
            return self._hasher.verify(hashed, password)
        except (VerificationError, InvalidHashError):
            return False

    def needs_rehash(self, hashed: str) -> bool:
        """Check if a password hash was produced with outdated parameters.

        This should be called after successful password verification.
        """
        try:
            return self._hasher.check_needs_rehash(hashed)
        except InvalidHashError:
            return True

    @cached_property
    def _dummy_hash(self) -> str:
        return self._hasher.hash("authcore-dummy-password")

    def verify_dummy(self, password: str) -> None:
        """Burn the same CPU as a real verification.

        Used when a login names an unknown email, so response timing does not
        reveal whether the account exists.
        """
        self.verify(password, self._dummy_hash)

    async def hash_async(self, password: str) -> str:
        """Hash a password on a worker thread."""
        return await asyncio.to_thread(self.hash, password)

    async def verify_async(self, password: str, hashed: str) -> bool:
        """Verify a password on a worker thread."""
        return await asyncio.to_thread(self.verify, password, hashed)

    async def verify_dummy_async(self, password: str) -> None:
        await asyncio.to_thread(self.verify_dummy, password)
