"""Unit tests for password hashing."""

from unittest.mock import MagicMock

import pytest
from argon2 import PasswordHasher as Argon2Hasher

from authcore.domain.services.auth_service import AuthService
from authcore.infrastructure.auth.password_hasher import PasswordHasher


class TestHash:
    """Tests for PasswordHasher.hash."""

    def test_hash_returns_argon2_hash(self, password_hasher):
        """Test that hash returns a valid Argon2id hash."""
        hashed = password_hasher.hash("SecureP@ss123!")

        assert hashed.startswith("$argon2id$")

    def test_hash_different_for_same_input(self, password_hasher):
        """Test that hashing the same password twice produces different hashes (due to salt)."""
        assert password_hasher.hash("SecureP@ss123!") != password_hasher.hash("SecureP@ss123!")

    def test_hash_does_not_contain_plaintext(self, password_hasher):
        password = "SecureP@ss123!"
        assert password not in password_hasher.hash(password)

    def test_hash_uses_configured_cost(self, password_hasher):
        assert "m=1024,t=1,p=1" in password_hasher.hash("SecureP@ss123!")


class TestVerify:
    """Tests for PasswordHasher.verify."""

    def test_verify_correct(self, password_hasher):
        hashed = password_hasher.hash("SecureP@ss123!")

        assert password_hasher.verify("SecureP@ss123!", hashed) is True

    def test_verify_incorrect(self, password_hasher):
        hashed = password_hasher.hash("SecureP@ss123!")

        assert password_hasher.verify("WrongPassword", hashed) is False

    def test_verify_case_sensitive(self, password_hasher):
        hashed = password_hasher.hash("SecureP@ss123!")

        assert password_hasher.verify("securep@ss123!", hashed) is False

    def test_verify_malformed_hash_is_mismatch(self, password_hasher):
        """A corrupt stored hash is reported as a mismatch, not raised."""
        assert password_hasher.verify("anything", "not-a-hash") is False


class TestNeedsRehash:
    """Tests for PasswordHasher.needs_rehash."""

    def test_current_hash_does_not_need_rehash(self, password_hasher):
        assert password_hasher.needs_rehash(password_hasher.hash("SecureP@ss123!")) is False

    def test_hash_with_other_parameters_needs_rehash(self, password_hasher):
        outdated = Argon2Hasher(time_cost=2, memory_cost=2048, parallelism=2).hash("pw")

        assert password_hasher.needs_rehash(outdated) is True

    def test_malformed_hash_needs_rehash(self, password_hasher):
        assert password_hasher.needs_rehash("not-a-hash") is True


class TestAsyncVariants:
    """Tests for the worker-thread variants."""

    @pytest.mark.asyncio
    async def test_hash_and_verify_async(self, password_hasher):
        hashed = await password_hasher.hash_async("SecureP@ss123!")

        assert await password_hasher.verify_async("SecureP@ss123!", hashed) is True
        assert await password_hasher.verify_async("wrong", hashed) is False

    @pytest.mark.asyncio
    async def test_dummy_verify_returns_none(self, password_hasher):
        assert await password_hasher.verify_dummy_async("whatever") is None


def test_auth_service_builds_hasher_from_its_settings(test_settings):
    service = AuthService(
        settings=test_settings,
        user_repo=MagicMock(),
        email_service=MagicMock(),
        session_issuer=MagicMock(),
    )

    assert "m=1024,t=1,p=1" in service.password_hasher.hash("SecureP@ss123!")
