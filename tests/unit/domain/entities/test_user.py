"""Unit tests for the User entity."""

from datetime import timedelta

import pytest

from authcore.domain.entities import User, UserProjection, utcnow


def make_user(**overrides) -> User:
    fields = {
        "id": "user-123",
        "email": "ann@example.com",
        "password_hash": "$argon2id$hash",
        "name": "Ann",
    }
    fields.update(overrides)
    return User(**fields)


class TestUserValidation:
    """Tests for User invariants."""

    @pytest.mark.parametrize("field", ["id", "email", "password_hash", "name"])
    def test_required_fields(self, field):
        with pytest.raises(ValueError):
            make_user(**{field: ""})

    def test_verification_pair_must_be_set_together(self):
        with pytest.raises(ValueError, match="Verification token and expiry"):
            make_user(verification_token="123456")

    def test_reset_pair_must_be_set_together(self):
        with pytest.raises(ValueError, match="Reset token and expiry"):
            make_user(reset_password_token_expires_at=utcnow())

    def test_verified_user_cannot_have_pending_code(self):
        with pytest.raises(ValueError, match="verified user"):
            make_user(
                is_verified=True,
                verification_token="123456",
                verification_token_expires_at=utcnow() + timedelta(hours=1),
            )

    def test_defaults(self):
        user = make_user()

        assert user.is_verified is False
        assert user.verification_token is None
        assert user.reset_password_token is None
        assert user.last_login_at is None
        assert user.created_at.tzinfo is not None


class TestProjection:
    """Tests for the outward-facing projection."""

    def test_projection_has_no_password_hash(self):
        projection = make_user().to_projection()

        assert isinstance(projection, UserProjection)
        assert not hasattr(projection, "password_hash")
        assert projection.email == "ann@example.com"
        assert projection.is_verified is False

    def test_projection_is_frozen(self):
        projection = make_user().to_projection()

        with pytest.raises(AttributeError):
            projection.name = "Bob"
