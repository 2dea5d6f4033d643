"""Unit tests for SessionIssuer."""

from datetime import timedelta

import jwt
import pytest
from starlette.responses import Response

from authcore.infrastructure.auth.session_issuer import (
    InvalidSessionError,
    SessionExpiredError,
    SessionIssuer,
)


@pytest.fixture
def issuer(test_settings) -> SessionIssuer:
    return SessionIssuer(test_settings)


class TestIssue:
    """Tests for issuing session credentials."""

    def test_issue_contains_subject_and_claims(self, issuer, test_settings):
        credential = issuer.issue("user-123")

        decoded = jwt.decode(
            credential, test_settings.secret_key, algorithms=["HS256"], issuer="authcore"
        )
        assert decoded["sub"] == "user-123"
        assert decoded["type"] == "session"
        assert decoded["exp"] - decoded["iat"] == int(timedelta(days=7).total_seconds())

    def test_check_auth_returns_user_id(self, issuer):
        assert issuer.check_auth(issuer.issue("user-123")) == "user-123"


class TestCheckAuth:
    """Tests for rejecting bad credentials."""

    def test_expired_credential(self, issuer):
        credential = issuer.issue("user-123", expires_delta=timedelta(seconds=-1))

        with pytest.raises(SessionExpiredError):
            issuer.check_auth(credential)

    def test_wrong_secret(self, issuer):
        forged = jwt.encode(
            {"sub": "user-123", "iss": "authcore", "type": "session", "exp": 9999999999},
            "some-other-secret",
            algorithm="HS256",
        )

        with pytest.raises(InvalidSessionError):
            issuer.check_auth(forged)

    def test_wrong_token_type(self, issuer, test_settings):
        other = jwt.encode(
            {"sub": "user-123", "iss": "authcore", "type": "refresh", "exp": 9999999999},
            test_settings.secret_key,
            algorithm="HS256",
        )

        with pytest.raises(InvalidSessionError):
            issuer.check_auth(other)

    def test_garbage(self, issuer):
        with pytest.raises(InvalidSessionError):
            issuer.check_auth("not.a.jwt")


class TestCookie:
    """Tests for cookie placement and removal."""

    def test_set_cookie_is_http_only_and_strict(self, test_settings):
        issuer = SessionIssuer(test_settings.model_copy(update={"session_cookie_secure": True}))
        response = Response()

        issuer.set_cookie(response, "credential")

        header = response.headers["set-cookie"]
        assert header.startswith("token=credential")
        assert "HttpOnly" in header
        assert "Secure" in header
        assert "SameSite=strict" in header
        assert f"Max-Age={7 * 24 * 3600}" in header

    def test_clear_expires_cookie(self, issuer):
        response = Response()

        issuer.clear(response)

        header = response.headers["set-cookie"]
        assert header.startswith("token=")
        assert "Max-Age=0" in header
