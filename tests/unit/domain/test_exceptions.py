"""Unit tests for the auth error family."""

import pytest

from authcore.domain.exceptions import (
    AuthError,
    ConflictError,
    InvalidCredentialsError,
    InvalidOrExpiredError,
    NotFoundError,
    NotifierFault,
    RepositoryFault,
    ValidationError,
)


@pytest.mark.parametrize(
    "exc_class, message",
    [
        (ValidationError, "All fields are required"),
        (ConflictError, "User already exists"),
        (InvalidCredentialsError, "Invalid credentials"),
        (InvalidOrExpiredError, "Invalid or expired token"),
        (NotFoundError, "User not found"),
        (NotifierFault, "Failed to send email"),
        (RepositoryFault, "Something went wrong, please try again later"),
    ],
)
def test_default_messages(exc_class, message):
    exc = exc_class()

    assert isinstance(exc, AuthError)
    assert exc.message == message
    assert str(exc) == message


def test_custom_message():
    assert InvalidOrExpiredError("Invalid or expired reset token").message == (
        "Invalid or expired reset token"
    )
