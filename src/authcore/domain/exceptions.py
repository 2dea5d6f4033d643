"""Typed failures raised by the account state machine and its collaborators.

Every failure the caller can observe derives from AuthError, so the transport
layer maps the whole family to a structured ``success=false`` response.
"""


class AuthError(Exception):
    """Base class for all authentication errors."""

    default_message = "Authentication error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AuthError):
    """Raised when required input is missing or malformed."""

    default_message = "All fields are required"


class ConflictError(AuthError):
    """Raised when an email is already registered."""

    default_message = "User already exists"


class InvalidCredentialsError(AuthError):
    """Raised on login failure.

    The message is identical for an unknown email and a wrong password.
    """

    default_message = "Invalid credentials"


class InvalidOrExpiredError(AuthError):
    """Raised when a verification or reset token does not match or has expired."""

    default_message = "Invalid or expired token"


class NotFoundError(AuthError):
    """Raised when a session resolves to no user."""

    default_message = "User not found"


class NotifierFault(AuthError):
    """Raised when an email could not be dispatched."""

    default_message = "Failed to send email"


class RepositoryFault(AuthError):
    """Raised when the user store is unavailable or a write fails."""

    default_message = "Something went wrong, please try again later"
