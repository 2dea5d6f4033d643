"""API request and response schemas."""

from authcore.infrastructure.api.schemas.auth_schemas import (
    AuthResponse,
    ErrorResponse,
    ForgotPasswordRequest,
    LoginRequest,
    ResetPasswordRequest,
    SignupRequest,
    UserResponse,
    VerifyEmailRequest,
)

__all__ = [
    "AuthResponse",
    "ErrorResponse",
    "ForgotPasswordRequest",
    "LoginRequest",
    "ResetPasswordRequest",
    "SignupRequest",
    "UserResponse",
    "VerifyEmailRequest",
]
