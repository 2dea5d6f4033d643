"""Pydantic schemas for authentication endpoints.

Request fields are optional at the schema level so that missing values reach
the state machine and produce its ``All fields are required`` error rather
than a framework validation error.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class SignupRequest(BaseModel):
    """Request body for signup."""

    email: str | None = Field(None, max_length=255, description="User's email address")
    password: str | None = Field(None, description="User's password")
    name: str | None = Field(None, max_length=255, description="Display name")


class VerifyEmailRequest(BaseModel):
    """Request body for email verification."""

    code: str | None = Field(None, max_length=32, description="Verification code from the email")


class LoginRequest(BaseModel):
    """Request body for login."""

    email: str | None = Field(None, description="User's email address")
    password: str | None = Field(None, description="User's password")


class ForgotPasswordRequest(BaseModel):
    """Request body for starting a password reset."""

    email: str | None = Field(None, description="Email address of the account")


class ResetPasswordRequest(BaseModel):
    """Request body for completing a password reset."""

    password: str | None = Field(None, description="The new password")


class UserResponse(BaseModel):
    """User information in auth responses. Never carries the password hash."""

    id: str = Field(..., description="User ID")
    email: str = Field(..., description="User's email address")
    name: str = Field(..., description="Display name")
    is_verified: bool = Field(..., description="Whether the email address is verified")
    last_login_at: datetime | None = Field(None, description="Last successful login")
    created_at: datetime | None = Field(None, description="When the user was created")
    updated_at: datetime | None = Field(None, description="When the user was last updated")

    model_config = {"from_attributes": True}


class AuthResponse(BaseModel):
    """Response for every auth operation."""

    success: bool = Field(..., description="Whether the operation succeeded")
    message: str = Field(..., description="Human-readable outcome")
    user: UserResponse | None = Field(None, description="User information")
    warning: str | None = Field(
        None, description="Set when the change was saved but the email could not be sent"
    )


class ErrorResponse(BaseModel):
    """Response for failed operations."""

    success: bool = Field(False, description="Always false")
    message: str = Field(..., description="Human-readable error message")
