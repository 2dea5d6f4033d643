"""Authentication API routes.

Thin transport over AuthService: each handler calls one state machine
operation, applies the session cookie instruction from the result and
serializes the user projection. Failures are raised as AuthError and turned
into ``{"success": false, "message": ...}`` by the app's exception handlers.
"""

from fastapi import APIRouter, Response, status

from authcore.core.logging import get_logger
from authcore.domain.services.auth_service import AuthResult
from authcore.infrastructure.api.dependencies import (
    AuthServiceDep,
    CurrentUserIdDep,
    SessionIssuerDep,
    SettingsDep,
)
from authcore.infrastructure.api.schemas import (
    AuthResponse,
    ErrorResponse,
    ForgotPasswordRequest,
    LoginRequest,
    ResetPasswordRequest,
    SignupRequest,
    UserResponse,
    VerifyEmailRequest,
)
from authcore.infrastructure.auth.session_issuer import SessionIssuer

logger = get_logger(__name__)

router = APIRouter()

_failure = {400: {"model": ErrorResponse, "description": "Operation failed"}}


def _respond(
    result: AuthResult,
    response: Response,
    session_issuer: SessionIssuer,
    expose_warning: bool = True,
) -> AuthResponse:
    if result.session_token:
        session_issuer.set_cookie(response, result.session_token)
    if result.clear_session:
        session_issuer.clear(response)

    return AuthResponse(
        success=True,
        message=result.message,
        user=UserResponse.model_validate(result.user) if result.user else None,
        warning=result.notification_error if expose_warning else None,
    )


@router.post(
    "/signup",
    status_code=status.HTTP_201_CREATED,
    response_model=AuthResponse,
    response_model_exclude_none=True,
    responses=_failure,
)
async def signup(
    request: SignupRequest,
    response: Response,
    auth_service: AuthServiceDep,
    session_issuer: SessionIssuerDep,
) -> AuthResponse:
    """Register a new user, open a session and send the verification code."""
    result = await auth_service.signup(
        request.email or "", request.password or "", request.name or ""
    )
    return _respond(result, response, session_issuer)


@router.post(
    "/verify-email",
    response_model=AuthResponse,
    response_model_exclude_none=True,
    responses=_failure,
)
async def verify_email(
    request: VerifyEmailRequest,
    response: Response,
    auth_service: AuthServiceDep,
    session_issuer: SessionIssuerDep,
) -> AuthResponse:
    """Verify an email address with the code sent at signup."""
    result = await auth_service.verify_email(request.code or "")
    return _respond(result, response, session_issuer)


@router.post(
    "/login",
    response_model=AuthResponse,
    response_model_exclude_none=True,
    responses=_failure,
)
async def login(
    request: LoginRequest,
    response: Response,
    auth_service: AuthServiceDep,
    session_issuer: SessionIssuerDep,
) -> AuthResponse:
    """Authenticate with email and password and open a session."""
    result = await auth_service.login(request.email or "", request.password or "")
    return _respond(result, response, session_issuer)


@router.post(
    "/logout",
    response_model=AuthResponse,
    response_model_exclude_none=True,
)
async def logout(
    response: Response,
    auth_service: AuthServiceDep,
    session_issuer: SessionIssuerDep,
) -> AuthResponse:
    """Clear the session cookie."""
    result = await auth_service.logout()
    return _respond(result, response, session_issuer)


@router.post(
    "/forgot-password",
    response_model=AuthResponse,
    response_model_exclude_none=True,
    responses=_failure,
)
async def forgot_password(
    request: ForgotPasswordRequest,
    response: Response,
    settings: SettingsDep,
    auth_service: AuthServiceDep,
    session_issuer: SessionIssuerDep,
) -> AuthResponse:
    """Send a password reset link if the email belongs to an account.

    The response is identical whether or not the account exists, so a mail
    failure is logged but not reported here.
    """
    result = await auth_service.forgot_password(request.email or "", settings.client_url)
    return _respond(result, response, session_issuer, expose_warning=False)


@router.post(
    "/reset-password/{token}",
    response_model=AuthResponse,
    response_model_exclude_none=True,
    responses=_failure,
)
async def reset_password(
    token: str,
    request: ResetPasswordRequest,
    response: Response,
    auth_service: AuthServiceDep,
    session_issuer: SessionIssuerDep,
) -> AuthResponse:
    """Set a new password using the token from the reset link."""
    result = await auth_service.reset_password(token, request.password or "")
    return _respond(result, response, session_issuer)


@router.get(
    "/check-auth",
    response_model=AuthResponse,
    response_model_exclude_none=True,
    responses={
        **_failure,
        401: {"model": ErrorResponse, "description": "Missing or invalid session"},
    },
)
async def check_auth(
    user_id: CurrentUserIdDep,
    response: Response,
    auth_service: AuthServiceDep,
    session_issuer: SessionIssuerDep,
) -> AuthResponse:
    """Return the user behind the current session."""
    result = await auth_service.check_auth(user_id)
    return _respond(result, response, session_issuer)
