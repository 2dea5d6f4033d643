"""Domain services for authcore.

Services contain business logic that doesn't naturally fit within a single entity.
"""

from authcore.domain.services.auth_service import AuthResult, AuthService

__all__ = [
    "AuthResult",
    "AuthService",
]
