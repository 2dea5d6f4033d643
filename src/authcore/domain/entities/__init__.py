"""Domain entities for authcore.

Entities are pure Python dataclasses that represent core business concepts.
They have no dependencies on infrastructure or external frameworks.
"""

from authcore.domain.entities.user import User, UserProjection, utcnow

__all__ = [
    "User",
    "UserProjection",
    "utcnow",
]
