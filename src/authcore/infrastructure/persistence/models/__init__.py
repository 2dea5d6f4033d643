"""SQLAlchemy models for authcore tables.

All models inherit from the Base class defined in database.py and are
automatically created on application startup in development mode.
"""

from authcore.infrastructure.persistence.models.user import UserModel

__all__ = [
    "UserModel",
]
