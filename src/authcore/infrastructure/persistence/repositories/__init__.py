"""Repositories for database operations."""

from authcore.infrastructure.persistence.repositories.user_repository import UserRepository

__all__ = [
    "UserRepository",
]
