"""Configuration management for authcore.

This module uses Pydantic Settings to load and validate configuration from
environment variables and .env files. Configuration is loaded once at startup,
is frozen, and is passed explicitly into the components that need it.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SECRET_KEY = "change-me-in-production-use-openssl-rand-hex-32"


class Settings(BaseSettings):
    """Application configuration settings.

    Settings are loaded from environment variables and .env files.
    All configuration values are validated at startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="AUTHCORE_",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Application Settings
    app_name: str = "authcore"
    app_version: str = "0.1.0"
    environment: Literal["development", "production", "testing"] = "development"
    debug: bool = False
    api_prefix: str = "/api/v1"
    client_url: str = Field(
        default="http://localhost:5173",
        description="Base URL of the client app, used to build password reset links",
    )

    # Server Settings
    host: str = "0.0.0.0"
    port: int = 8000
    workers: int = 1

    # Database Settings
    database_url: str = "sqlite+aiosqlite:///./data/authcore.db"
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout: int = 30
    db_pool_recycle: int = 3600
    db_echo: bool = False

    # Session Settings
    secret_key: str = Field(
        default=DEFAULT_SECRET_KEY,
        description="Secret key for session credential signing",
    )
    session_expire_days: int = 7
    session_cookie_name: str = "token"
    session_cookie_secure: bool = True

    # Token Settings
    verification_token_expire_hours: int = 24
    verification_code_length: int = Field(default=6, ge=4, le=12)
    reset_token_expire_hours: int = 1

    # Password Hashing (Argon2id cost parameters)
    argon2_time_cost: int = 3
    argon2_memory_cost: int = 65536  # KiB
    argon2_parallelism: int = 4

    # Email Settings
    email_provider: Literal["console", "smtp"] = "console"
    email_from: str = "no-reply@authcore.local"
    email_from_name: str = "authcore"
    smtp_host: str | None = None
    smtp_port: int = 587
    smtp_username: str | None = None
    smtp_password: str | None = None
    smtp_use_tls: bool = True
    smtp_use_ssl: bool = False
    smtp_timeout: int = 10

    # CORS Settings
    cors_origins: list[str] = Field(default=["http://localhost:5173"])

    # Logging Settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: str | list[str]) -> list[str]:
        """Parse CORS origins from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",")]
        return v

    @model_validator(mode="after")
    def validate_production_secrets(self) -> "Settings":
        """Refuse to run production with the placeholder signing secret."""
        if self.is_production and self.secret_key == DEFAULT_SECRET_KEY:
            raise ValueError(
                "AUTHCORE_SECRET_KEY must be set in production. "
                "Generate one with: openssl rand -hex 32"
            )
        return self

    @model_validator(mode="after")
    def validate_smtp(self) -> "Settings":
        """Validate that SMTP settings are present when SMTP is selected."""
        if self.email_provider == "smtp" and not self.smtp_host:
            raise ValueError("AUTHCORE_SMTP_HOST is required when email_provider is 'smtp'")
        return self

    @model_validator(mode="after")
    def validate_sqlite_workers(self) -> "Settings":
        """Validate that SQLite is not used with multiple workers."""
        if self.workers > 1 and self.database_url.startswith("sqlite"):
            raise ValueError(
                "SQLite does not support multiple worker processes. "
                f"Requested {self.workers} workers, but SQLite requires workers=1. "
                "Either use --workers 1 or switch to PostgreSQL."
            )
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment == "testing"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Settings are loaded once at startup and then handed to the components
    that need them.

    Returns:
        Settings: Cached application settings instance.
    """
    return Settings()
