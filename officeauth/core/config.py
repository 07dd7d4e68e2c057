"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Required fields (e.g. SECRET_KEY, and DATABASE_URL for
the postgres backend) are validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults except those validated in
    validate_required (secret_key, and database_url when the storage
    backend is postgres).
    """

    # App
    app_name: str = "officeauth"
    app_version: str = "1.0.0"
    debug: bool = False

    # Storage: "memory" (in-process stores) or "postgres" (SQLAlchemy + Alembic)
    storage_backend: str = "memory"
    database_url: str = ""
    database_echo: bool = False
    db_pool_size: int | None = None
    db_max_overflow: int | None = None
    db_command_timeout: int | None = None

    # Session tokens (bearer JWT issued at login)
    secret_key: SecretStr = SecretStr("")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 480  # 8 hours

    # Account recovery tokens
    verification_token_ttl_hours: int = 24
    password_reset_token_ttl_minutes: int = 60
    verification_resend_limit: int = 5
    # Seconds between sweeps of expired/used tokens; 0 disables the background sweep.
    token_purge_interval_seconds: int = 3600

    # Offices
    default_tax_year: int = 2024

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:5000"

    # Rate limiting (slowapi) on auth endpoints
    rate_limit_enabled: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_required(self) -> "Settings":
        """Validate required env and storage backend.

        - Postgres: DATABASE_URL required.
        - Memory: nothing else required (state lives for the process lifetime).
        """
        if self.storage_backend == "postgres":
            if not self.database_url:
                raise ValueError(
                    "DATABASE_URL is required when storage_backend is 'postgres'. "
                    "Set in environment or .env file."
                )
        elif self.storage_backend != "memory":
            raise ValueError(
                f"storage_backend must be 'memory' or 'postgres', got: {self.storage_backend!r}"
            )
        if not self.secret_key.get_secret_value():
            raise ValueError(
                "SECRET_KEY is required. Generate with: openssl rand -hex 32."
            )
        if self.verification_resend_limit < 0:
            raise ValueError("verification_resend_limit must be >= 0")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
