"""
Name: Application Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup
  - Provide defaults suitable for local development and tests

Collaborators:
  - api/main.py: reads settings for CORS, DB pool and startup validation
  - container.py: decides between Postgres and in-memory repositories
  - identity/tokens.py: JWT secret, TTL and cookie name
  - interfaces/api/http/dependencies.py: redirect target for denied access

Constraints:
  - No business logic, pure configuration
  - Singleton via lru_cache

Notes:
  - An empty DATABASE_URL selects the in-memory repositories
  - Production requires a strong JWT secret and a database
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_env: Application environment (development/test/production)
        database_url: PostgreSQL connection string (empty = in-memory stores)
        db_pool_min_size: Minimum pooled connections
        db_pool_max_size: Maximum pooled connections
        db_statement_timeout_ms: Per-statement timeout applied to each connection
        jwt_secret: Secret used to verify (and, in dev, sign) access tokens
        jwt_access_ttl_minutes: Access token TTL in minutes
        jwt_cookie_name: Cookie carrying the access token
        unauthorized_redirect: Fallback destination when the guard denies access
        allowed_origins: Comma-separated CORS origins
        log_level: Root log level for the "electoral" logger
        log_json: Emit JSON log lines (False = plain text)
        audit_enabled: Record audit events for privileged actions
    """

    app_env: str = "development"

    database_url: str = ""
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10
    db_statement_timeout_ms: int = 15000

    jwt_secret: str = "dev-secret"
    jwt_access_ttl_minutes: int = 60
    jwt_cookie_name: str = "access_token"

    unauthorized_redirect: str = "/"

    allowed_origins: str = "http://localhost:5173"

    log_level: str = "INFO"
    log_json: bool = True

    audit_enabled: bool = True

    @field_validator("db_pool_min_size", "db_pool_max_size")
    @classmethod
    def pool_sizes_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("pool sizes must be greater than 0")
        return v

    @field_validator("unauthorized_redirect")
    @classmethod
    def redirect_must_be_path_or_url(cls, v: str) -> str:
        value = (v or "").strip()
        if not value:
            raise ValueError("unauthorized_redirect must not be empty")
        return value

    @model_validator(mode="after")
    def validate_pool_bounds(self):
        if self.db_pool_min_size > self.db_pool_max_size:
            raise ValueError(
                f"db_pool_min_size ({self.db_pool_min_size}) must not exceed "
                f"db_pool_max_size ({self.db_pool_max_size})"
            )
        return self

    @model_validator(mode="after")
    def validate_security_requirements(self):
        if not self.is_production():
            return self

        insecure_secrets = {"dev-secret", "changeme", "change-me", "password"}
        jwt_secret = (self.jwt_secret or "").strip()
        if not jwt_secret or jwt_secret in insecure_secrets:
            raise ValueError(
                "JWT_SECRET must be set to a strong, non-default value in production"
            )
        if len(jwt_secret) < 32:
            raise ValueError("JWT_SECRET must be at least 32 characters in production")
        if not self.database_url.strip():
            raise ValueError("DATABASE_URL is required in production")
        return self

    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"

    def uses_database(self) -> bool:
        return bool(self.database_url.strip())

    def get_allowed_origins_list(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        return [
            origin.strip()
            for origin in self.allowed_origins.split(",")
            if origin.strip()
        ]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If env vars are invalid
    """
    return Settings()
