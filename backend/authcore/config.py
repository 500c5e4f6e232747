"""
Application configuration loaded from environment variables.
"""
from dataclasses import dataclass
from datetime import timedelta
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


@dataclass(frozen=True, slots=True)
class AuthConfig:
    """
    Immutable authentication policy handed to AuthService at construction.

    Attributes:
        secret: Server secret used to sign access tokens and fingerprint
            refresh tokens
        issuer: Value of the ``iss`` claim on issued access tokens
        access_ttl: Access token lifetime
        refresh_ttl: Refresh token lifetime
        max_login_attempts: Consecutive failures that trigger a lockout
        lockout_duration: How long a lockout marker lives
    """
    secret: str
    issuer: str = "aogeri-api"
    access_ttl: timedelta = timedelta(minutes=15)
    refresh_ttl: timedelta = timedelta(days=7)
    max_login_attempts: int = 5
    lockout_duration: timedelta = timedelta(minutes=15)


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # MongoDB
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_server_selection_timeout_ms: int = 5000
    mongo_socket_timeout_ms: int = 10000

    # Redis
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_password: str | None = None
    redis_db: int = 0
    redis_socket_timeout_seconds: float = 5.0

    # JWT Configuration
    jwt_secret_key: str = "your-secret-key-change-in-production"
    jwt_algorithm: str = "HS256"
    jwt_issuer: str = "aogeri-api"
    jwt_access_token_expire_minutes: int = Field(default=15, gt=0)
    jwt_refresh_token_expire_days: int = Field(default=7, gt=0)

    # Login lockout
    max_login_attempts: int = Field(default=5, gt=0)
    lockout_duration_minutes: int = Field(default=15, gt=0)

    # HTTP
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    log_level: str = "INFO"

    def auth_config(self) -> AuthConfig:
        """Build the immutable auth policy from these settings."""
        return AuthConfig(
            secret=self.jwt_secret_key,
            issuer=self.jwt_issuer,
            access_ttl=timedelta(minutes=self.jwt_access_token_expire_minutes),
            refresh_ttl=timedelta(days=self.jwt_refresh_token_expire_days),
            max_login_attempts=self.max_login_attempts,
            lockout_duration=timedelta(minutes=self.lockout_duration_minutes),
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
