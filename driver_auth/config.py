"""Configuration management using pydantic-settings."""

from datetime import timedelta
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Variables use the DRIVER_AUTH_ prefix, e.g. DRIVER_AUTH_JWT_SECRET_KEY.
    """

    # local: pretty DEBUG logs, dev: JSON DEBUG logs, prod: JSON INFO logs
    env: Literal["local", "dev", "prod"] = "local"

    host: str = "localhost"
    port: int = 8082
    cors_origins: list[str] = ["http://localhost:3000"]

    database_path: str = "./data/driver_auth.db"
    # Seconds SQLite waits for a locked database before failing
    database_timeout: float = 5.0

    # JWT Configuration
    jwt_secret_key: str = "change-me-in-production-use-env-var"
    jwt_algorithm: str = "HS256"
    # Accepts seconds (3600) or ISO 8601 durations (PT1H)
    token_ttl: timedelta = timedelta(hours=1)

    # Bcrypt work factor (higher = more secure but slower)
    # For tests, use 4 for faster execution while maintaining functionality
    bcrypt_work_factor: int = 10

    model_config = SettingsConfigDict(
        env_prefix="DRIVER_AUTH_",
        env_file=".env",
        case_sensitive=False
    )

    @field_validator("jwt_secret_key")
    @classmethod
    def secret_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("jwt_secret_key must not be empty")
        return v

    @field_validator("token_ttl", mode="before")
    @classmethod
    def ttl_seconds_string(cls, v):
        if isinstance(v, str) and v.strip().isdigit():
            return int(v)
        return v

    @field_validator("token_ttl")
    @classmethod
    def ttl_whole_positive_seconds(cls, v: timedelta) -> timedelta:
        if v <= timedelta(0):
            raise ValueError("token_ttl must be positive")
        if v.microseconds:
            raise ValueError("token_ttl must be a whole number of seconds")
        return v

    @field_validator("bcrypt_work_factor")
    @classmethod
    def work_factor_in_range(cls, v: int) -> int:
        if not 4 <= v <= 31:
            raise ValueError("bcrypt_work_factor must be between 4 and 31")
        return v


settings = Settings()
