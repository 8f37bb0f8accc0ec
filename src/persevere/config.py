"""
Configuration settings for persevere.

Defaults for the convenience entry points are loaded from environment
variables prefixed with ``PERSEVERE_`` (or a local ``.env`` file). The retry
engine itself never reads settings; it only sees the PolicyConfig it is given.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from persevere.models import policy


class Settings(BaseSettings):
    """Library settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PERSEVERE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Logging ===
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"  # "production" switches to JSON logs

    # === Retry Defaults ===
    DEFAULT_MAX_ATTEMPTS: int = policy.DEFAULT_MAX_ATTEMPTS
    DEFAULT_BASE_DELAY: float = Field(default=policy.DEFAULT_BASE_DELAY, ge=0.0)  # seconds
    EXPONENTIAL_BASE_DELAY: float = Field(default=1.0, ge=0.0)  # seconds, retry_with_exponential_backoff only

    # === Monitoring ===
    METRICS_ENABLED: bool = True


# Global settings instance
settings = Settings()
