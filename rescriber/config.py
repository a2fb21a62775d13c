"""
Centralized configuration management for the Rescriber keyboard.

Uses pydantic-settings for type-safe configuration with environment variable support.
All variables are read with the ``RESCRIBER_`` prefix (e.g. ``RESCRIBER_BASE_URL``).
"""
import logging
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Keyboard settings with environment variable support."""

    # Redaction service
    base_url: str = "https://pii-redactor-if5e.onrender.com"
    redact_path: str = "/redact"
    timeout_seconds: float = 10.0  # connect, read, write, pool and whole call
    user_agent: str = "RescriberKeyboard/1.0"
    retries_on_connect_failure: int = 1

    # Host text buffer
    lookback_chars: int = 1000

    # Keyboard view
    status_reset_delay: float = 1.0  # seconds before "Type your message..." returns after Enter

    # Monitoring
    log_level: str = "INFO"
    enable_metrics: bool = True

    class Config:
        """Pydantic config."""
        env_prefix = "RESCRIBER_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False

    @field_validator("timeout_seconds", "status_reset_delay")
    @classmethod
    def must_be_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("must be greater than zero")
        return v

    @field_validator("lookback_chars")
    @classmethod
    def lookback_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("lookback_chars must be at least 1")
        return v

    @field_validator("retries_on_connect_failure")
    @classmethod
    def retries_not_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("retries_on_connect_failure cannot be negative")
        return v

    @property
    def redact_url(self) -> str:
        """Full URL of the redaction endpoint."""
        return f"{self.base_url.rstrip('/')}/{self.redact_path.lstrip('/')}"


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """
    Get keyboard settings.

    Returns:
        Settings instance
    """
    return settings


def reload_settings() -> Settings:
    """Reload settings from environment (useful for testing)."""
    global settings
    settings = Settings()
    return settings


def configure_logging(level: Optional[str] = None):
    """Apply basic logging configuration at the configured level."""
    logging.basicConfig(
        level=(level or get_settings().log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


if __name__ == "__main__":
    # Print current settings
    settings = get_settings()
    print("=== Current Configuration ===")
    print(f"Redaction endpoint: {settings.redact_url}")
    print(f"Timeout: {settings.timeout_seconds}s (connect retries: {settings.retries_on_connect_failure})")
    print(f"User-Agent: {settings.user_agent}")
    print(f"Lookback: {settings.lookback_chars} characters")
    print(f"Metrics enabled: {settings.enable_metrics}")
