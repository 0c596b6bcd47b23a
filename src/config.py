"""Configuration management using Pydantic Settings."""

import os
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        # Only load .env file in development (not Lambda/production)
        env_file=".env" if os.getenv("AWS_EXECUTION_ENV") is None else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Configuration
    log_level: str = "INFO"
    api_title: str = "GraphQL Lambda"
    api_version: str = "1.0.0"

    # Adapter switches (all off unless explicitly enabled)
    enable_access_log: bool = False
    enable_gzip_compression: bool = False
    show_failure_cause: bool = False

    # API key records for the bundled validator, JSON encoded in API_KEYS
    api_keys: list[dict[str, Any]] = []

    @field_validator("api_keys", mode="before")
    @classmethod
    def convert_empty_to_list(cls, v):
        """Treat an unset or blank API_KEYS as no keys."""
        if v is None:
            return []
        if isinstance(v, str) and v.strip() == "":
            return []
        return v


# Global settings instance
settings = Settings()
