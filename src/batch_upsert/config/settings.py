"""
Configuration management for batch-upsert.

Environment-based configuration using Pydantic BaseSettings. Every field can
be overridden with an ``UPSERT_`` prefixed environment variable or an entry in
the ``.env`` file at the project root (``UPSERT_ENV_FILE`` points elsewhere).

The values here are only defaults: anything passed explicitly to the builder
wins over what is configured.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Determine project root for resolving .env by default
PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_ENV_FILE = PROJECT_ROOT / ".env"
ENV_FILE_OVERRIDE = os.getenv("UPSERT_ENV_FILE")
if ENV_FILE_OVERRIDE:
    env_file_candidate = Path(ENV_FILE_OVERRIDE).expanduser()
    if not env_file_candidate.is_absolute():
        env_file_candidate = PROJECT_ROOT / env_file_candidate
    SETTINGS_ENV_FILE = env_file_candidate
else:
    SETTINGS_ENV_FILE = DEFAULT_ENV_FILE


class Settings(BaseSettings):
    """
    Builder defaults with environment variable support.

    Environment variables are loaded with the UPSERT_ prefix, e.g.
    UPSERT_MISSING_KEYS_BEHAVIOR=throw. LOG_LEVEL is read without prefix so it
    can be shared with the host application.
    """

    LOG_LEVEL: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level (uppercase)",
    )

    missing_keys_behavior: Literal["default", "throw"] = Field(
        default="default",
        description="How rows with differing key sets are treated",
    )
    paramstyle: Literal["numeric", "format"] = Field(
        default="numeric",
        description="Positional marker syntax: $1 (numeric) or %s (format)",
    )
    batch_size: int = Field(
        default=1000,
        description="Maximum rows per statement when building batches",
    )
    conflict_where_guard: bool = Field(
        default=True,
        description="Restate the conflict target as a WHERE clause on DO UPDATE",
    )

    @field_validator("batch_size")
    @classmethod
    def _validate_batch_size(cls, value: int) -> int:
        if value <= 0:
            raise ValueError(f"batch_size must be positive, got {value}")
        return value

    model_config = SettingsConfigDict(
        env_prefix="UPSERT_",
        env_file=str(SETTINGS_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance with loaded configuration
    """
    return Settings()
