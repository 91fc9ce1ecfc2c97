"""
Shared settings base.

Every config class reads the process environment and an optional .env file,
ignores unrelated variables and matches names case-insensitively.

Dependencies: pydantic, pydantic_settings
System role: Foundation for all configuration classes
"""

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class BaseSettings(PydanticBaseSettings):
    """Environment-backed settings with a validated log level."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = Field(
        default="INFO",
        description="Root log level handed to configure_logging",
    )

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level {value!r}")
        return level
