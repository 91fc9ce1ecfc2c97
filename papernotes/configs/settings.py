"""
Unified application settings.

Aggregates all configuration modules into a single Settings class that is
built once at process start and handed to the pipeline explicitly.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from papernotes.configs.base import BaseSettings
from papernotes.configs.database import DatabaseSettings
from papernotes.configs.llm import LLMSettings
from papernotes.configs.partitioning import PartitioningSettings
from papernotes.configs.pipeline import NotesPipelineSettings
from papernotes.configs.vector_store import VectorStoreSettings
from papernotes.core.exceptions import ConfigurationError


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    vector_store: VectorStoreSettings = Field(default_factory=VectorStoreSettings)
    partitioning: PartitioningSettings = Field(default_factory=PartitioningSettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)
    pipeline: NotesPipelineSettings = Field(default_factory=NotesPipelineSettings)

    def missing_required(self) -> list[str]:
        """
        List required settings that are not configured.

        Returns:
            list[str]: Environment variable names that must be set
        """
        missing = []
        if not self.database.url:
            missing.append("DATABASE_URL")
        if not self.partitioning.api_key:
            missing.append("UNSTRUCTURED_API_KEY")
        if not self.llm.api_key:
            missing.append("GOOGLE_API_KEY")
        return missing

    def validate_required(self) -> None:
        """
        Fail fast when required credentials or URLs are absent.

        Raises:
            ConfigurationError: One or more required settings are missing
        """
        missing = self.missing_required()
        if missing:
            raise ConfigurationError(
                f"Missing required configuration: {', '.join(missing)}",
                setting=missing,
            )


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Environment variables are loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from papernotes.configs import get_settings
        settings = get_settings()
    """
    return Settings()
