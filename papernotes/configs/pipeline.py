"""
Notes pipeline configuration settings.

Chunking parameters and per-call timeouts for the fetch and persistence stages.

Dependencies: pydantic, pydantic_settings
System role: Pipeline tuning configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from papernotes.configs.base import BaseSettings


class NotesPipelineSettings(BaseSettings):
    """Settings for the notes ingestion pipeline."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="NOTES_PIPELINE_",
        case_sensitive=False,
        extra="ignore",
    )

    # Chunking settings
    chunk_size: int = Field(
        default=300,
        description="Maximum chunk size in characters",
    )
    chunk_overlap: int = Field(
        default=30,
        description="Characters shared between consecutive chunks",
    )

    # Timeouts
    fetch_timeout_seconds: float = Field(
        default=60.0,
        description="Upper bound for downloading the source PDF",
    )
    persistence_timeout_seconds: float = Field(
        default=120.0,
        description="Upper bound for each of the two persistence writes",
    )
