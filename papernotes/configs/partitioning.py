"""
Partitioning service configuration settings.

Credentials and options for the Unstructured partition API that turns PDF
bytes into text segments.

Dependencies: pydantic, pydantic_settings
System role: Partitioning collaborator configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from papernotes.configs.base import BaseSettings


class PartitioningSettings(BaseSettings):
    """Unstructured API configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="UNSTRUCTURED_",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str = Field(default="", description="Unstructured API key (required)")
    api_url: str = Field(
        default="https://api.unstructuredapp.io/general/v0/general",
        description="Unstructured partition endpoint",
    )
    strategy: str = Field(
        default="hi_res",
        description="Partitioning strategy (hi_res, fast, auto, ocr_only)",
    )
    timeout_seconds: float = Field(
        default=300.0,
        description="Upper bound for one partition call",
    )
