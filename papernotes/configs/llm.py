"""
Language model configuration settings.

Model identifier, sampling temperature and credentials for note extraction.

Dependencies: pydantic, pydantic_settings
System role: Model backend configuration
"""

from pydantic import AliasChoices, Field
from pydantic_settings import SettingsConfigDict

from papernotes.configs.base import BaseSettings


class LLMSettings(BaseSettings):
    """Google Gemini chat model configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LLM_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    model: str = Field(default="gemini-2.5-flash", description="Chat model identifier")
    temperature: float = Field(
        default=0.0,
        description="Sampling temperature (0.0 for deterministic notes)",
    )
    api_key: str = Field(
        default="",
        validation_alias=AliasChoices("LLM_API_KEY", "GOOGLE_API_KEY"),
        description="Google API key (required)",
    )
    timeout_seconds: float = Field(
        default=600.0,
        description="Upper bound for one note extraction call",
    )
