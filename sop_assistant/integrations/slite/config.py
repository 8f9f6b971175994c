"""
Configuration management for the Slite integration package.

This module handles environment variable configuration and validation
for Slite integration using Pydantic settings.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from sop_assistant.utils.logger import logger


class SliteSettings(BaseSettings):
    """Configuration for Slite integration using Pydantic settings."""

    model_config = SettingsConfigDict(
        case_sensitive=False, extra="ignore", env_prefix="SLITE_"
    )

    # Slite configuration
    api_key: str = Field(description="Slite API key for authentication")
    base_url: str = Field(
        default="https://api.slite.com", description="Slite API base URL"
    )
    timeout: int = Field(default=30, description="Request timeout in seconds")


# Global settings instance
_slite_settings: SliteSettings | None = None


def get_slite_settings() -> SliteSettings:
    """
    Get the global Slite settings instance.

    Returns:
        SliteSettings: The global settings instance

    Raises:
        pydantic.ValidationError: If SLITE_API_KEY is not configured
    """
    global _slite_settings
    if _slite_settings is None:
        _slite_settings = SliteSettings()
        logger.info("SliteSettings loaded")
    return _slite_settings


def set_slite_settings(settings: SliteSettings) -> None:
    """
    Set the global Slite settings instance.

    Args:
        settings: The settings to set
    """
    global _slite_settings
    _slite_settings = settings
