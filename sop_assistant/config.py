from enum import Enum
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Application environments."""

    DEVELOPMENT = "dev"
    STAGING = "staging"
    PRODUCTION = "prod"


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")

    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Current environment (dev, staging, or prod)",
    )
    client_base_url: str = Field(
        default="http://localhost:3000", description="Frontend base URL"
    )
    server_base_url: str = Field(
        default="http://localhost:8080",
        description="Base URL of the chat API, used by the session client",
    )

    # Assistant behaviour
    assistant_name: str = Field(
        default="SOP Assistant",
        description="Name the assistant introduces itself with",
    )
    document_char_limit: int = Field(
        default=1000,
        ge=1,
        description="Maximum characters of each retrieved document sent to the model",
    )
    request_form_url: str = Field(
        default="https://forms.gle/request-new-sop",
        description="Form where users can request a missing SOP",
    )

    # Local session state
    sessions_state_file: Path = Field(
        default=Path.home() / ".sop_assistant" / "chat_sessions.json",
        description="JSON file holding the persisted chat sessions",
    )

    # Tracing
    braintrust_project_name: str | None = Field(
        default=None,
        description="Braintrust project for Gemini tracing (disabled when unset)",
    )


_app_settings: AppSettings | None = None


def get_app_settings() -> AppSettings:
    global _app_settings
    if _app_settings is None:
        _app_settings = AppSettings()
    return _app_settings


def set_app_settings(settings: AppSettings) -> None:
    """Override the global application settings (used by tests)."""
    global _app_settings
    _app_settings = settings


def get_client_base_url() -> str:
    """Get the client base URL from settings."""
    settings = get_app_settings()
    return settings.client_base_url


class ConfigurationError(Exception):
    """Raised when a required setting (usually an API key) is missing."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
