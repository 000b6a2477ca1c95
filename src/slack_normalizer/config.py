"""Configuration management for the Slack normalizer."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Slack Web API endpoints
CHAT_POST_MESSAGE_URL = "https://slack.com/api/chat.postMessage"
CHAT_UPDATE_URL = "https://slack.com/api/chat.update"


class Settings(BaseSettings):
    """Runtime settings. The transform itself reads none of these."""

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Log level")
    log_format: Literal["text", "json"] = Field(default="text", description="Log format")

    model_config = SettingsConfigDict(
        env_prefix="SLACK_NORMALIZER_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )


def get_settings() -> Settings:
    """Get application settings.

    Returns:
        Settings instance loaded from the environment and an optional ``.env`` file
    """
    return Settings()
