"""Pydantic Settings model for application configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment variable settings for the application."""

    model_config = SettingsConfigDict(
        env_file=(Path.home() / ".env", ".env"),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # GitHub API settings
    GITHUB_API_URL: str = "https://api.github.com"
    GITHUB_API_TOKEN: str | None = None

    # Aha! API settings
    AHA_DOMAIN: str | None = None
    AHA_TOKEN: str | None = None

    # Workflow settings
    WORKFLOW_REPO: str | None = None
    WORKFLOW_LOGIN: str | None = None
    WORKFLOW_EMAIL: str | None = None
