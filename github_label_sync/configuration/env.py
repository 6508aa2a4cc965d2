"""Pydantic Settings model for application configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment variable settings for the application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    # Generic application-wide settings
    DEBUG: bool = False

    # GitHub API settings
    GITHUB_API_URL: str = "https://api.github.com"

    # GitHub token settings
    GITHUB_PAT_TOKEN: str | None = None
    GITHUB_FOLLOW_REDIRECTS: bool = False
    GITHUB_TIMEOUT: float | None = None


def get_settings() -> Settings:
    """Read settings from the environment and the .env file."""
    return Settings()
