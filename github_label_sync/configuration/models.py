"""Models for configuration between CLI arguments and environment variables."""

from dataclasses import dataclass

DEFAULT_GITHUB_API_URL = "https://api.github.com"


@dataclass(frozen=True)
class ClientOptions:
    """Transport options passed through to the githubkit client."""

    debug: bool = False
    follow_redirects: bool = False
    timeout: float | None = None
    github_api_url: str = DEFAULT_GITHUB_API_URL


@dataclass
class LabelSyncConfig:
    """Configuration class for the label synchronization commands."""

    repo: str
    github_pat_token: str
    options: ClientOptions
