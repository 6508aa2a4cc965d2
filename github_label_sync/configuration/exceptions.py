"""Contains exceptions raised when reconciling application configuration."""


class ConfigurationError(Exception):
    """Base class for configuration problems reported to the user before any GitHub call."""


class GitHubAuthenticationConfigurationUndefinedError(ConfigurationError):
    """Raised when no GitHub personal access token is configured."""

    def __init__(self, cli_name: str = "github_pat_token", env_name: str = "GITHUB_PAT_TOKEN") -> None:
        super().__init__(
            "No GitHub authentication configuration provided. Please provide a personal access token "
            f"(command line option {cli_name}, environment variable {env_name})."
        )

