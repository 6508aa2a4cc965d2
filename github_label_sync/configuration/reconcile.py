"""Reconcile label synchronization configuration."""

from github_label_sync.configuration.env import Settings
from github_label_sync.configuration.exceptions import GitHubAuthenticationConfigurationUndefinedError
from github_label_sync.configuration.models import ClientOptions, LabelSyncConfig
from github_label_sync.utils.github import split_repository_in_configuration


async def validate_github_authentication_configuration(github_pat_token: str | None) -> str:
    """Validates the GitHub authentication configuration.

    Args:
        github_pat_token (str | None): The GitHub personal access token.

    Raises:
        GitHubAuthenticationConfigurationUndefinedError: If no token is configured.

    Returns:
        str: The token with surrounding whitespace removed.
    """
    if github_pat_token is None or not github_pat_token.strip():
        raise GitHubAuthenticationConfigurationUndefinedError()
    return github_pat_token.strip()


async def reconcile_label_sync_configuration(
    settings: Settings,
    cli_repo: str,
    cli_github_pat_token: str | None = None,
    cli_github_api_url: str | None = None,
    cli_debug: bool = False,
    cli_follow_redirects: bool = False,
    cli_timeout: float | None = None,
) -> LabelSyncConfig:
    """Merge command line arguments over environment settings.

    The repository always comes from the command line. For everything else
    command line values win whenever they are given, and boolean flags are
    enabled when either source enables them.
    """
    repo = cli_repo.strip()
    # Fail early on a malformed repository rather than at the first request.
    await split_repository_in_configuration(repo)

    token = await validate_github_authentication_configuration(cli_github_pat_token or settings.GITHUB_PAT_TOKEN)
    options = ClientOptions(
        debug=cli_debug or settings.DEBUG,
        follow_redirects=cli_follow_redirects or settings.GITHUB_FOLLOW_REDIRECTS,
        timeout=settings.GITHUB_TIMEOUT if cli_timeout is None else cli_timeout,
        github_api_url=cli_github_api_url or settings.GITHUB_API_URL,
    )
    return LabelSyncConfig(repo=repo, github_pat_token=token, options=options)
