# This file is intended to hold the setup for the authenticated githubkit client.

"""Sets up the authenticated githubkit client."""

from typing import TypeAlias

from githubkit import GitHub
from githubkit.auth import TokenAuthStrategy

from github_label_sync.configuration.models import ClientOptions

GitHubClient: TypeAlias = GitHub[TokenAuthStrategy]


def get_github_token_client(github_pat_token: str, options: ClientOptions | None = None) -> GitHubClient:
    """Returns a GitHub client authenticated with a personal access token.

    Authentication happens once, here. The returned client reuses the token
    for every subsequent request and never refreshes it.
    """
    if not github_pat_token:
        raise RuntimeError("GitHub token authentication requires github_pat_token in config.")
    options = options or ClientOptions()
    # Disable HTTP caching to always get fresh data, and disable the client's
    # own retries since label operations record failures instead of retrying.
    return GitHub(
        auth=TokenAuthStrategy(github_pat_token),
        base_url=options.github_api_url,
        follow_redirects=options.follow_redirects,
        timeout=options.timeout,
        http_cache=False,
        auto_retry=False,
    )
