"""Contains utility functions for GitHub interactions."""

import re

REPOSITORY_URL_PATTERN = re.compile(r"^(?:https?://[^/]+/|git@[^:]+:)(?P<path>.+?)(?:\.git)?/?$")
"""Matches HTTPS and SSH clone URLs, capturing the owner/repo path."""


async def split_repository_in_configuration(repo: str | None) -> tuple[str, str]:
    """Splits the repository in the configuration into owner and repository.

    Accepts 'owner/repo' as well as HTTPS or SSH repository URLs such as
    'https://github.com/owner/repo.git' or 'git@github.com:owner/repo.git'.
    """
    if repo is None:
        raise ValueError("Label synchronization requires repo in config.")
    match = REPOSITORY_URL_PATTERN.match(repo.strip())
    if match is not None:
        repo = match.group("path")
    repo = repo.strip("/")
    parts = repo.split("/")
    if len(parts) != 2 or not all(parts):
        raise ValueError("Repository must be in the format 'owner/repo' with no leading/trailing slashes or extra parts.")
    owner, repository = parts
    return owner, repository
