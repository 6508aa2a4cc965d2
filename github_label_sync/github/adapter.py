"""GitHub label client adapter for the githubkit library."""

from functools import wraps
from typing import Any, Awaitable, Callable, Self, TypeVar

import structlog
from githubkit import Response
from githubkit.exception import RequestFailed
from githubkit.versions.latest.models import Label

from github_label_sync.configuration.models import ClientOptions
from github_label_sync.schemas.labels import LabelModel, LabelSnapshot, ResponseMeta
from github_label_sync.utils.github import split_repository_in_configuration

from .abc import GitHubLabelClientBase
from .client import GitHubClient, get_github_token_client
from .exceptions import GitHubUnprocessableEntityError

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])

RATE_LIMIT_HEADERS = ("x-ratelimit-limit", "x-ratelimit-remaining", "x-ratelimit-reset")


def handle_github_422(func: F) -> F:
    """Decorator to handle GitHub 422 Unprocessable Entity errors, raising with details.

    The 422 is only logged at debug level: callers decide whether it is a
    failure or an expected outcome such as a label that already exists.
    """

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except RequestFailed as exc:
            if exc.response.status_code == 422:
                try:
                    error_data = exc.response.json()
                except Exception:
                    error_data = {}
                message = error_data.get("message", "Unprocessable Entity")
                errors = error_data.get("errors", [])
                logger.debug(
                    "GitHub 422 Unprocessable Entity",
                    function=func.__name__,
                    message=message,
                    errors=errors,
                    url=getattr(exc.response, "url", None),
                    status_code=422,
                )
                raise GitHubUnprocessableEntityError(
                    function=func.__name__,
                    message=message,
                    errors=errors,
                    url=getattr(exc.response, "url", None),
                ) from exc
            raise

    return wrapper  # type: ignore


def build_response_meta(response: Response[Any]) -> ResponseMeta:
    """Collect the pagination and rate limit metadata GitHub sends alongside a response."""
    headers = response.headers
    return ResponseMeta(
        status_code=response.status_code,
        link=headers.get("link"),
        rate_limit={name: headers[name] for name in RATE_LIMIT_HEADERS if name in headers},
    )


class GitHubKitLabelAdapter(GitHubLabelClientBase):
    """GitHub label client adapter for the githubkit library."""

    def __init__(self, client: GitHubClient, owner: str, repo_name: str) -> None:
        """Initialize the GitHub client adapter with an already-authenticated client."""
        self.client = client
        self.owner = owner
        self.repo_name = repo_name

    def _omit_null_parameters(self, **kwargs: Any) -> dict[str, Any]:
        """Omit parameters that are None."""
        return {k: v for k, v in kwargs.items() if v is not None}

    @classmethod
    def from_token(cls, owner: str, repo_name: str, github_pat_token: str, options: ClientOptions | None = None) -> Self:
        """Authenticate once with a token and return an adapter scoped to owner/repo_name."""
        options = options or ClientOptions()
        logger.info(
            "Creating client for GitHub instance and repository",
            github_api_url=options.github_api_url,
            owner=owner,
            repo_name=repo_name,
        )
        client = get_github_token_client(github_pat_token, options)
        return cls(client, owner, repo_name)

    @classmethod
    async def create(
        cls,
        repo: str,
        github_pat_token: str,
        options: ClientOptions | None = None,
    ) -> Self:
        """Create a new GitHub label client adapter.

        Args:
            repo: Repository in 'owner/repo' format
            github_pat_token: Personal access token used to authenticate once
            options: Transport options passed through to githubkit

        Returns:
            Configured GitHubKitLabelAdapter instance

        Raises:
            ValueError: If the repository is not in 'owner/repo' format
            RuntimeError: If no token is given
        """
        owner, repo_name = await split_repository_in_configuration(repo=repo)
        return cls.from_token(owner, repo_name, github_pat_token, options)

    # Label CRUD
    async def list_labels(self, per_page: int = 100, **kwargs: Any) -> LabelSnapshot:
        """List labels for a repository, along with the response metadata."""
        response: Response[list[Label]] = await self.client.rest.issues.async_list_labels_for_repo(
            owner=self.owner,
            repo=self.repo_name,
            per_page=per_page,
            **kwargs,
        )
        labels = [LabelModel.from_github(label) for label in response.parsed_data]
        logger.debug("Fetched labels from GitHub", owner=self.owner, repo_name=self.repo_name, label_count=len(labels))
        return LabelSnapshot(labels=labels, meta=build_response_meta(response))

    @handle_github_422
    async def create_label(self, name: str, color: str | None, description: str | None = None, **kwargs: Any) -> Label:
        """Create a label for a repository."""
        params = self._omit_null_parameters(
            name=name,
            color=color,
            description=description,
            **kwargs,
        )
        response: Response[Label] = await self.client.rest.issues.async_create_label(
            owner=self.owner,
            repo=self.repo_name,
            **params,
        )
        return response.parsed_data

    @handle_github_422
    async def delete_label(self, name: str) -> None:
        """Delete a label for a repository."""
        await self.client.rest.issues.async_delete_label(owner=self.owner, repo=self.repo_name, name=name)
        return None
