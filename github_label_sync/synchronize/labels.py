"""Contains synchronization logic for GitHub labels.

The synchronizer applies a desired label set to a repository. It never
computes a difference between desired and remote labels: an import either
creates every desired label on top of what exists, or first purges every
remote label and then creates the desired set.

Per-label operations never raise. Their outcome is written to the label's
``status``, returned as a :class:`LabelOperationResult`, and the label is
appended to the ``created_labels`` or ``deleted_labels`` audit log whether
the call succeeded or not.
"""

import time
from typing import Any, Iterable

import structlog
from githubkit.exception import RequestFailed

from github_label_sync.configuration.models import ClientOptions
from github_label_sync.github.abc import GitHubLabelClientBase
from github_label_sync.github.adapter import GitHubKitLabelAdapter
from github_label_sync.github.exceptions import GitHubUnprocessableEntityError
from github_label_sync.schemas.labels import LabelModel, LabelSnapshot, LabelStatus
from github_label_sync.synchronize.bulk import run_concurrently
from github_label_sync.synchronize.results import LabelOperation, LabelOperationResult
from github_label_sync.utils.github import split_repository_in_configuration

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

DUPLICATE_ERROR_CODES = frozenset({"already_exists"})
"""Structured GitHub error codes that mean the label is already on the repository."""


def extract_error_payload(exc: Exception) -> dict[str, Any]:
    """Return the structured error body behind a failed GitHub call."""
    if isinstance(exc, GitHubUnprocessableEntityError):
        return exc.payload
    if isinstance(exc, RequestFailed):
        try:
            payload = exc.response.json()
        except Exception:
            payload = None
        if isinstance(payload, dict):
            return payload
    return {"message": str(exc), "errors": []}


def extract_error_code(payload: dict[str, Any]) -> str | None:
    """Return the code of the first entry in a GitHub error payload, if any."""
    errors = payload.get("errors") or []
    if not errors or not isinstance(errors[0], dict):
        return None
    return errors[0].get("code")


def extract_error_message(exc: Exception) -> str:
    """Return a human readable message for a failed GitHub call."""
    if isinstance(exc, GitHubUnprocessableEntityError):
        return exc.message
    return str(exc)


class LabelSynchronizer:
    """Synchronizes a desired label set with the labels of one GitHub repository."""

    def __init__(
        self,
        user: str,
        repo: str,
        token: str,
        options: ClientOptions | None = None,
        *,
        client: GitHubLabelClientBase | None = None,
        max_concurrency: int | None = None,
    ) -> None:
        """Authenticate once against GitHub and prepare empty audit logs.

        Args:
            user: Owner of the repository (user or organization).
            repo: Name of the repository.
            token: Personal access token, used once to authenticate.
            options: Transport options passed through to githubkit.
            client: An already-authenticated label client; built from the
                token when omitted.
            max_concurrency: Cap on simultaneous remote calls during bulk
                operations. Unbounded when omitted.
        """
        self._user = user
        self._repo = repo
        self._token = token
        self._options = options or ClientOptions()
        self._client = client or GitHubKitLabelAdapter.from_token(user, repo, token, self._options)
        self.max_concurrency = max_concurrency
        self.labels: LabelSnapshot = LabelSnapshot(labels=[])
        self._deleted_labels: list[LabelModel] = []
        self._created_labels: list[LabelModel] = []

    @classmethod
    async def create(
        cls,
        repo: str,
        token: str,
        options: ClientOptions | None = None,
        max_concurrency: int | None = None,
    ) -> "LabelSynchronizer":
        """Create a synchronizer for a repository given in 'owner/repo' format."""
        user, repo_name = await split_repository_in_configuration(repo=repo)
        return cls(user, repo_name, token, options, max_concurrency=max_concurrency)

    @property
    def user(self) -> str:
        return self._user

    @property
    def repo(self) -> str:
        return self._repo

    @property
    def token(self) -> str:
        return self._token

    @property
    def options(self) -> ClientOptions:
        return self._options

    @property
    def client(self) -> GitHubLabelClientBase:
        return self._client

    @property
    def deleted_labels(self) -> list[LabelModel]:
        """Every label a delete was attempted for, in completion order."""
        return self._deleted_labels

    @property
    def created_labels(self) -> list[LabelModel]:
        """Every label a create was attempted for, in completion order."""
        return self._created_labels

    async def get_labels(self, include_meta: bool = False) -> LabelSnapshot:
        """Fetch the remote label set and keep it as the current snapshot.

        Response metadata is dropped unless ``include_meta`` is set. Errors
        from GitHub propagate to the caller.
        """
        snapshot = await self._client.list_labels()
        if not include_meta:
            snapshot.meta = None
        self.labels = snapshot
        logger.info("Fetched labels from GitHub", user=self.user, repo=self.repo, label_count=len(snapshot.labels))
        return self.labels

    async def delete_label(self, label: LabelModel) -> LabelOperationResult:
        """Delete a label by name, recording the outcome instead of raising."""
        try:
            response = await self._client.delete_label(label.name)
        except Exception as exc:
            label.status = LabelStatus.ERROR
            logger.warning("Failed to delete label", label_name=label.name, error=str(exc))
            return LabelOperationResult(
                label_name=label.name,
                color=label.color,
                operation=LabelOperation.DELETE,
                status=LabelStatus.ERROR,
                error_detail=extract_error_message(exc),
            )
        else:
            label.status = LabelStatus.SUCCESS
            logger.info("Deleted label", label_name=label.name)
            return LabelOperationResult(
                label_name=label.name,
                color=label.color,
                operation=LabelOperation.DELETE,
                status=LabelStatus.SUCCESS,
                response=response,
            )
        finally:
            self._deleted_labels.append(label)

    async def delete_labels(self, labels: Iterable[LabelModel]) -> list[LabelOperationResult]:
        """Delete every given label concurrently."""
        return await run_concurrently(labels, self.delete_label, self.max_concurrency)

    async def create_label(self, label: LabelModel) -> LabelOperationResult:
        """Create a label, marking it as a duplicate when GitHub says it already exists."""
        try:
            response = await self._client.create_label(label.name, label.color, label.description)
        except Exception as exc:
            error = extract_error_payload(exc)
            code = extract_error_code(error)
            if code in DUPLICATE_ERROR_CODES:
                label.status = LabelStatus.DUPLICATE
                logger.info("Label already exists", label_name=label.name)
            else:
                label.status = LabelStatus.ERROR
                logger.warning("Failed to create label", label_name=label.name, error_code=code, error=error.get("message"))
            return LabelOperationResult(
                label_name=label.name,
                color=label.color,
                operation=LabelOperation.CREATE,
                status=label.status,
                error_detail=error,
            )
        else:
            label.status = LabelStatus.SUCCESS
            logger.info("Created label", label_name=label.name, color=label.color)
            return LabelOperationResult(
                label_name=label.name,
                color=label.color,
                operation=LabelOperation.CREATE,
                status=LabelStatus.SUCCESS,
                response=response,
            )
        finally:
            self._created_labels.append(label)

    async def create_labels(self, labels: Iterable[LabelModel]) -> list[LabelOperationResult]:
        """Create every given label concurrently."""
        return await run_concurrently(labels, self.create_label, self.max_concurrency)

    async def purge_labels(self) -> list[LabelOperationResult]:
        """Delete every label currently on the repository."""
        snapshot = await self.get_labels()
        start_time = time.time()
        logger.info("Purging labels", label_count=len(snapshot.labels))
        results = await self.delete_labels(snapshot.labels)
        logger.info("Purged labels", label_count=len(results), duration=round(time.time() - start_time, 2))
        return results

    async def import_labels(self, labels: Iterable[LabelModel], purge: bool = True) -> list[LabelOperationResult]:
        """Create the desired labels, optionally purging the repository first.

        When purging, every delete has completed before the first create is
        issued.
        """
        if purge:
            await self.purge_labels()
        desired_labels = list(labels)
        start_time = time.time()
        logger.info("Importing labels", label_count=len(desired_labels), purge=purge)
        results = await self.create_labels(desired_labels)
        logger.info("Imported labels", label_count=len(results), duration=round(time.time() - start_time, 2))
        return results
