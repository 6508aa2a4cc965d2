"""Base ABC for GitHub label clients."""

from abc import ABC, abstractmethod
from typing import Any

from github_label_sync.schemas.labels import LabelSnapshot


class GitHubLabelClientBase(ABC):
    """Base ABC for GitHub label clients."""

    # Label CRUD
    @abstractmethod
    async def list_labels(self, per_page: int = 100, **kwargs: Any) -> LabelSnapshot:
        """List labels for a repository."""
        pass

    @abstractmethod
    async def create_label(self, name: str, color: str | None, description: str | None = None, **kwargs: Any) -> Any:
        """Create a label for a repository."""
        pass

    @abstractmethod
    async def delete_label(self, name: str) -> Any:
        """Delete a label for a repository."""
        pass
