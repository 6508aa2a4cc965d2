"""Synchronize a desired set of GitHub issue labels with a repository."""

from github_label_sync.schemas.labels import LabelModel, LabelSnapshot, LabelStatus
from github_label_sync.synchronize.labels import LabelSynchronizer
from github_label_sync.synchronize.results import LabelOperationResult

__all__ = [
    "LabelModel",
    "LabelOperationResult",
    "LabelSnapshot",
    "LabelStatus",
    "LabelSynchronizer",
]
