"""Contains results of label operations."""

from collections import Counter
from enum import Enum
from typing import Any, Iterable

from github_label_sync.schemas.labels import LabelStatus


class LabelOperation(str, Enum):
    """The remote operation a result describes."""

    CREATE = "create"
    DELETE = "delete"


class LabelOperationResult:
    """Contains the outcome of a single create or delete call for one label."""

    def __init__(
        self,
        label_name: str,
        color: str | None,
        operation: LabelOperation,
        status: LabelStatus,
        error_detail: Any = None,
        response: Any = None,
    ) -> None:
        """Initialize the result with the label, the operation, and its outcome."""
        self.label_name = label_name
        self.color = color
        self.operation = operation
        self.status = status
        self.error_detail = error_detail
        self.response = response

    @property
    def succeeded(self) -> bool:
        return self.status == LabelStatus.SUCCESS

    @property
    def is_duplicate(self) -> bool:
        return self.status == LabelStatus.DUPLICATE

    def __repr__(self) -> str:
        return f"LabelOperationResult(label_name={self.label_name!r}, operation={self.operation.value}, status={self.status.value})"


def summarize(results: Iterable[LabelOperationResult]) -> dict[LabelStatus, int]:
    """Count results per status, including statuses with no results."""
    counts = Counter(result.status for result in results)
    return {status: counts.get(status, 0) for status in LabelStatus}
