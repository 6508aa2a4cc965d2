"""Custom exceptions for the processing module."""

from typing import Any


class YAMLProcessingError(Exception):
    """Raised when one or more label files could not be loaded or validated.

    Each entry in ``errors`` describes one problem and carries at least the
    offending ``file`` and an ``error`` message. Label validation errors
    also carry the ``label_index`` and, for categorized labels, the
    ``category``.
    """

    def __init__(self, errors: list[dict[str, Any]]):
        self.errors = errors
        super().__init__(f"{len(errors)} error(s) encountered while loading labels from {', '.join(self.files) or 'no files'}.")

    @property
    def files(self) -> list[str]:
        """The distinct files that produced an error, in first-seen order."""
        return list(dict.fromkeys(str(err.get("file")) for err in self.errors if err.get("file") is not None))
