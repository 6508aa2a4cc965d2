"""Fixtures for unit tests."""

from typing import Generator
from unittest.mock import AsyncMock, MagicMock

import pytest
import structlog

from github_label_sync.github.abc import GitHubLabelClientBase
from github_label_sync.schemas.labels import LabelSnapshot, ResponseMeta
from github_label_sync.synchronize.labels import LabelSynchronizer


@pytest.fixture(autouse=True)
def configure_structlog_for_caplog() -> Generator[None, None, None]:
    """Configure structlog for use with caplog."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    yield
    structlog.reset_defaults()


@pytest.fixture
def label_client() -> MagicMock:
    """A label client whose remote calls succeed against an empty repository."""
    client = MagicMock(spec=GitHubLabelClientBase)
    client.list_labels = AsyncMock(
        return_value=LabelSnapshot(labels=[], meta=ResponseMeta(status_code=200)),
    )
    client.create_label = AsyncMock(return_value={"id": 1})
    client.delete_label = AsyncMock(return_value=None)
    return client


@pytest.fixture
def synchronizer(label_client: MagicMock) -> LabelSynchronizer:
    """A synchronizer wired to the mocked label client."""
    return LabelSynchronizer("octocat", "Hello-World", "token", client=label_client)
