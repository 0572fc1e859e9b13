"""Fixtures for unit tests."""

from typing import Generator
from unittest.mock import AsyncMock, MagicMock

import pytest
import structlog

from affected_labeler.github.abc import GitHubClientBase
from affected_labeler.github.models import LabelPage
from affected_labeler.monorepo.nx import NxWorkspace


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
def github_adapter() -> MagicMock:
    """A GitHub adapter for acme/monorepo with no labels and no pull requests."""
    adapter = MagicMock(spec=GitHubClientBase)
    adapter.owner = "acme"
    adapter.repo_name = "monorepo"
    adapter.list_labels = AsyncMock(return_value=LabelPage(names=[], has_next_page=False))
    adapter.create_label = AsyncMock()
    adapter.add_labels_to_issue = AsyncMock()
    adapter.list_pull_requests_for_commit = AsyncMock(return_value=[])
    return adapter


@pytest.fixture
def workspace() -> MagicMock:
    """An Nx workspace with no projects."""
    nx_workspace = MagicMock(spec=NxWorkspace)
    nx_workspace.get_project_configs = AsyncMock(return_value={})
    nx_workspace.list_affected = AsyncMock(return_value=[])
    return nx_workspace
