"""Utility modules for shared functionality."""

from .constants import (
    DEFAULT_ALL_AFFECTED_TAG,
    DEFAULT_BUILD_GRAPH_COMMAND,
    DEFAULT_GITHUB_API_URL,
    LABELS_PER_PAGE,
    TAG_SEPARATOR,
)
from .retry import retry_on_rate_limit

__all__ = [
    "DEFAULT_ALL_AFFECTED_TAG",
    "DEFAULT_BUILD_GRAPH_COMMAND",
    "DEFAULT_GITHUB_API_URL",
    "LABELS_PER_PAGE",
    "TAG_SEPARATOR",
    "retry_on_rate_limit",
]
