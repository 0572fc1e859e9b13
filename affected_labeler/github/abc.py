"""Base ABC for GitHub clients."""

from abc import ABC, abstractmethod
from typing import Any

from .models import LabelPage


class GitHubClientBase(ABC):
    """Base ABC for GitHub clients bound to a single repository."""

    owner: str
    repo_name: str

    # Label CRUD
    @abstractmethod
    async def list_labels(self, page: int = 1, per_page: int = 100) -> LabelPage:
        """List one page of label names for a repository."""
        pass

    @abstractmethod
    async def create_label(self, name: str, color: str, description: str | None = None) -> Any:
        """Create a label for a repository."""
        pass

    @abstractmethod
    async def add_labels_to_issue(self, issue_number: int, labels: list[str]) -> Any:
        """Add labels to an issue (or pull request) without removing existing ones."""
        pass

    # Pull Request queries
    @abstractmethod
    async def list_pull_requests_for_commit(self, commit_sha: str) -> list[Any]:
        """List pull requests associated with a commit."""
        pass
