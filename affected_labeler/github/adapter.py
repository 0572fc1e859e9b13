"""GitHub client adapter for the githubkit library."""

from functools import wraps
from typing import Any, Awaitable, Callable, Self, TypeVar

import structlog
from githubkit import Response
from githubkit.exception import RequestFailed
from githubkit.versions.latest.models import Label, PullRequestSimple

from affected_labeler.utils.constants import DEFAULT_GITHUB_API_URL, LABELS_PER_PAGE
from affected_labeler.utils.github import link_header_has_next_page, split_repository_in_configuration
from affected_labeler.utils.retry import retry_on_rate_limit

from .abc import GitHubClientBase
from .client import GitHubClient, get_github_client
from .models import LabelPage

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def handle_github_422(func: F) -> F:
    """Decorator to handle GitHub 422 Unprocessable Entity errors, logging and raising with details."""

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except RequestFailed as exc:
            if exc.response.status_code != 422:
                raise
            try:
                error_data = exc.response.json()
            except ValueError:
                error_data = {}
            message = error_data.get("message", "Unprocessable Entity")
            errors = error_data.get("errors", [])
            url = getattr(exc.response, "url", None)
            logger.error(
                "GitHub 422 Unprocessable Entity",
                function=func.__name__,
                message=message,
                errors=errors,
                url=url,
                status_code=422,
            )
            raise ValueError(f"GitHub 422 error in {func.__name__}: {message} | errors: {errors} | url: {url}") from exc

    return wrapper  # type: ignore


class GitHubKitAdapter(GitHubClientBase):
    """GitHub client adapter for the githubkit library."""

    def __init__(self, client: GitHubClient, owner: str, repo_name: str) -> None:
        """Initialize the GitHub client adapter with an already-initialized client."""
        self.client = client
        self.owner = owner
        self.repo_name = repo_name

    @classmethod
    async def create(cls, repo: str, github_token: str, github_api_url: str = DEFAULT_GITHUB_API_URL) -> Self:
        """Create a new GitHub client adapter.

        Args:
            repo: Repository in 'owner/repo' format
            github_token: Personal access token or GitHub Actions token
            github_api_url: GitHub API URL (defaults to https://api.github.com)

        Returns:
            Configured GitHubKitAdapter instance

        Raises:
            ValueError: If the repository is not in 'owner/repo' format
        """
        owner, repo_name = await split_repository_in_configuration(repo=repo)
        logger.info(
            "Creating client for GitHub instance and repository",
            github_api_url=github_api_url,
            owner=owner,
            repo_name=repo_name,
        )
        client = await get_github_client(github_token=github_token, github_api_url=github_api_url)
        return cls(client, owner, repo_name)

    # Label CRUD
    @retry_on_rate_limit()
    async def list_labels(self, page: int = 1, per_page: int = LABELS_PER_PAGE) -> LabelPage:
        """List one page of label names for the repository."""
        response: Response[list[Label]] = await self.client.rest.issues.async_list_labels_for_repo(
            owner=self.owner,
            repo=self.repo_name,
            per_page=per_page,
            page=page,
        )
        return LabelPage(
            names=[label.name for label in response.parsed_data],
            has_next_page=link_header_has_next_page(response.headers.get("link")),
        )

    @handle_github_422
    @retry_on_rate_limit()
    async def create_label(self, name: str, color: str, description: str | None = None) -> Label:
        """Create a label for the repository."""
        params: dict[str, Any] = {"name": name, "color": color}
        if description is not None:
            params["description"] = description
        response: Response[Label] = await self.client.rest.issues.async_create_label(
            owner=self.owner,
            repo=self.repo_name,
            **params,
        )
        return response.parsed_data

    @handle_github_422
    @retry_on_rate_limit()
    async def add_labels_to_issue(self, issue_number: int, labels: list[str]) -> list[Label]:
        """Add labels to an issue (or pull request - GitHub considers them the same for label purposes)."""
        response: Response[list[Label]] = await self.client.rest.issues.async_add_labels(
            owner=self.owner,
            repo=self.repo_name,
            issue_number=issue_number,
            labels=labels,
        )
        return response.parsed_data

    # Pull Request queries
    @retry_on_rate_limit()
    async def list_pull_requests_for_commit(self, commit_sha: str) -> list[PullRequestSimple]:
        """List pull requests associated with a commit."""
        response: Response[list[PullRequestSimple]] = await self.client.rest.repos.async_list_pull_requests_associated_with_commit(
            owner=self.owner,
            repo=self.repo_name,
            commit_sha=commit_sha,
        )
        return response.parsed_data
