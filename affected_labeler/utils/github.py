"""Contains utility functions for GitHub interactions."""

import re

from affected_labeler.utils.constants import LINK_NEXT_PATTERN

_LINK_NEXT_RE = re.compile(LINK_NEXT_PATTERN)


async def split_repository_in_configuration(repo: str | None) -> tuple[str, str]:
    """Splits the repository in the configuration into owner and repository."""
    if repo is None:
        raise ValueError("Repository is required in config (GITHUB_REPOSITORY).")
    repo = repo.strip("/")
    parts = repo.split("/")
    if len(parts) != 2 or not all(parts):
        raise ValueError("Repository must be in the format 'owner/repo' with no leading/trailing slashes or extra parts.")
    owner, repository = parts
    return owner, repository


def link_header_has_next_page(link_header: str | None) -> bool | None:
    """Report whether a GitHub Link header advertises a next page.

    Returns None when there is no Link header at all, meaning the API gave no
    explicit pagination signal for this response.
    """
    if link_header is None:
        return None
    return _LINK_NEXT_RE.search(link_header) is not None
