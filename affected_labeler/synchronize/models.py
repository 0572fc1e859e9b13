"""Models describing synchronization decisions and run outcomes."""

from dataclasses import dataclass
from enum import Enum


class SyncDecision(str, Enum):
    """What to do with a single label during synchronization."""

    CREATE = "create"
    NOOP = "noop"
    SKIP = "skip"


class RunStatus(str, Enum):
    """How a labeling run ended."""

    LABELED = "labeled"
    NO_PULL_REQUEST = "no-pull-request"
    NO_AFFECTED_PROJECTS = "no-affected-projects"
    NO_TAGS = "no-tags"


@dataclass(frozen=True)
class PullRequestContext:
    """The issue or pull request a labeling run applies to."""

    owner: str
    repo: str
    number: int

    @property
    def full_name(self) -> str:
        """Repository in 'owner/repo' format."""
        return f"{self.owner}/{self.repo}"
