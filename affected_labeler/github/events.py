"""Pydantic models for the GitHub Actions event payload."""

from pathlib import Path

import structlog
from pydantic import BaseModel, ConfigDict

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


class EventIssueRef(BaseModel):
    """The issue or pull request object embedded in an event payload."""

    model_config = ConfigDict(extra="ignore")

    number: int


class GitHubEventPayload(BaseModel):
    """The subset of a webhook event payload used to locate the target issue or pull request."""

    model_config = ConfigDict(extra="ignore")

    number: int | None = None
    issue: EventIssueRef | None = None
    pull_request: EventIssueRef | None = None
    after: str | None = None

    @property
    def issue_number(self) -> int | None:
        """The issue or pull request number carried by the event, if any."""
        if self.issue is not None:
            return self.issue.number
        if self.pull_request is not None:
            return self.pull_request.number
        return self.number


async def load_event_payload(event_path: Path | None) -> GitHubEventPayload:
    """Load the event payload written by the Actions runner. A missing file yields an empty payload."""
    if event_path is None or not event_path.is_file():
        logger.info("No GitHub event payload found", event_path=str(event_path) if event_path else None)
        return GitHubEventPayload()
    return GitHubEventPayload.model_validate_json(event_path.read_text(encoding="utf-8"))
