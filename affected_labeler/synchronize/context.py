"""Resolves which issue or pull request a labeling run applies to."""

import structlog

from affected_labeler.github.abc import GitHubClientBase
from affected_labeler.github.events import GitHubEventPayload
from affected_labeler.synchronize.models import PullRequestContext

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


async def resolve_pull_request_context(
    github_adapter: GitHubClientBase,
    event_payload: GitHubEventPayload,
    commit_sha: str | None,
    event_name: str | None = None,
) -> PullRequestContext | None:
    """Resolve the issue or pull request to label.

    Events that carry an issue or pull request number use it directly. For
    anything else (e.g. a push), the first pull request associated with the
    commit is used. Returns None when there is nothing to label.
    """
    if event_payload.issue_number is not None:
        context = PullRequestContext(github_adapter.owner, github_adapter.repo_name, event_payload.issue_number)
        logger.info("Resolved pull request from event payload", repo=context.full_name, number=context.number, event_name=event_name)
        return context

    if not commit_sha:
        logger.warning("Event has no issue number and no commit SHA is known, nothing to label", event_name=event_name)
        return None

    pull_requests = await github_adapter.list_pull_requests_for_commit(commit_sha)
    if not pull_requests:
        logger.info("No pull request is associated with commit, nothing to label", commit_sha=commit_sha, event_name=event_name)
        return None

    context = PullRequestContext(github_adapter.owner, github_adapter.repo_name, pull_requests[0].number)
    logger.info(
        "Resolved pull request from commit",
        repo=context.full_name,
        number=context.number,
        commit_sha=commit_sha,
        event_name=event_name,
        candidates=len(pull_requests),
    )
    return context
