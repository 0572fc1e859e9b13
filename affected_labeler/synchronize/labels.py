"""Contains synchronization logic for GitHub labels."""

from collections.abc import Mapping, Set

import structlog

from affected_labeler.configuration.models import LabelPrefixDefinition
from affected_labeler.github.abc import GitHubClientBase
from affected_labeler.synchronize.models import SyncDecision
from affected_labeler.synchronize.results import LabelSynchronizationResult
from affected_labeler.utils.constants import LABELS_PER_PAGE
from affected_labeler.utils.helpers import split_tag

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


async def fetch_repository_labels(github_adapter: GitHubClientBase, per_page: int = LABELS_PER_PAGE) -> set[str]:
    """Fetch the names of all labels defined in the repository.

    Follows GitHub's Link header when present. Without it, another page is
    requested only when the previous one came back full.
    """
    repository_labels: set[str] = set()
    page = 1
    while True:
        label_page = await github_adapter.list_labels(page=page, per_page=per_page)
        repository_labels.update(label_page.names)
        if label_page.has_next_page is None:
            has_more_pages = len(label_page.names) == per_page
        else:
            has_more_pages = label_page.has_next_page
        if not has_more_pages:
            break
        page += 1
    logger.info("Fetched repository labels", label_count=len(repository_labels), pages=page)
    return repository_labels


async def decide_github_label_sync_action(
    tag: str,
    existing_labels: Set[str],
    prefix_definitions: Mapping[str, LabelPrefixDefinition],
) -> SyncDecision:
    """Decide whether a tag's label needs to be created in the repository.

    Key is label name, compared case-insensitively as GitHub does. Labels can
    only be created for prefixes with a display definition.
    """
    if tag.casefold() in {label.casefold() for label in existing_labels}:
        logger.debug("Label already exists", label_name=tag)
        return SyncDecision.NOOP

    prefix, _ = split_tag(tag)
    if prefix not in prefix_definitions:
        logger.info("Label not found in GitHub and has no prefix definition, not creating it", label_name=tag, prefix=prefix)
        return SyncDecision.SKIP

    logger.info("Label not found in GitHub", label_name=tag)
    return SyncDecision.CREATE


async def create_missing_labels(
    github_adapter: GitHubClientBase,
    tags: Set[str],
    existing_labels: Set[str],
    prefix_definitions: Mapping[str, LabelPrefixDefinition],
) -> tuple[list[str], list[str]]:
    """Create repository labels for tags that do not exist yet.

    Labels are created one at a time. Returns the created and the skipped label names.
    """
    created: list[str] = []
    skipped: list[str] = []
    for tag in sorted(tags):
        decision = await decide_github_label_sync_action(tag, existing_labels, prefix_definitions)
        if decision == SyncDecision.SKIP:
            skipped.append(tag)
        elif decision == SyncDecision.CREATE:
            definition = prefix_definitions[split_tag(tag)[0]]
            logger.info("Creating custom definition for label", label_name=tag, color=definition.color)
            await github_adapter.create_label(name=tag, color=definition.color, description=definition.description)
            created.append(tag)
    return created, skipped


async def sync_labels(
    github_adapter: GitHubClientBase,
    issue_number: int,
    target_tags: Set[str],
    prefix_definitions: Mapping[str, LabelPrefixDefinition],
) -> LabelSynchronizationResult:
    """Make sure every target tag exists as a repository label, then add them all to the issue or pull request."""
    if not target_tags:
        logger.info("No tags to synchronize", issue_number=issue_number)
        return LabelSynchronizationResult(existing_labels=set(), created_labels=[], skipped_labels=[], applied_labels=[])

    existing_labels = await fetch_repository_labels(github_adapter)
    created, skipped = await create_missing_labels(github_adapter, target_tags, existing_labels, prefix_definitions)

    applied = sorted(target_tags)
    logger.info(
        "Adding labels to issue",
        owner=github_adapter.owner,
        repo=github_adapter.repo_name,
        issue_number=issue_number,
        labels=applied,
    )
    await github_adapter.add_labels_to_issue(issue_number=issue_number, labels=applied)
    return LabelSynchronizationResult(
        existing_labels=existing_labels,
        created_labels=created,
        skipped_labels=skipped,
        applied_labels=applied,
    )
