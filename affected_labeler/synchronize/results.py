"""Contains results of application execution."""

from affected_labeler.monorepo.models import Project
from affected_labeler.synchronize.models import PullRequestContext, RunStatus


class LabelSynchronizationResult:
    """Contains results of synchronizing tags onto an issue or pull request."""

    def __init__(
        self,
        existing_labels: set[str],
        created_labels: list[str],
        skipped_labels: list[str],
        applied_labels: list[str],
    ) -> None:
        """Initialize the result with the labels seen, created, skipped and applied."""
        self.existing_labels = existing_labels
        self.created_labels = created_labels
        self.skipped_labels = skipped_labels
        self.applied_labels = applied_labels


class TagDerivationResult:
    """Contains the affected projects of a change and the tags derived from them."""

    def __init__(self, affected_projects: list[Project], all_project_count: int, tags: set[str]) -> None:
        """Initialize the result with the affected projects, the workspace size and the tags."""
        self.affected_projects = affected_projects
        self.all_project_count = all_project_count
        self.tags = tags


class LabelAffectedResult:
    """Contains results of the label workflow."""

    def __init__(
        self,
        status: RunStatus,
        context: PullRequestContext | None = None,
        tag_derivation: TagDerivationResult | None = None,
        label_synchronization: LabelSynchronizationResult | None = None,
    ) -> None:
        """Initialize the result with how the run ended and what it did along the way."""
        self.status = status
        self.context = context
        self.tag_derivation = tag_derivation
        self.label_synchronization = label_synchronization
