"""Orchestrates labeling a pull request with the tags of its affected projects."""

import time

import structlog

from affected_labeler.configuration.models import BuildGraphConfig, LabelerConfig, ShowTagsConfig, TagConfig
from affected_labeler.github.abc import GitHubClientBase
from affected_labeler.github.adapter import GitHubKitAdapter
from affected_labeler.github.events import load_event_payload
from affected_labeler.monorepo.models import Project
from affected_labeler.monorepo.nx import NxWorkspace
from affected_labeler.synchronize.context import resolve_pull_request_context
from affected_labeler.synchronize.labels import sync_labels
from affected_labeler.synchronize.models import RunStatus
from affected_labeler.synchronize.results import LabelAffectedResult, TagDerivationResult
from affected_labeler.synchronize.tags import derive_tags

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


async def collect_affected_projects(workspace: NxWorkspace, build_graph: BuildGraphConfig) -> tuple[list[Project], dict[str, Project]]:
    """Read the project catalog and resolve the affected project ids against it.

    Affected ids missing from the catalog are reported and ignored.
    """
    all_projects = await workspace.get_project_configs()
    affected_ids = await workspace.list_affected(base=build_graph.base, head=build_graph.head)

    affected_projects: list[Project] = []
    for project_id in affected_ids:
        project = all_projects.get(project_id)
        if project is None:
            logger.warning("Affected project not found in project graph, ignoring it", project=project_id)
            continue
        affected_projects.append(project)
    return affected_projects, all_projects


async def run_tag_derivation(workspace: NxWorkspace, build_graph: BuildGraphConfig, tag_config: TagConfig) -> TagDerivationResult:
    """Resolve the affected projects of a change and derive their tags."""
    start_time = time.time()
    affected_projects, all_projects = await collect_affected_projects(workspace, build_graph)
    tags = derive_tags(
        affected_projects=affected_projects,
        all_projects=all_projects,
        type_abbreviations=tag_config.project_type_abbreviations,
        all_affected_tag=tag_config.all_affected_tag,
    )
    logger.info(
        "Derived tags for change",
        duration=round(time.time() - start_time, 2),
        affected_count=len(affected_projects),
        project_count=len(all_projects),
        tags=sorted(tags),
    )
    return TagDerivationResult(affected_projects=affected_projects, all_project_count=len(all_projects), tags=tags)


async def run_show_tags_workflow(config: ShowTagsConfig, workspace: NxWorkspace | None = None) -> TagDerivationResult:
    """Run the show-tags workflow: derive tags for the change without touching GitHub."""
    workspace = workspace or NxWorkspace(config.build_graph.command, config.build_graph.workspace_root)
    return await run_tag_derivation(workspace, config.build_graph, config.tags)


async def run_label_affected_workflow(
    config: LabelerConfig,
    github_adapter: GitHubClientBase | None = None,
    workspace: NxWorkspace | None = None,
) -> LabelAffectedResult:
    """Run the label workflow: resolve the pull request, derive tags, and synchronize them as labels.

    Ends early, without labeling anything, when no pull request can be resolved
    or when the change yields no tags.
    """
    if github_adapter is None:
        github_adapter = await GitHubKitAdapter.create(
            repo=config.event.repository or "",
            github_token=config.github_token,
            github_api_url=config.github_api_url,
        )
    workspace = workspace or NxWorkspace(config.build_graph.command, config.build_graph.workspace_root)

    event_payload = await load_event_payload(config.event.event_path)
    context = await resolve_pull_request_context(
        github_adapter,
        event_payload,
        commit_sha=config.event.sha or event_payload.after,
        event_name=config.event.event_name,
    )
    if context is None:
        return LabelAffectedResult(RunStatus.NO_PULL_REQUEST)

    tag_derivation = await run_tag_derivation(workspace, config.build_graph, config.tags)
    if not tag_derivation.affected_projects:
        logger.info("No affected projects, nothing to label", number=context.number)
        return LabelAffectedResult(RunStatus.NO_AFFECTED_PROJECTS, context=context, tag_derivation=tag_derivation)
    if not tag_derivation.tags:
        logger.info("Affected projects produced no tags, nothing to label", number=context.number)
        return LabelAffectedResult(RunStatus.NO_TAGS, context=context, tag_derivation=tag_derivation)

    start_time = time.time()
    label_synchronization = await sync_labels(
        github_adapter,
        issue_number=context.number,
        target_tags=tag_derivation.tags,
        prefix_definitions=config.label_prefix_definitions,
    )
    logger.info(
        "Synchronized labels",
        duration=round(time.time() - start_time, 2),
        repo=context.full_name,
        number=context.number,
        created=label_synchronization.created_labels,
        skipped=label_synchronization.skipped_labels,
    )
    return LabelAffectedResult(
        RunStatus.LABELED,
        context=context,
        tag_derivation=tag_derivation,
        label_synchronization=label_synchronization,
    )
