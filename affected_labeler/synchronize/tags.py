"""Derives label tags from the projects affected by a change."""

from collections.abc import Mapping, Sequence, Sized

import structlog

from affected_labeler.monorepo.models import Project
from affected_labeler.utils.helpers import join_tag, split_tag

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def normalize_project_tag(tag: str, type_abbreviations: Mapping[str, str]) -> str:
    """Normalize a declared project tag.

    Tags whose prefix is a known project type are reduced to 'prefix:suffix';
    everything else is kept verbatim.
    """
    prefix, suffix = split_tag(tag)
    if prefix in type_abbreviations and suffix is not None:
        return join_tag(prefix, suffix)
    return tag


def project_type_tag(project: Project, type_abbreviations: Mapping[str, str]) -> str | None:
    """Build the 'abbreviation:name' tag for a project, or None if its type has no abbreviation."""
    abbreviation = type_abbreviations.get(project.project_type) if project.project_type else None
    if not abbreviation:
        logger.warning(
            "Project type has no configured abbreviation, omitting project type tag",
            project=project.id,
            project_type=project.project_type,
            known_types=sorted(type_abbreviations),
        )
        return None
    return join_tag(abbreviation, project.name)


def derive_tags(
    affected_projects: Sequence[Project],
    all_projects: Sized,
    type_abbreviations: Mapping[str, str],
    all_affected_tag: str,
) -> set[str]:
    """Derive the set of tags for a change from its affected projects.

    When every project in the workspace is affected, the single all-affected
    tag replaces the individual tags. No affected projects yields no tags.
    """
    affected = {project.id: project for project in affected_projects}
    if not affected:
        logger.info("No affected projects, no tags to derive")
        return set()

    if len(affected) == len(all_projects):
        logger.info("All projects are affected", project_count=len(affected), tag=all_affected_tag)
        return {all_affected_tag}

    tags: set[str] = set()
    for project in affected.values():
        tags.update(normalize_project_tag(tag, type_abbreviations) for tag in project.tags)
        type_tag = project_type_tag(project, type_abbreviations)
        if type_tag is not None:
            tags.add(type_tag)

    logger.info("Derived tags from affected projects", affected_count=len(affected), tag_count=len(tags))
    return tags
