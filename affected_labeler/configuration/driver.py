"""Synchronous driver for configuration reconciliation for the CLI entry point."""

import asyncio

from affected_labeler.configuration import reconcile
from affected_labeler.configuration.models import LabelerConfig, ShowTagsConfig
from affected_labeler.utils.constants import DEFAULT_ALL_AFFECTED_TAG, DEFAULT_BUILD_GRAPH_COMMAND


def get_labeler_config(
    debug: bool = False,
    github_token: str | None = None,
    all_affected_tag: str = DEFAULT_ALL_AFFECTED_TAG,
    project_type_abbreviations: str | None = None,
    label_prefix_definitions: str | None = None,
    base: str | None = None,
    head: str | None = None,
    build_graph_command: str = DEFAULT_BUILD_GRAPH_COMMAND,
) -> LabelerConfig:
    """Synchronously get the reconciled configuration for a labeling run."""
    return asyncio.run(
        reconcile.reconcile_labeler_configuration(
            cli_debug=debug,
            cli_github_token=github_token,
            cli_all_affected_tag=all_affected_tag,
            cli_project_type_abbreviations=project_type_abbreviations,
            cli_label_prefix_definitions=label_prefix_definitions,
            cli_base=base,
            cli_head=head,
            cli_build_graph_command=build_graph_command,
        )
    )


def get_show_tags_config(
    debug: bool = False,
    all_affected_tag: str = DEFAULT_ALL_AFFECTED_TAG,
    project_type_abbreviations: str | None = None,
    base: str | None = None,
    head: str | None = None,
    build_graph_command: str = DEFAULT_BUILD_GRAPH_COMMAND,
) -> ShowTagsConfig:
    """Synchronously get the reconciled configuration for the show-tags command."""
    return asyncio.run(
        reconcile.reconcile_show_tags_configuration(
            cli_debug=debug,
            cli_all_affected_tag=all_affected_tag,
            cli_project_type_abbreviations=project_type_abbreviations,
            cli_base=base,
            cli_head=head,
            cli_build_graph_command=build_graph_command,
        )
    )
