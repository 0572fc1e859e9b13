"""Defines the Command Line Interface (CLI) using Typer."""

import asyncio

import typer
from dotenv import load_dotenv
from typer import Option
from typing_extensions import Annotated

from affected_labeler.configuration.driver import get_labeler_config, get_show_tags_config
from affected_labeler.configuration.exceptions import InvalidConfigurationError, RequiredConfigurationElementError
from affected_labeler.configuration.models import LabelerConfig, ShowTagsConfig
from affected_labeler.synchronize.driver import run_label_affected_workflow, run_show_tags_workflow
from affected_labeler.synchronize.models import RunStatus
from affected_labeler.utils.constants import DEFAULT_ALL_AFFECTED_TAG, DEFAULT_BUILD_GRAPH_COMMAND
from affected_labeler.utils.logging import configure_logging

load_dotenv()

typer_app = typer.Typer(pretty_exceptions_show_locals=False, help="Label pull requests with the tags of the monorepo projects they affect.")

# Each input can come from a GitHub Actions `with:` input (INPUT_<NAME>) or a plain environment variable.
AllAffectedTagOption = Annotated[
    str,
    Option(envvar=["INPUT_ALL_AFFECTED_TAG", "ALL_AFFECTED_TAG"], help="Tag applied instead of per-project tags when every project is affected."),
]
ProjectTypeAbbreviationsOption = Annotated[
    str | None,
    Option(
        envvar=["INPUT_PROJECT_TYPE_ABBREVIATIONS", "PROJECT_TYPE_ABBREVIATIONS"],
        help="JSON object mapping project types to tag prefixes. Defaults to application, library and language mapped to app, lib and lang.",
    ),
]
BaseOption = Annotated[str | None, Option(envvar=["INPUT_NX_BASE", "NX_BASE"], help="Base revision of the change.")]
HeadOption = Annotated[str | None, Option(envvar=["INPUT_NX_HEAD", "NX_HEAD"], help="Head revision of the change.")]
BuildGraphCommandOption = Annotated[
    str,
    Option(envvar=["INPUT_BUILD_GRAPH_COMMAND", "BUILD_GRAPH_COMMAND"], help="Command used to invoke the Nx CLI."),
]
DebugOption = Annotated[bool, Option(envvar="DEBUG", help="Enable debug mode.")]


@typer_app.command(name="label")
def label_cli(
    github_token: Annotated[
        str | None,
        Option(envvar=["INPUT_GITHUB_TOKEN", "GITHUB_TOKEN"], help="GitHub token used to manage labels.", show_default=False),
    ] = None,
    all_affected_tag: AllAffectedTagOption = DEFAULT_ALL_AFFECTED_TAG,
    project_type_abbreviations: ProjectTypeAbbreviationsOption = None,
    label_prefix_definitions: Annotated[
        str | None,
        Option(
            envvar=["INPUT_LABEL_PREFIX_DEFINITIONS", "LABEL_PREFIX_DEFINITIONS"],
            help=(
                'JSON object mapping tag prefixes to label settings, e.g. \'{"lib": {"color": "0e8a16", "description": "Library"}}\'. '
                "Defaults to definitions for app, lib and lang."
            ),
        ),
    ] = None,
    base: BaseOption = None,
    head: HeadOption = None,
    build_graph_command: BuildGraphCommandOption = DEFAULT_BUILD_GRAPH_COMMAND,
    debug: DebugOption = False,
) -> None:
    """Label the current pull request with the tags of the projects it affects."""
    configure_logging(debug)
    try:
        config: LabelerConfig = get_labeler_config(
            debug=debug,
            github_token=github_token,
            all_affected_tag=all_affected_tag,
            project_type_abbreviations=project_type_abbreviations,
            label_prefix_definitions=label_prefix_definitions,
            base=base,
            head=head,
            build_graph_command=build_graph_command,
        )
    except (RequiredConfigurationElementError, InvalidConfigurationError) as exc:
        typer.echo(f"Configuration error: {exc}", err=True)
        raise typer.Exit(1) from exc

    result = asyncio.run(run_label_affected_workflow(config))

    if result.status == RunStatus.NO_PULL_REQUEST:
        typer.echo("No pull request found for this event - nothing to label.")
        return
    target = f"{result.context.full_name}#{result.context.number}" if result.context else "pull request"
    if result.status == RunStatus.NO_AFFECTED_PROJECTS:
        typer.echo(f"No projects affected in {target} - nothing to label.")
        return
    if result.status == RunStatus.NO_TAGS:
        typer.echo(f"Affected projects of {target} produced no tags - nothing to label.")
        return

    sync_result = result.label_synchronization
    if sync_result is None:
        return
    typer.echo(f"Labeled {target}:")
    for label in sync_result.applied_labels:
        typer.echo(f"  - {label}")
    if sync_result.created_labels:
        typer.echo(f"Created labels: {', '.join(sync_result.created_labels)}")
    if sync_result.skipped_labels:
        typer.echo(f"Labels without a prefix definition (not created): {', '.join(sync_result.skipped_labels)}")


@typer_app.command(name="show-tags")
def show_tags_cli(
    all_affected_tag: AllAffectedTagOption = DEFAULT_ALL_AFFECTED_TAG,
    project_type_abbreviations: ProjectTypeAbbreviationsOption = None,
    base: BaseOption = None,
    head: HeadOption = None,
    build_graph_command: BuildGraphCommandOption = DEFAULT_BUILD_GRAPH_COMMAND,
    debug: DebugOption = False,
) -> None:
    """Print the tags derived for the current change without touching GitHub."""
    configure_logging(debug)
    try:
        config: ShowTagsConfig = get_show_tags_config(
            debug=debug,
            all_affected_tag=all_affected_tag,
            project_type_abbreviations=project_type_abbreviations,
            base=base,
            head=head,
            build_graph_command=build_graph_command,
        )
    except (RequiredConfigurationElementError, InvalidConfigurationError) as exc:
        typer.echo(f"Configuration error: {exc}", err=True)
        raise typer.Exit(1) from exc

    result = asyncio.run(run_show_tags_workflow(config))
    typer.echo(f"{len(result.affected_projects)} of {result.all_project_count} projects affected")
    for tag in sorted(result.tags):
        typer.echo(tag)


if __name__ == "__main__":
    typer_app()
