"""Reconciles configuration between CLI arguments and environment variables."""

from types import MappingProxyType
from typing import Any

import structlog
from pydantic import TypeAdapter, ValidationError

from affected_labeler.configuration.env import RunnerEnvironment
from affected_labeler.configuration.exceptions import InvalidConfigurationError, RequiredConfigurationElementError
from affected_labeler.configuration.models import (
    BuildGraphConfig,
    GitHubEventConfig,
    LabelerConfig,
    LabelPrefixDefinition,
    ShowTagsConfig,
    TagConfig,
)
from affected_labeler.utils.constants import DEFAULT_LABEL_PREFIX_DEFINITIONS, DEFAULT_PROJECT_TYPE_ABBREVIATIONS

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

_ABBREVIATIONS_ADAPTER = TypeAdapter(dict[str, str])
_PREFIX_DEFINITIONS_ADAPTER = TypeAdapter(dict[str, LabelPrefixDefinition])


def _blank_to_none(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value.strip()


async def parse_json_setting(
    raw_value: str | None,
    adapter: TypeAdapter[Any],
    name: str,
    cli_name: str,
    env_name: str,
    default: Any = None,
) -> Any:
    """Parse and validate a JSON encoded setting.

    Empty or missing values fall back to the default, or to an empty object when there is none.
    """
    if raw_value is None or not raw_value.strip():
        logger.debug("Setting not provided, using default", setting=env_name)
        return adapter.validate_python(default if default is not None else {})
    try:
        return adapter.validate_json(raw_value)
    except ValidationError as exc:
        errors = "; ".join(f"{'.'.join(str(loc) for loc in error['loc']) or '<root>'}: {error['msg']}" for error in exc.errors())
        raise InvalidConfigurationError(name, cli_name, env_name, errors) from exc


async def reconcile_tag_configuration(all_affected_tag: str, project_type_abbreviations: str | None) -> TagConfig:
    """Build the tag derivation settings from raw CLI/environment values."""
    if not all_affected_tag.strip():
        raise RequiredConfigurationElementError("All affected tag", "--all-affected-tag", "ALL_AFFECTED_TAG")
    abbreviations: dict[str, str] = await parse_json_setting(
        project_type_abbreviations,
        _ABBREVIATIONS_ADAPTER,
        name="Project type abbreviations",
        cli_name="--project-type-abbreviations",
        env_name="PROJECT_TYPE_ABBREVIATIONS",
        default=DEFAULT_PROJECT_TYPE_ABBREVIATIONS,
    )
    if not abbreviations:
        logger.warning("No project type abbreviations configured, project type tags will not be generated")
    return TagConfig(
        all_affected_tag=all_affected_tag.strip(),
        project_type_abbreviations=MappingProxyType(abbreviations),
    )


async def reconcile_build_graph_configuration(
    command: str,
    base: str | None,
    head: str | None,
    runner_env: RunnerEnvironment,
) -> BuildGraphConfig:
    """Build the build-graph settings. Blank revisions are treated as unset."""
    if not command.strip():
        raise RequiredConfigurationElementError("Build graph command", "--build-graph-command", "BUILD_GRAPH_COMMAND")
    return BuildGraphConfig(
        command=command.strip(),
        base=_blank_to_none(base),
        head=_blank_to_none(head),
        workspace_root=runner_env.GITHUB_WORKSPACE,
    )


async def reconcile_labeler_configuration(
    cli_debug: bool,
    cli_github_token: str | None,
    cli_all_affected_tag: str,
    cli_project_type_abbreviations: str | None,
    cli_label_prefix_definitions: str | None,
    cli_base: str | None,
    cli_head: str | None,
    cli_build_graph_command: str,
    runner_env: RunnerEnvironment | None = None,
) -> LabelerConfig:
    """Reconcile the configuration of a full labeling run.

    Raises:
        RequiredConfigurationElementError: If the GitHub token or repository is missing.
        InvalidConfigurationError: If a JSON encoded setting cannot be parsed.
    """
    if not cli_github_token:
        raise RequiredConfigurationElementError("GitHub token", "--github-token", "GITHUB_TOKEN")
    runner_env = runner_env or RunnerEnvironment()
    if not runner_env.GITHUB_REPOSITORY:
        raise RequiredConfigurationElementError("GitHub repository", "(none)", "GITHUB_REPOSITORY")

    prefix_definitions: dict[str, LabelPrefixDefinition] = await parse_json_setting(
        cli_label_prefix_definitions,
        _PREFIX_DEFINITIONS_ADAPTER,
        name="Label prefix definitions",
        cli_name="--label-prefix-definitions",
        env_name="LABEL_PREFIX_DEFINITIONS",
        default=DEFAULT_LABEL_PREFIX_DEFINITIONS,
    )
    return LabelerConfig(
        debug=cli_debug,
        github_api_url=runner_env.GITHUB_API_URL,
        github_token=cli_github_token,
        event=GitHubEventConfig(
            repository=runner_env.GITHUB_REPOSITORY,
            event_name=runner_env.GITHUB_EVENT_NAME,
            event_path=runner_env.GITHUB_EVENT_PATH,
            sha=runner_env.GITHUB_SHA,
        ),
        tags=await reconcile_tag_configuration(cli_all_affected_tag, cli_project_type_abbreviations),
        build_graph=await reconcile_build_graph_configuration(cli_build_graph_command, cli_base, cli_head, runner_env),
        label_prefix_definitions=MappingProxyType(prefix_definitions),
    )


async def reconcile_show_tags_configuration(
    cli_debug: bool,
    cli_all_affected_tag: str,
    cli_project_type_abbreviations: str | None,
    cli_base: str | None,
    cli_head: str | None,
    cli_build_graph_command: str,
    runner_env: RunnerEnvironment | None = None,
) -> ShowTagsConfig:
    """Reconcile the configuration of the show-tags command."""
    runner_env = runner_env or RunnerEnvironment()
    return ShowTagsConfig(
        debug=cli_debug,
        tags=await reconcile_tag_configuration(cli_all_affected_tag, cli_project_type_abbreviations),
        build_graph=await reconcile_build_graph_configuration(cli_build_graph_command, cli_base, cli_head, runner_env),
    )
