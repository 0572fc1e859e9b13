"""Models for configuration between CLI arguments and environment variables."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, field_validator

from affected_labeler.utils.constants import (
    DEFAULT_ALL_AFFECTED_TAG,
    DEFAULT_BUILD_GRAPH_COMMAND,
)


class LabelPrefixDefinition(BaseModel):
    """Display settings for labels created for tags with a given prefix."""

    model_config = ConfigDict(frozen=True)

    color: str
    description: str = ""

    @field_validator("color")
    @classmethod
    def validate_color(cls, value: str) -> str:
        """GitHub expects six hex digits without a leading '#'."""
        color = value.strip().lstrip("#")
        if len(color) != 6 or any(c not in "0123456789abcdefABCDEF" for c in color):
            raise ValueError(f"color must be a 6 digit hex value, got {value!r}")
        return color.lower()


@dataclass(frozen=True)
class TagConfig:
    """Settings that control how tags are derived from projects."""

    all_affected_tag: str = DEFAULT_ALL_AFFECTED_TAG
    project_type_abbreviations: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))


@dataclass(frozen=True)
class BuildGraphConfig:
    """Settings for querying the monorepo build graph."""

    command: str = DEFAULT_BUILD_GRAPH_COMMAND
    base: str | None = None
    head: str | None = None
    workspace_root: Path | None = None


@dataclass(frozen=True)
class GitHubEventConfig:
    """The GitHub Actions event that triggered the run."""

    repository: str | None
    event_name: str | None = None
    event_path: Path | None = None
    sha: str | None = None


@dataclass(frozen=True)
class LabelerConfig:
    """Configuration for a labeling run, constructed once at startup."""

    debug: bool
    github_api_url: str
    github_token: str
    event: GitHubEventConfig
    tags: TagConfig
    build_graph: BuildGraphConfig
    label_prefix_definitions: Mapping[str, LabelPrefixDefinition] = field(default_factory=lambda: MappingProxyType({}))


@dataclass(frozen=True)
class ShowTagsConfig:
    """Configuration for the show-tags command, which never talks to GitHub."""

    debug: bool
    tags: TagConfig
    build_graph: BuildGraphConfig = field(default_factory=BuildGraphConfig)
