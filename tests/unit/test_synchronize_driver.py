"""Contains unit tests for the label workflow driver."""

import json
from pathlib import Path
from types import MappingProxyType
from unittest.mock import AsyncMock, MagicMock

import pytest

from affected_labeler.configuration.models import (
    BuildGraphConfig,
    GitHubEventConfig,
    LabelerConfig,
    LabelPrefixDefinition,
    ShowTagsConfig,
    TagConfig,
)
from affected_labeler.github.models import LabelPage
from affected_labeler.monorepo.exceptions import BuildGraphCommandError
from affected_labeler.synchronize.driver import collect_affected_projects, run_label_affected_workflow, run_show_tags_workflow
from affected_labeler.synchronize.models import RunStatus

from .utils import make_catalog, make_project, make_pull_request

CATALOG = make_catalog(
    make_project("web", "application", ("scope:frontend",)),
    make_project("api", "application", ("scope:backend",)),
    make_project("core", "library", ("scope:shared",)),
)


def make_config(event_path: Path | None = None, sha: str | None = "abc123") -> LabelerConfig:
    """Build a labeler configuration for acme/monorepo."""
    return LabelerConfig(
        debug=False,
        github_api_url="https://api.github.com",
        github_token="token",
        event=GitHubEventConfig(repository="acme/monorepo", event_name="pull_request", event_path=event_path, sha=sha),
        tags=TagConfig(
            all_affected_tag="all-affected",
            project_type_abbreviations=MappingProxyType({"application": "app", "library": "lib"}),
        ),
        build_graph=BuildGraphConfig(base="origin/main", head="HEAD"),
        label_prefix_definitions=MappingProxyType({"lib": LabelPrefixDefinition(color="0e8a16", description="Library")}),
    )


def write_event(tmp_path: Path, payload: dict[str, object]) -> Path:
    """Write an event payload file like the Actions runner does."""
    event_path = tmp_path / "event.json"
    event_path.write_text(json.dumps(payload))
    return event_path


@pytest.mark.asyncio
async def test_pull_request_is_labeled(tmp_path: Path, github_adapter: MagicMock, workspace: MagicMock) -> None:
    """A pull request affecting some projects is labeled with their tags."""
    workspace.get_project_configs = AsyncMock(return_value=CATALOG)
    workspace.list_affected = AsyncMock(return_value=["web", "core"])
    github_adapter.list_labels = AsyncMock(return_value=LabelPage(names=["scope:frontend"], has_next_page=False))
    config = make_config(event_path=write_event(tmp_path, {"pull_request": {"number": 8}}))

    result = await run_label_affected_workflow(config, github_adapter=github_adapter, workspace=workspace)

    assert result.status == RunStatus.LABELED
    assert result.context is not None and result.context.number == 8
    workspace.list_affected.assert_awaited_once_with(base="origin/main", head="HEAD")
    github_adapter.create_label.assert_awaited_once_with(name="lib:core", color="0e8a16", description="Library")
    github_adapter.add_labels_to_issue.assert_awaited_once_with(
        issue_number=8,
        labels=["app:web", "lib:core", "scope:frontend", "scope:shared"],
    )


@pytest.mark.asyncio
async def test_every_project_affected_applies_sentinel(tmp_path: Path, github_adapter: MagicMock, workspace: MagicMock) -> None:
    """When everything changed only the all-affected label is applied."""
    workspace.get_project_configs = AsyncMock(return_value=CATALOG)
    workspace.list_affected = AsyncMock(return_value=["web", "api", "core"])
    config = make_config(event_path=write_event(tmp_path, {"number": 3}))

    result = await run_label_affected_workflow(config, github_adapter=github_adapter, workspace=workspace)

    assert result.status == RunStatus.LABELED
    github_adapter.add_labels_to_issue.assert_awaited_once_with(issue_number=3, labels=["all-affected"])


@pytest.mark.asyncio
async def test_no_affected_projects_makes_no_label_calls(tmp_path: Path, github_adapter: MagicMock, workspace: MagicMock) -> None:
    """Only context resolution talks to GitHub when nothing is affected."""
    workspace.get_project_configs = AsyncMock(return_value=CATALOG)
    config = make_config(event_path=None, sha="abc123")
    github_adapter.list_pull_requests_for_commit = AsyncMock(return_value=[make_pull_request(4)])

    result = await run_label_affected_workflow(config, github_adapter=github_adapter, workspace=workspace)

    assert result.status == RunStatus.NO_AFFECTED_PROJECTS
    github_adapter.list_pull_requests_for_commit.assert_awaited_once()
    github_adapter.list_labels.assert_not_awaited()
    github_adapter.create_label.assert_not_awaited()
    github_adapter.add_labels_to_issue.assert_not_awaited()


@pytest.mark.asyncio
async def test_push_without_pull_request_stops_early(tmp_path: Path, github_adapter: MagicMock, workspace: MagicMock) -> None:
    """A push with no pull request never lists or creates labels, nor queries the build graph."""
    config = make_config(event_path=write_event(tmp_path, {"ref": "refs/heads/feature", "after": "def456"}), sha=None)

    result = await run_label_affected_workflow(config, github_adapter=github_adapter, workspace=workspace)

    assert result.status == RunStatus.NO_PULL_REQUEST
    github_adapter.list_pull_requests_for_commit.assert_awaited_once_with("def456")
    github_adapter.list_labels.assert_not_awaited()
    github_adapter.create_label.assert_not_awaited()
    workspace.list_affected.assert_not_awaited()


@pytest.mark.asyncio
async def test_affected_projects_without_tags(tmp_path: Path, github_adapter: MagicMock, workspace: MagicMock) -> None:
    """Affected projects of unmapped types without declared tags leave nothing to label."""
    workspace.get_project_configs = AsyncMock(return_value=make_catalog(make_project("scripts", "tooling"), make_project("core")))
    workspace.list_affected = AsyncMock(return_value=["scripts"])
    config = make_config(event_path=write_event(tmp_path, {"number": 3}))

    result = await run_label_affected_workflow(config, github_adapter=github_adapter, workspace=workspace)

    assert result.status == RunStatus.NO_TAGS
    github_adapter.add_labels_to_issue.assert_not_awaited()


@pytest.mark.asyncio
async def test_build_graph_failure_propagates(tmp_path: Path, github_adapter: MagicMock, workspace: MagicMock) -> None:
    """Build graph failures abort the run."""
    workspace.get_project_configs = AsyncMock(side_effect=BuildGraphCommandError(["yarn", "nx", "graph"], 1, "boom"))
    config = make_config(event_path=write_event(tmp_path, {"number": 3}))

    with pytest.raises(BuildGraphCommandError):
        await run_label_affected_workflow(config, github_adapter=github_adapter, workspace=workspace)
    github_adapter.add_labels_to_issue.assert_not_awaited()


@pytest.mark.asyncio
async def test_collect_affected_projects_ignores_unknown_ids(workspace: MagicMock) -> None:
    """Affected ids missing from the project graph are dropped."""
    workspace.get_project_configs = AsyncMock(return_value=CATALOG)
    workspace.list_affected = AsyncMock(return_value=["web", "ghost"])

    affected, all_projects = await collect_affected_projects(workspace, BuildGraphConfig())

    assert [project.id for project in affected] == ["web"]
    assert all_projects == CATALOG
    workspace.list_affected.assert_awaited_once_with(base=None, head=None)


@pytest.mark.asyncio
async def test_show_tags_workflow(workspace: MagicMock) -> None:
    """The show-tags workflow derives tags without a GitHub adapter."""
    workspace.get_project_configs = AsyncMock(return_value=CATALOG)
    workspace.list_affected = AsyncMock(return_value=["api"])
    config = ShowTagsConfig(debug=False, tags=TagConfig(project_type_abbreviations=MappingProxyType({"application": "app"})))

    result = await run_show_tags_workflow(config, workspace=workspace)

    assert result.tags == {"app:api", "scope:backend"}
    assert result.all_project_count == 3
