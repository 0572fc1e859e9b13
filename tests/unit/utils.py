"""Helpers shared by unit tests."""

from typing import Any
from unittest.mock import MagicMock

from githubkit.exception import RequestFailed

from affected_labeler.monorepo.models import Project


def make_project(project_id: str, project_type: str | None = "library", tags: tuple[str, ...] = (), name: str | None = None) -> Project:
    """Create a Project whose name defaults to its id."""
    return Project(id=project_id, name=name or project_id, project_type=project_type, tags=tags)


def make_catalog(*projects: Project) -> dict[str, Project]:
    """Key projects by id the way the project graph does."""
    return {project.id: project for project in projects}


def make_request_failed(status_code: int, headers: dict[str, str] | None = None, json_body: Any = None) -> RequestFailed:
    """Create a githubkit RequestFailed carrying a mocked response."""
    response = MagicMock()
    response.status_code = status_code
    response.headers = headers or {}
    response.json.return_value = json_body if json_body is not None else {}
    response.url = "https://api.github.com/repos/acme/monorepo/labels"
    exc = RequestFailed.__new__(RequestFailed)
    exc.request = MagicMock()
    exc.response = response
    return exc


def make_pull_request(number: int) -> MagicMock:
    """Create a pull request object as returned by the commits/{sha}/pulls endpoint."""
    pull_request = MagicMock()
    pull_request.number = number
    return pull_request
