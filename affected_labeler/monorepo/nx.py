"""Queries the Nx build graph through the Nx CLI."""

import asyncio
import shlex
from pathlib import Path

import structlog
from pydantic import TypeAdapter, ValidationError

from affected_labeler.monorepo.exceptions import BuildGraphCommandError, BuildGraphOutputError
from affected_labeler.monorepo.models import Project, ProjectGraphDocument, ProjectGraphNode
from affected_labeler.utils.constants import DEFAULT_BUILD_GRAPH_COMMAND

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

_PROJECT_LIST_ADAPTER = TypeAdapter(list[str])

# Graph node types mapped to the project type Nx reports in project configuration.
NODE_TYPE_TO_PROJECT_TYPE = {
    "app": "application",
    "e2e": "application",
    "lib": "library",
}


def project_from_graph_node(project_id: str, node: ProjectGraphNode) -> Project:
    """Build a Project from a project graph node, preferring its configuration data."""
    project_type = node.data.get("projectType") or NODE_TYPE_TO_PROJECT_TYPE.get(node.type or "")
    return Project(
        id=project_id,
        name=node.data.get("name") or node.name,
        project_type=project_type,
        tags=tuple(node.data.get("tags") or ()),
    )


def parse_project_list(output: str) -> list[str]:
    """Parse the output of `nx show projects --json` into a list of project ids."""
    start = output.find("[")
    end = output.rfind("]")
    if start == -1 or end < start:
        raise BuildGraphOutputError("Project list output does not contain a JSON array")
    try:
        return _PROJECT_LIST_ADAPTER.validate_json(output[start : end + 1])
    except ValidationError as exc:
        raise BuildGraphOutputError(f"Project list output is not a list of project names: {exc}") from exc


def parse_project_graph(output: str) -> dict[str, Project]:
    """Parse the output of `nx graph --file=stdout` into projects keyed by id.

    Package managers may print banner lines around the JSON document, so only
    the text between the first '{' and the last '}' is parsed.
    """
    start = output.find("{")
    end = output.rfind("}")
    if start == -1 or end < start:
        raise BuildGraphOutputError("Project graph output does not contain a JSON document")
    try:
        document = ProjectGraphDocument.model_validate_json(output[start : end + 1])
    except ValidationError as exc:
        raise BuildGraphOutputError(f"Project graph output is not a valid project graph: {exc}") from exc
    return {project_id: project_from_graph_node(project_id, node) for project_id, node in document.graph.nodes.items()}


class NxWorkspace:
    """Runs the Nx CLI against a workspace."""

    def __init__(self, command: str = DEFAULT_BUILD_GRAPH_COMMAND, workspace_root: Path | None = None) -> None:
        """Initialize with the command prefix used to invoke Nx, e.g. 'yarn nx' or 'npx nx'."""
        self.command = shlex.split(command)
        self.workspace_root = workspace_root

    async def run(self, *args: str) -> str:
        """Run an Nx subcommand and return its standard output."""
        command = [*self.command, *args]
        logger.debug("Running build graph command", command=" ".join(command), cwd=str(self.workspace_root) if self.workspace_root else None)
        process = await asyncio.create_subprocess_exec(
            *command,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=self.workspace_root,
        )
        stdout, stderr = await process.communicate()
        returncode = process.returncode if process.returncode is not None else 0
        if returncode != 0:
            raise BuildGraphCommandError(command, returncode, stderr.decode("utf-8", errors="replace"))
        return stdout.decode("utf-8", errors="replace")

    async def list_affected(self, base: str | None = None, head: str | None = None) -> list[str]:
        """List the ids of projects affected between two revisions.

        Revisions left as None are not passed, so Nx falls back to its own defaults.
        """
        args = ["show", "projects", "--affected", "--json"]
        if base:
            args.append(f"--base={base}")
        if head:
            args.append(f"--head={head}")
        output = await self.run(*args)
        affected = parse_project_list(output)
        logger.info("Resolved affected projects", base=base, head=head, affected_count=len(affected))
        return affected

    async def get_project_configs(self) -> dict[str, Project]:
        """Materialize the project graph and read back every project's configuration."""
        output = await self.run("graph", "--file=stdout")
        projects = parse_project_graph(output)
        logger.info("Read project configurations from project graph", project_count=len(projects))
        return projects
