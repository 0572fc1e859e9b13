"""Pydantic models for projects in the monorepo build graph."""

from pydantic import BaseModel, ConfigDict, Field


class Project(BaseModel):
    """A project in the workspace, as described by its configuration."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    project_type: str | None = None
    tags: tuple[str, ...] = ()


class ProjectGraphNode(BaseModel):
    """A node of the graph printed by `nx graph --file=stdout`."""

    model_config = ConfigDict(extra="ignore")

    name: str
    type: str | None = None
    data: dict = Field(default_factory=dict)


class ProjectGraph(BaseModel):
    """The project graph printed by `nx graph --file=stdout`."""

    model_config = ConfigDict(extra="ignore")

    nodes: dict[str, ProjectGraphNode] = Field(default_factory=dict)


class ProjectGraphDocument(BaseModel):
    """Top level document printed by `nx graph --file=stdout`."""

    model_config = ConfigDict(extra="ignore")

    graph: ProjectGraph
