"""Read-side graph projection models consumed by diagram renderers."""

from __future__ import annotations

from pydantic import BaseModel, Field


class GraphNode(BaseModel):
    """A diagram node."""

    id: str
    label: str
    file_path: str | None = None
    trigger: str | None = None


class GraphEdge(BaseModel):
    """A directed diagram edge from caller to callee."""

    source: str
    target: str


class GraphView(BaseModel):
    """Nodes and de-duplicated edges of a projected graph."""

    nodes: list[GraphNode] = Field(default_factory=list)
    edges: list[GraphEdge] = Field(default_factory=list)


class RoadmapFunction(BaseModel):
    """A function in the per-file roadmap with the names it calls."""

    name: str
    file_path: str
    start_line: int
    end_line: int
    calls: list[str] = Field(default_factory=list)


class RoadmapFile(BaseModel):
    """A file in the roadmap with the functions it declares."""

    path: str
    name: str
    functions: list[RoadmapFunction] = Field(default_factory=list)


__all__ = [
    "GraphEdge",
    "GraphNode",
    "GraphView",
    "RoadmapFile",
    "RoadmapFunction",
]
