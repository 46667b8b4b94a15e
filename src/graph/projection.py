"""Read-side projections of the indices into node/edge views.

Nothing here feeds back into the indices; the views exist for diagram
renderers and reports. ``render_mermaid`` is one such renderer.
"""

from __future__ import annotations

import re
from itertools import pairwise
from pathlib import PurePosixPath
from typing import TYPE_CHECKING

from graph.chains import DEFAULT_MAX_DEPTH, reconstruct_chain_with_fallback
from models.graph import (
    GraphEdge,
    GraphNode,
    GraphView,
    RoadmapFile,
    RoadmapFunction,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from index.call_graph import CallGraphIndex
    from index.function_index import FunctionIndex
    from index.trigger_index import TriggerIndex

UNRESOLVED_PREFIX = "unresolved:"

_NON_WORD = re.compile(r"\W")


class _ViewBuilder:
    """Accumulates nodes and edges, dropping duplicates in first-seen order."""

    def __init__(self) -> None:
        self.nodes: dict[str, GraphNode] = {}
        self.edges: dict[tuple[str, str], GraphEdge] = {}

    def node(self, node: GraphNode) -> None:
        self.nodes.setdefault(node.id, node)

    def edge(self, source: str, target: str) -> None:
        self.edges.setdefault((source, target), GraphEdge(source=source, target=target))

    def build(self) -> GraphView:
        return GraphView(
            nodes=list(self.nodes.values()), edges=list(self.edges.values())
        )


def project_chain(chain: Sequence[str]) -> GraphView:
    """One node per name, one edge per adjacent pair."""
    builder = _ViewBuilder()
    for name in chain:
        builder.node(GraphNode(id=name, label=name))
    for current, following in pairwise(chain):
        builder.edge(current, following)
    return builder.build()


def build_execution_graph(
    file_path: str,
    function_names: Iterable[str],
    call_graph: CallGraphIndex,
    function_index: FunctionIndex,
    trigger_index: TriggerIndex,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> GraphView:
    """Merge the caller chains of several functions of one file into one view.

    Node ids are function names; a node whose function is bound to a runtime
    trigger carries the trigger text in its label.
    """
    builder = _ViewBuilder()
    for function_name in function_names:
        chain = reconstruct_chain_with_fallback(
            call_graph, function_index, function_name, file_path, max_depth
        )
        for name in chain:
            if name in builder.nodes:
                continue
            trigger = trigger_index.find(name, file_path)
            builder.node(
                GraphNode(
                    id=name,
                    label=f"{name} ({trigger.trigger})" if trigger else name,
                    file_path=file_path,
                    trigger=trigger.trigger if trigger else None,
                )
            )
        for current, following in pairwise(chain):
            builder.edge(current, following)
    return builder.build()


def project_call_graph(
    function_index: FunctionIndex,
    call_graph: CallGraphIndex,
    trigger_index: TriggerIndex | None = None,
    *,
    include_unresolved: bool = False,
) -> GraphView:
    """Project the whole index: a node per function, an edge per caller/callee pair.

    Repeated calls collapse into one edge. Unresolved callees are dropped
    unless ``include_unresolved`` is set, in which case each distinct callee
    name gets a synthetic ``unresolved:<name>`` node.
    """
    builder = _ViewBuilder()
    for entity in function_index.get_all():
        trigger = (
            trigger_index.find(entity.name, entity.file_path) if trigger_index else None
        )
        builder.node(
            GraphNode(
                id=entity.id,
                label=entity.name,
                file_path=entity.file_path,
                trigger=trigger.trigger if trigger else None,
            )
        )

    for edge in call_graph.get_all():
        if edge.callee_id is not None:
            builder.edge(edge.caller_id, edge.callee_id)
        elif include_unresolved:
            target = f"{UNRESOLVED_PREFIX}{edge.callee_name}"
            builder.node(GraphNode(id=target, label=edge.callee_name))
            builder.edge(edge.caller_id, target)
    return builder.build()


def build_roadmap(
    file_paths: Iterable[str],
    function_index: FunctionIndex,
    call_graph: CallGraphIndex,
) -> list[RoadmapFile]:
    """Per-file function listing with the callee names each function calls."""
    roadmap: list[RoadmapFile] = []
    for path in file_paths:
        functions = [
            RoadmapFunction(
                name=entity.name,
                file_path=entity.file_path,
                start_line=entity.start_line,
                end_line=entity.end_line,
                calls=[
                    edge.callee_name for edge in call_graph.get_callees_of(entity.id)
                ],
            )
            for entity in function_index.get_for_file(path)
        ]
        roadmap.append(
            RoadmapFile(path=path, name=PurePosixPath(path).name, functions=functions)
        )
    return roadmap


def mermaid_id(raw_id: str) -> str:
    """Sanitise an id for use as a Mermaid node identifier."""
    return _NON_WORD.sub("_", raw_id)


def render_mermaid(view: GraphView) -> str:
    """Render a view as a top-down Mermaid flowchart."""
    lines = ["graph TD"]
    for node in view.nodes:
        label = node.label.replace('"', "#quot;")
        lines.append(f'  {mermaid_id(node.id)}["{label}"]')
    for edge in view.edges:
        lines.append(f"  {mermaid_id(edge.source)} --> {mermaid_id(edge.target)}")
    return "\n".join(lines) + "\n"


__all__ = [
    "UNRESOLVED_PREFIX",
    "build_execution_graph",
    "build_roadmap",
    "mermaid_id",
    "project_call_graph",
    "project_chain",
    "render_mermaid",
]
