"""Caller-chain reconstruction and read-side graph projections."""

from graph.algos import build_id_graph, find_cycles
from graph.chains import (
    DEFAULT_MAX_DEPTH,
    reconstruct_chain,
    reconstruct_chain_with_fallback,
)
from graph.projection import (
    build_execution_graph,
    build_roadmap,
    project_call_graph,
    project_chain,
    render_mermaid,
)

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "build_execution_graph",
    "build_id_graph",
    "build_roadmap",
    "find_cycles",
    "project_call_graph",
    "project_chain",
    "reconstruct_chain",
    "reconstruct_chain_with_fallback",
    "render_mermaid",
]
