"""Graph algorithms over call edges."""

from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from models.calls import CallEdge


def build_id_graph(edges: Iterable[CallEdge]) -> dict[str, set[str]]:
    """Build a caller -> callees graph keyed by function id.

    Args:
        edges: Call edges from one or more files

    Returns:
        Dictionary mapping caller ids to the set of ids they call. Only
        resolved edges contribute, so unknown callees never form cycles.
    """
    graph: dict[str, set[str]] = defaultdict(set)

    for edge in edges:
        if edge.callee_id is None:
            continue
        graph[edge.caller_id].add(edge.callee_id)

    return dict(graph)


class _TarjanState:
    """Discovery order, low links and the SCC stack for one Tarjan run."""

    def __init__(self, graph: dict[str, set[str]]) -> None:
        self.graph = graph
        self.order: dict[str, int] = {}
        self.low_link: dict[str, int] = {}
        self.on_stack: set[str] = set()
        self.stack: list[str] = []
        self.sccs: list[list[str]] = []

    def visit(self, node: str) -> None:
        self.order[node] = self.low_link[node] = len(self.order)
        self.stack.append(node)
        self.on_stack.add(node)

    def close(self, node: str) -> None:
        """Pop ``node``'s component once all its successors are finished."""
        if self.low_link[node] != self.order[node]:
            return
        scc: list[str] = []
        while True:
            member = self.stack.pop()
            self.on_stack.discard(member)
            scc.append(member)
            if member == node:
                break
        if len(scc) > 1 or node in self.graph.get(node, set()):
            self.sccs.append(sorted(scc))


def _strongconnect(root: str, state: _TarjanState) -> None:
    """Run Tarjan from ``root`` with an explicit work stack.

    Each frame holds a node and an iterator over its sorted successors.
    """
    state.visit(root)
    frames = [(root, iter(sorted(state.graph.get(root, set()))))]
    while frames:
        node, successors = frames[-1]
        for neighbor in successors:
            if neighbor not in state.order:
                state.visit(neighbor)
                frames.append(
                    (neighbor, iter(sorted(state.graph.get(neighbor, set()))))
                )
                break
            if neighbor in state.on_stack:
                state.low_link[node] = min(state.low_link[node], state.order[neighbor])
        else:
            frames.pop()
            state.close(node)
            if frames:
                parent = frames[-1][0]
                state.low_link[parent] = min(
                    state.low_link[parent], state.low_link[node]
                )


def find_cycles(graph: dict[str, set[str]]) -> list[list[str]]:
    """Find recursion cycles in a call graph using Tarjan's algorithm.

    Args:
        graph: Dictionary representing the graph

    Returns:
        List of cycles, each a sorted list of function ids; self-recursive
        functions form single-element cycles
    """
    state = _TarjanState(graph)

    for node in sorted(graph):
        if node not in state.order:
            _strongconnect(node, state)

    return sorted(state.sccs)


__all__ = ["build_id_graph", "find_cycles"]
