"""Registry of caller -> callee edges with reverse lookup."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from models.calls import CallEdge


class CallGraphIndex:
    """Mutable, rebuild-from-scratch store of call edges.

    Edges are not de-duplicated: repeated calls from the same caller to the
    same callee produce one edge each.
    """

    def __init__(self) -> None:
        self._edges: list[CallEdge] = []

    def __len__(self) -> int:
        return len(self._edges)

    def clear(self) -> None:
        self._edges = []

    def add(self, edge: CallEdge) -> None:
        self._edges.append(edge)

    def extend(self, edges: Iterable[CallEdge]) -> None:
        self._edges.extend(edges)

    def get_all(self) -> list[CallEdge]:
        return list(self._edges)

    def get_callers_of(self, callee_name: str, file_path: str) -> list[CallEdge]:
        """Return every edge in ``file_path`` whose callee name is ``callee_name``."""
        return [
            edge
            for edge in self._edges
            if edge.callee_name == callee_name and edge.file_path == file_path
        ]

    def get_callees_of(self, caller_id: str) -> list[CallEdge]:
        return [edge for edge in self._edges if edge.caller_id == caller_id]


__all__ = ["CallGraphIndex"]
