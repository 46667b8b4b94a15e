"""Syntax-tree protocol consumed by the extractors.

The extractors only rely on the small surface below, which tree-sitter's
``Node`` provides natively. Tests inject hand-built trees that implement the
same attributes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Sequence

    from parse.languages import LanguageSpec


class SyntaxNode(Protocol):
    """The subset of a tree-sitter node the engine traverses."""

    @property
    def type(self) -> str: ...

    @property
    def children(self) -> Sequence[SyntaxNode]: ...

    @property
    def start_point(self) -> tuple[int, int]: ...

    @property
    def end_point(self) -> tuple[int, int]: ...

    @property
    def text(self) -> bytes | None: ...

    def child_by_field_name(self, name: str, /) -> SyntaxNode | None: ...


@dataclass(frozen=True)
class ParsedSource:
    """A successfully parsed file: its path, tree root and language tables."""

    file_path: str
    root: SyntaxNode
    language: LanguageSpec


def node_text(node: SyntaxNode | None) -> str:
    """Return the stripped source text of ``node`` ("" when unavailable)."""
    if node is None or not node.text:
        return ""
    return node.text.decode("utf8", errors="ignore").strip()


def start_line(node: SyntaxNode) -> int:
    """1-based line of the first character of ``node``."""
    return node.start_point[0] + 1


def end_line(node: SyntaxNode) -> int:
    """1-based line of the last character of ``node``."""
    return node.end_point[0] + 1


__all__ = ["ParsedSource", "SyntaxNode", "end_line", "node_text", "start_line"]
