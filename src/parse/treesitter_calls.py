"""Call-site attribution over parsed syntax trees."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from models.calls import UNKNOWN_CALLEE, CallEdge
from parse.name_resolution import SameFileResolver
from parse.syntax import node_text, start_line

if TYPE_CHECKING:
    from collections.abc import Iterable

    from index.call_graph import CallGraphIndex
    from index.function_index import FunctionIndex
    from parse.languages import LanguageSpec
    from parse.name_resolution import CalleeResolver
    from parse.syntax import ParsedSource, SyntaxNode

logger = logging.getLogger(__name__)

_WHITESPACE_RUN = re.compile(r"\s+")


def _normalize_expr(raw_expr: str) -> str:
    return _WHITESPACE_RUN.sub(" ", raw_expr.strip())


def normalize_callee(
    call_node: SyntaxNode, language: LanguageSpec
) -> tuple[str, str | None]:
    """Return ``(callee_name, receiver)`` for a call expression node.

    ``f()`` gives ``("f", None)``; ``a.b()`` gives ``("b", "a")``; any other
    callee shape gives ``("unknown", None)``.
    """
    callee = call_node.child_by_field_name(language.call_function_field)
    if callee is None:
        return UNKNOWN_CALLEE, None

    if callee.type in language.identifier_types:
        return node_text(callee) or UNKNOWN_CALLEE, None

    fields = language.member_fields.get(callee.type)
    if fields is not None:
        receiver_field, member_field = fields
        member = node_text(callee.child_by_field_name(member_field))
        if member:
            receiver_node = callee.child_by_field_name(receiver_field)
            receiver = _normalize_expr(node_text(receiver_node))
            return member, receiver or None

    return UNKNOWN_CALLEE, None


def extract_call_edges(
    parsed: ParsedSource,
    function_index: FunctionIndex,
    resolver: CalleeResolver,
) -> list[CallEdge]:
    """Attribute every call expression in one parsed file to its owning function.

    Calls outside any function produce no edge. Edges whose callee cannot be
    resolved are still returned, without a ``callee_id``.
    """
    language = parsed.language
    file_path = parsed.file_path
    edges: list[CallEdge] = []
    stack: list[SyntaxNode] = [parsed.root]

    while stack:
        node = stack.pop()
        stack.extend(reversed(node.children))

        if node.type not in language.call_types:
            continue

        line = start_line(node)
        caller = function_index.find_by_line(file_path, line)
        if caller is None:
            logger.debug("Top-level call at %s:%d; no edge", file_path, line)
            continue

        callee_name, receiver = normalize_callee(node, language)
        callee = (
            None
            if callee_name == UNKNOWN_CALLEE
            else resolver.resolve(callee_name, file_path, function_index)
        )
        edge = CallEdge(
            caller_id=caller.id,
            caller_name=caller.name,
            callee_id=callee.id if callee is not None else None,
            callee_name=callee_name,
            file_path=file_path,
            line=line,
            receiver=receiver,
        )
        logger.debug(
            "Edge %s -> %s (%s) at %s:%d",
            edge.caller_name,
            edge.callee_name,
            "resolved" if callee is not None else "unresolved",
            file_path,
            line,
        )
        edges.append(edge)

    return edges


def resolve_calls(
    sources: Iterable[ParsedSource],
    function_index: FunctionIndex,
    call_graph: CallGraphIndex,
    resolver: CalleeResolver | None = None,
) -> int:
    """Clear ``call_graph`` and rebuild it from ``sources``.

    ``function_index`` must already hold the entities of every file in the
    pass. Returns the number of recorded edges.
    """
    if resolver is None:
        resolver = SameFileResolver()

    call_graph.clear()
    for parsed in sources:
        call_graph.extend(extract_call_edges(parsed, function_index, resolver))

    edges = call_graph.get_all()
    resolved = sum(1 for edge in edges if edge.callee_id is not None)
    logger.info(
        "Recorded %d call edges (%d resolved, policy %s)",
        len(edges),
        resolved,
        resolver.name,
    )
    return len(edges)


__all__ = ["extract_call_edges", "normalize_callee", "resolve_calls"]
