"""Caller-chain reconstruction over the call graph."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from index.call_graph import CallGraphIndex
    from index.function_index import FunctionIndex

DEFAULT_MAX_DEPTH = 6


def _dedupe(names: list[str]) -> list[str]:
    return list(dict.fromkeys(names))


def reconstruct_chain(
    call_graph: CallGraphIndex,
    target: str,
    file_path: str,
    max_depth: int = DEFAULT_MAX_DEPTH,
    depth: int = 0,
) -> list[str]:
    """Return one plausible chain of names from an ultimate caller to ``target``.

    Every caller of ``target`` in ``file_path`` is expanded recursively, the
    resulting chains are concatenated with ``target`` appended to each, and
    duplicates are dropped keeping first-seen order. Expansion stops silently
    at ``max_depth``, which bounds the recursion on cyclic graphs.

    Args:
        call_graph: Populated call graph index.
        target: Function name to explain.
        file_path: File in which callers are looked up.
        max_depth: Maximum number of caller expansions.
        depth: Current expansion depth (internal).

    Returns:
        Ordered function names ending with ``target``; ``[target]`` when no
        caller is known; ``[]`` once the depth limit is reached.
    """
    if depth >= max_depth:
        return []

    callers = call_graph.get_callers_of(target, file_path)
    if not callers:
        return [target]

    # Repeated calls from one caller expand once.
    chain: list[str] = []
    for caller_name in dict.fromkeys(edge.caller_name for edge in callers):
        chain.extend(
            reconstruct_chain(call_graph, caller_name, file_path, max_depth, depth + 1)
        )
        chain.append(target)

    return _dedupe(chain)


def reconstruct_chain_with_fallback(
    call_graph: CallGraphIndex,
    function_index: FunctionIndex,
    target: str,
    file_path: str,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> list[str]:
    """Like :func:`reconstruct_chain`, substituting the lexical parent when
    the graph yields nothing beyond ``target`` itself.

    Closures handed to other code as callbacks are usually never called by
    name, so their enclosing function is the best available predecessor.
    """
    chain = reconstruct_chain(call_graph, target, file_path, max_depth)
    if chain != [target]:
        return chain

    entity = function_index.find_by_name(target, file_path)
    if entity is not None and entity.parent_function_name:
        return [entity.parent_function_name, target]
    return chain


__all__ = [
    "DEFAULT_MAX_DEPTH",
    "reconstruct_chain",
    "reconstruct_chain_with_fallback",
]
