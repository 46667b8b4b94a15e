"""Function-boundary extraction over parsed syntax trees.

The walk is a single depth-first pre-order traversal with an explicit stack
of ``(node, scope)`` pairs, where ``scope`` is the tuple of names of the
functions lexically open at that node. Entering a recognised construct
yields a new tuple for its children; every other node passes its scope
through unchanged, so nested functions are found regardless of the
statements around them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from models.functions import FunctionEntity, FunctionKind, build_function_id
from parse.syntax import end_line, node_text, start_line

if TYPE_CHECKING:
    from collections.abc import Iterable

    from index.function_index import FunctionIndex
    from parse.languages import LanguageSpec
    from parse.syntax import ParsedSource, SyntaxNode

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_NAME = "default"


@dataclass(frozen=True)
class _FunctionMatch:
    """A recognised construct: the node spanning the function and its name."""

    node: SyntaxNode
    name: str
    kind: FunctionKind


def _name_of(node: SyntaxNode | None, language: LanguageSpec) -> str:
    if node is None or node.type not in language.name_types:
        return ""
    return node_text(node)


def _anonymous_value(
    node: SyntaxNode, value_field: str, language: LanguageSpec
) -> SyntaxNode | None:
    value = node.child_by_field_name(value_field)
    if value is None or value.type not in language.anonymous_function_types:
        return None
    return value


def _match_declaration(
    node: SyntaxNode, language: LanguageSpec
) -> _FunctionMatch | None:
    if node.type in language.declaration_types:
        kind: FunctionKind = "declaration"
    elif node.type in language.method_types:
        kind = "method"
    else:
        return None
    name = _name_of(node.child_by_field_name("name"), language)
    return _FunctionMatch(node, name, kind)


def _match_binding(node: SyntaxNode, language: LanguageSpec) -> _FunctionMatch | None:
    fields = language.binding_fields.get(node.type)
    if fields is None:
        return None
    name_field, value_field = fields
    value = _anonymous_value(node, value_field, language)
    if value is None:
        return None
    name = _name_of(node.child_by_field_name(name_field), language)
    return _FunctionMatch(value, name, "binding")


def _match_property(node: SyntaxNode, language: LanguageSpec) -> _FunctionMatch | None:
    fields = language.property_fields.get(node.type)
    if fields is None:
        return None
    key_field, value_field = fields
    value = _anonymous_value(node, value_field, language)
    if value is None:
        return None
    name = _name_of(node.child_by_field_name(key_field), language)
    return _FunctionMatch(value, name, "property")


def _match_default_export(
    node: SyntaxNode, language: LanguageSpec
) -> _FunctionMatch | None:
    if node.type not in language.default_export_types:
        return None
    if not any(child.type == "default" for child in node.children):
        return None
    value = _anonymous_value(node, "value", language)
    if value is None:
        return None
    name = _name_of(value.child_by_field_name("name"), language) or DEFAULT_EXPORT_NAME
    return _FunctionMatch(value, name, "default_export")


_MATCHERS = (_match_declaration, _match_binding, _match_property, _match_default_export)


def _match_function(node: SyntaxNode, language: LanguageSpec) -> _FunctionMatch | None:
    """Return the construct ``node`` introduces, if it is function-like."""
    for matcher in _MATCHERS:
        match = matcher(node, language)
        if match is not None:
            return match
    return None


def _create_function_entity(
    match: _FunctionMatch, file_path: str, scope: tuple[str, ...]
) -> FunctionEntity:
    first_line = start_line(match.node)
    return FunctionEntity(
        id=build_function_id(file_path, match.name, first_line),
        name=match.name,
        file_path=file_path,
        start_line=first_line,
        end_line=end_line(match.node),
        parent_function_name=scope[-1] if scope else None,
        kind=match.kind,
    )


def extract_functions(parsed: ParsedSource) -> list[FunctionEntity]:
    """Extract every recognised function-like construct from one parsed file.

    Returns entities in source (pre-order) order. Constructs that resolve to
    the same id keep the first one's position but the last one's data.
    """
    language = parsed.language
    registered: dict[str, FunctionEntity] = {}
    stack: list[tuple[SyntaxNode, tuple[str, ...]]] = [(parsed.root, ())]

    while stack:
        node, scope = stack.pop()
        children = node.children
        child_scope = scope

        match = _match_function(node, language)
        if match is not None and not match.name:
            logger.debug(
                "Skipping %s with empty name at %s:%d",
                match.kind,
                parsed.file_path,
                start_line(match.node),
            )
        elif match is not None:
            entity = _create_function_entity(match, parsed.file_path, scope)
            if entity.id in registered:
                logger.debug("Function id collision, last write wins: %s", entity.id)
            registered[entity.id] = entity
            logger.debug(
                "Registered %s (%d-%d)%s",
                entity.name,
                entity.start_line,
                entity.end_line,
                f" parent: {entity.parent_function_name}"
                if entity.parent_function_name
                else "",
            )
            children = match.node.children
            child_scope = (*scope, match.name)

        stack.extend((child, child_scope) for child in reversed(children))

    return list(registered.values())


def extract_function_boundaries(
    sources: Iterable[ParsedSource], function_index: FunctionIndex
) -> int:
    """Clear ``function_index`` and rebuild it from ``sources``.

    Returns the number of registered entities.
    """
    function_index.clear()
    file_count = 0
    for parsed in sources:
        function_index.extend(extract_functions(parsed))
        file_count += 1

    total = len(function_index)
    logger.info("Registered %d functions across %d files", total, file_count)
    return total


__all__ = [
    "DEFAULT_EXPORT_NAME",
    "extract_function_boundaries",
    "extract_functions",
]
