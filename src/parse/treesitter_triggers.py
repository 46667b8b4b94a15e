"""Runtime trigger extraction from JSX event bindings."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from models.triggers import TriggerEntry
from parse.syntax import node_text

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from index.trigger_index import TriggerIndex
    from parse.languages import LanguageSpec
    from parse.syntax import ParsedSource, SyntaxNode

logger = logging.getLogger(__name__)

DEFAULT_EVENT_PROPS: tuple[str, ...] = (
    "onClick",
    "onSubmit",
    "onChange",
    "onBlur",
    "onFocus",
)

_BRACES = frozenset({"{", "}"})


def _bound_function_name(value: SyntaxNode, language: LanguageSpec) -> str:
    """Name of the handler in ``{handler}`` or ``{obj.handler}``, else ""."""
    expression = next((c for c in value.children if c.type not in _BRACES), None)
    if expression is None:
        return ""
    if expression.type in language.identifier_types:
        return node_text(expression)
    fields = language.member_fields.get(expression.type)
    if fields is not None:
        return node_text(expression.child_by_field_name(fields[1]))
    return ""


def extract_triggers(
    parsed: ParsedSource,
    event_props: Sequence[str] = DEFAULT_EVENT_PROPS,
) -> list[TriggerEntry]:
    """Collect handler functions bound to event props in one parsed file."""
    language = parsed.language
    if not language.jsx_attribute_types:
        return []

    triggers: list[TriggerEntry] = []
    stack: list[SyntaxNode] = [parsed.root]
    while stack:
        node = stack.pop()
        stack.extend(reversed(node.children))

        if node.type not in language.jsx_attribute_types or not node.children:
            continue

        prop_name = node_text(node.children[0])
        if prop_name not in event_props:
            continue

        value = next(
            (c for c in node.children if c.type in language.jsx_expression_types),
            None,
        )
        function_name = _bound_function_name(value, language) if value else ""
        if not function_name:
            continue

        triggers.append(
            TriggerEntry(
                function_name=function_name,
                file_path=parsed.file_path,
                trigger=f"User interaction ({prop_name})",
            )
        )
    return triggers


def extract_runtime_triggers(
    sources: Iterable[ParsedSource],
    trigger_index: TriggerIndex,
    event_props: Sequence[str] = DEFAULT_EVENT_PROPS,
) -> int:
    """Clear ``trigger_index`` and rebuild it from ``sources``."""
    trigger_index.clear()
    for parsed in sources:
        for entry in extract_triggers(parsed, event_props):
            trigger_index.add(entry)

    logger.info("Recorded %d runtime triggers", len(trigger_index))
    return len(trigger_index)


__all__ = ["DEFAULT_EVENT_PROPS", "extract_runtime_triggers", "extract_triggers"]
