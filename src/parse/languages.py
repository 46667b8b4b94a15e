"""Per-language node-shape tables for the supported tree-sitter grammars.

Each table names the node types that realise one of the function-like
constructs the boundary extractor recognises, plus the call and member
shapes the call resolver understands. Grammar differences (for example the
older ``function`` versus newer ``function_expression`` node name in
tree-sitter-javascript) are absorbed here so the walkers stay generic.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import TYPE_CHECKING

import tree_sitter_javascript
import tree_sitter_python
import tree_sitter_typescript

if TYPE_CHECKING:
    from collections.abc import Callable


@dataclass(frozen=True, eq=False)
class LanguageSpec:
    """Node-shape table for one grammar."""

    name: str
    extensions: tuple[str, ...]
    load: Callable[[], object] = field(repr=False, compare=False)
    # Named declarations; the node itself is the function, name in field "name".
    declaration_types: frozenset[str] = frozenset()
    # Class / object methods; the node itself is the function, name in "name".
    method_types: frozenset[str] = frozenset()
    # Bindings: node type -> (name field, value field) where value may be a function.
    binding_fields: dict[str, tuple[str, str]] = field(default_factory=dict)
    # Object-literal properties: node type -> (key field, value field).
    property_fields: dict[str, tuple[str, str]] = field(default_factory=dict)
    # Export statements that may carry a ``default`` anonymous function.
    default_export_types: frozenset[str] = frozenset()
    # Anonymous function / closure node types.
    anonymous_function_types: frozenset[str] = frozenset()
    # Node types accepted as a function name.
    name_types: frozenset[str] = frozenset({"identifier"})
    call_types: frozenset[str] = frozenset()
    call_function_field: str = "function"
    # Member access node type -> (receiver field, member field).
    member_fields: dict[str, tuple[str, str]] = field(default_factory=dict)
    identifier_types: frozenset[str] = frozenset({"identifier"})
    jsx_attribute_types: frozenset[str] = frozenset()
    jsx_expression_types: frozenset[str] = frozenset()


_JS_ANONYMOUS = frozenset(
    {
        "arrow_function",
        "function_expression",
        "function",
        "generator_function",
    }
)

_JS_NAMES = frozenset(
    {"identifier", "property_identifier", "private_property_identifier"}
)


def _ecmascript(
    name: str, extensions: tuple[str, ...], load: Callable[[], object]
) -> LanguageSpec:
    return LanguageSpec(
        name=name,
        extensions=extensions,
        load=load,
        declaration_types=frozenset(
            {"function_declaration", "generator_function_declaration"}
        ),
        method_types=frozenset({"method_definition"}),
        binding_fields={
            "variable_declarator": ("name", "value"),
            "field_definition": ("property", "value"),
            "public_field_definition": ("name", "value"),
        },
        property_fields={"pair": ("key", "value")},
        default_export_types=frozenset({"export_statement"}),
        anonymous_function_types=_JS_ANONYMOUS,
        name_types=_JS_NAMES,
        call_types=frozenset({"call_expression"}),
        member_fields={"member_expression": ("object", "property")},
        identifier_types=frozenset({"identifier"}),
        jsx_attribute_types=frozenset({"jsx_attribute"}),
        jsx_expression_types=frozenset({"jsx_expression"}),
    )


PYTHON = LanguageSpec(
    name="python",
    extensions=(".py", ".pyi"),
    load=tree_sitter_python.language,
    declaration_types=frozenset({"function_definition"}),
    binding_fields={"assignment": ("left", "right")},
    anonymous_function_types=frozenset({"lambda"}),
    call_types=frozenset({"call"}),
    member_fields={"attribute": ("object", "attribute")},
)

JAVASCRIPT = _ecmascript(
    "javascript", (".js", ".jsx", ".mjs", ".cjs"), tree_sitter_javascript.language
)
TYPESCRIPT = _ecmascript(
    "typescript", (".ts", ".mts", ".cts"), tree_sitter_typescript.language_typescript
)
TSX = _ecmascript("tsx", (".tsx",), tree_sitter_typescript.language_tsx)

LANGUAGES: tuple[LanguageSpec, ...] = (PYTHON, JAVASCRIPT, TYPESCRIPT, TSX)

_EXTENSION_MAP: dict[str, LanguageSpec] = {
    ext: spec for spec in LANGUAGES for ext in spec.extensions
}

SUPPORTED_EXTENSIONS: tuple[str, ...] = tuple(sorted(_EXTENSION_MAP))


def detect_language(file_path: str) -> LanguageSpec | None:
    """Return the language table for ``file_path`` by extension, if supported."""
    suffix = PurePosixPath(file_path.replace("\\", "/")).suffix
    return _EXTENSION_MAP.get(suffix.lower())


__all__ = [
    "JAVASCRIPT",
    "LANGUAGES",
    "PYTHON",
    "SUPPORTED_EXTENSIONS",
    "TSX",
    "TYPESCRIPT",
    "LanguageSpec",
    "detect_language",
]
