"""Syntax-tree parsing and structural extraction."""

from parse.languages import (
    LANGUAGES,
    SUPPORTED_EXTENSIONS,
    LanguageSpec,
    detect_language,
)
from parse.name_resolution import CalleeResolver, SameFileResolver
from parse.syntax import ParsedSource, SyntaxNode
from parse.treesitter_calls import extract_call_edges, normalize_callee, resolve_calls
from parse.treesitter_functions import extract_function_boundaries, extract_functions
from parse.treesitter_parser import SourceParser, TreeSitterParser
from parse.treesitter_triggers import extract_runtime_triggers, extract_triggers

__all__ = [
    "LANGUAGES",
    "SUPPORTED_EXTENSIONS",
    "CalleeResolver",
    "LanguageSpec",
    "ParsedSource",
    "SameFileResolver",
    "SourceParser",
    "SyntaxNode",
    "TreeSitterParser",
    "detect_language",
    "extract_call_edges",
    "extract_function_boundaries",
    "extract_functions",
    "extract_runtime_triggers",
    "extract_triggers",
    "normalize_callee",
    "resolve_calls",
]
