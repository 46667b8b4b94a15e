"""Tree-sitter backed implementation of the syntax-tree capability."""

from __future__ import annotations

import logging
from typing import Protocol

from tree_sitter import Language, Parser

from parse.languages import LanguageSpec, detect_language
from parse.syntax import ParsedSource

logger = logging.getLogger(__name__)

_PARSERS: dict[str, Parser] = {}


def _get_parser(language: LanguageSpec) -> Parser:
    """Initialize (once per language) and return a Tree-sitter parser."""
    parser = _PARSERS.get(language.name)
    if parser is None:
        parser = Parser(Language(language.load()))
        _PARSERS[language.name] = parser
    return parser


class SourceParser(Protocol):
    """Anything that turns source text into a traversable tree."""

    def parse(self, file_path: str, source_text: str) -> ParsedSource | None: ...


class TreeSitterParser:
    """Parses source text with the grammar matching the file extension.

    ``parse`` returns ``None`` for an unsupported extension and, unless
    ``tolerate_syntax_errors`` is set, for source whose tree contains error
    nodes. A ``None`` result means the file contributes nothing to the pass.
    """

    def __init__(self, *, tolerate_syntax_errors: bool = False) -> None:
        self.tolerate_syntax_errors = tolerate_syntax_errors

    def parse(self, file_path: str, source_text: str) -> ParsedSource | None:
        language = detect_language(file_path)
        if language is None:
            logger.debug("No grammar for %s; skipping", file_path)
            return None

        tree = _get_parser(language).parse(source_text.encode("utf8"))
        root = tree.root_node
        if root.has_error and not self.tolerate_syntax_errors:
            logger.warning("Syntax errors in %s; no functions extracted", file_path)
            return None

        return ParsedSource(file_path=file_path, root=root, language=language)


__all__ = ["SourceParser", "TreeSitterParser"]
