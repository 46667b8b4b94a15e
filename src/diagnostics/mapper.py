"""Attribution of diagnostics to the functions that own their lines."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from models.diagnostics import OUTSIDE_FUNCTION, DiagnosticAttribution

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable

    from index.function_index import FunctionIndex
    from models.diagnostics import Diagnostic

logger = logging.getLogger(__name__)

# Unused-symbol style warnings: TypeScript 6133 ("declared but its value is
# never read") and 6196 ("declared but never used"), pyflakes/ruff F401
# (unused import) and F841 (unused local variable).
DEFAULT_SUPPRESSED_CODES: frozenset[str] = frozenset({"6133", "6196", "F401", "F841"})


def is_suppressed(diagnostic: Diagnostic, suppressed_codes: Collection[str]) -> bool:
    return diagnostic.code is not None and diagnostic.code in suppressed_codes


def map_diagnostics(
    file_path: str,
    diagnostics: Iterable[Diagnostic],
    function_index: FunctionIndex,
    suppressed_codes: Collection[str] = DEFAULT_SUPPRESSED_CODES,
) -> list[DiagnosticAttribution]:
    """Attribute each non-suppressed diagnostic of ``file_path`` to a function.

    The owner is the innermost function whose range contains the diagnostic's
    start line; diagnostics in no function get ``"(outside function)"``.
    """
    attributions: list[DiagnosticAttribution] = []
    skipped = 0
    for diagnostic in diagnostics:
        if is_suppressed(diagnostic, suppressed_codes):
            skipped += 1
            continue

        owner = function_index.find_by_line(file_path, diagnostic.start_line)
        attributions.append(
            DiagnosticAttribution(
                file_path=file_path,
                message=diagnostic.message,
                line=diagnostic.start_line,
                function_name=owner.name if owner is not None else OUTSIDE_FUNCTION,
                code=diagnostic.code,
            )
        )

    logger.debug(
        "Attributed %d diagnostics in %s (%d suppressed)",
        len(attributions),
        file_path,
        skipped,
    )
    return attributions


__all__ = ["DEFAULT_SUPPRESSED_CODES", "is_suppressed", "map_diagnostics"]
