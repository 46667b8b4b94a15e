"""Diagnostic loading and attribution."""

from diagnostics.loader import (
    DiagnosticsFormatError,
    load_diagnostics,
    parse_diagnostics,
)
from diagnostics.mapper import DEFAULT_SUPPRESSED_CODES, map_diagnostics

__all__ = [
    "DEFAULT_SUPPRESSED_CODES",
    "DiagnosticsFormatError",
    "load_diagnostics",
    "map_diagnostics",
    "parse_diagnostics",
]
