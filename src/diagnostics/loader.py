"""Loading diagnostics documents produced by compilers and linters.

Two record shapes are accepted, either as a top-level JSON array or under a
``"diagnostics"`` key:

- flat, 1-based: ``line`` (or ``start_line``) and optional ``end_line``
- LSP, 0-based: ``range.start.line`` and ``range.end.line``

Both carry ``code``, ``message`` and ``severity``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import orjson
from pydantic import ValidationError

from models.diagnostics import Diagnostic

if TYPE_CHECKING:
    from pathlib import Path

# LSP DiagnosticSeverity values.
_LSP_SEVERITIES = {1: "error", 2: "warning", 3: "information", 4: "hint"}


class DiagnosticsFormatError(Exception):
    """Raised when a diagnostics document cannot be read or understood."""


def _severity(raw: Any) -> Any:
    if isinstance(raw, int) and not isinstance(raw, bool):
        return _LSP_SEVERITIES.get(raw, str(raw))
    return raw


def _line_fields(record: dict[str, Any]) -> dict[str, Any]:
    range_obj = record.get("range")
    if isinstance(range_obj, dict):
        start = range_obj.get("start")
        end = range_obj.get("end")
        if not isinstance(start, dict) or not isinstance(start.get("line"), int):
            msg = "LSP range must carry an integer start.line"
            raise DiagnosticsFormatError(msg)
        end_line = end.get("line") if isinstance(end, dict) else None
        return {
            "start_line": start["line"] + 1,
            "end_line": end_line + 1 if isinstance(end_line, int) else None,
        }

    start_line = record.get("start_line", record.get("line"))
    return {"start_line": start_line, "end_line": record.get("end_line")}


def parse_diagnostic(record: Any) -> Diagnostic:
    """Convert one raw diagnostic record into a :class:`Diagnostic`."""
    if not isinstance(record, dict):
        msg = f"diagnostic must be an object, got {type(record).__name__}"
        raise DiagnosticsFormatError(msg)

    try:
        return Diagnostic(
            code=record.get("code"),
            message=record.get("message"),
            severity=_severity(record.get("severity")),
            **_line_fields(record),
        )
    except (ValidationError, TypeError) as exc:
        msg = f"Invalid diagnostic {record!r}: {exc}"
        raise DiagnosticsFormatError(msg) from exc


def parse_diagnostics(payload: Any) -> list[Diagnostic]:
    if isinstance(payload, dict) and "diagnostics" in payload:
        payload = payload["diagnostics"]
    if not isinstance(payload, list):
        msg = "diagnostics document must be a list or contain a 'diagnostics' list"
        raise DiagnosticsFormatError(msg)
    return [parse_diagnostic(record) for record in payload]


def load_diagnostics(path: Path) -> list[Diagnostic]:
    """Load diagnostics from a JSON file."""
    try:
        payload = orjson.loads(path.read_bytes())
    except OSError as exc:
        msg = f"Cannot read diagnostics file {path}: {exc}"
        raise DiagnosticsFormatError(msg) from exc
    except orjson.JSONDecodeError as exc:
        msg = f"Invalid JSON in {path}: {exc}"
        raise DiagnosticsFormatError(msg) from exc
    return parse_diagnostics(payload)


__all__ = [
    "DiagnosticsFormatError",
    "load_diagnostics",
    "parse_diagnostic",
    "parse_diagnostics",
]
