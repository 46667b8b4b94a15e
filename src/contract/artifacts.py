"""Artifact contract definitions.

This module defines the stable filenames and formats of the artifacts an
indexing pass writes, so that consumers (diagram renderers, reporting) can
depend on them without importing the engine.
"""

from __future__ import annotations

from dataclasses import dataclass

# Artifact schema version stamped on every persisted record.
ARTIFACT_SCHEMA_VERSION = 1

# Artifact filename constants (stable contract identifiers).
FUNCTIONS_JSONL = "functions.jsonl"
CALLS_JSONL = "calls.jsonl"
TRIGGERS_JSONL = "triggers.jsonl"
GRAPH_JSON = "graph.json"


@dataclass(frozen=True)
class ArtifactSpec:
    """Specification for a contract artifact."""

    filename: str
    format: str
    required_fields_note: str


ARTIFACT_SPECS: dict[str, ArtifactSpec] = {
    "functions": ArtifactSpec(
        filename=FUNCTIONS_JSONL,
        format="jsonl",
        required_fields_note="FunctionEntity fields by (file_path, start_line).",
    ),
    "calls": ArtifactSpec(
        filename=CALLS_JSONL,
        format="jsonl",
        required_fields_note="CallEdge fields, in source order per file.",
    ),
    "triggers": ArtifactSpec(
        filename=TRIGGERS_JSONL,
        format="jsonl",
        required_fields_note="TriggerEntry fields.",
    ),
    "graph": ArtifactSpec(
        filename=GRAPH_JSON,
        format="json",
        required_fields_note="GraphView of resolved edges plus detected cycles.",
    ),
}
