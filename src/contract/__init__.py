"""Stable artifact contract surface for callchain consumers."""

from contract.artifacts import (
    ARTIFACT_SCHEMA_VERSION,
    ARTIFACT_SPECS,
    CALLS_JSONL,
    FUNCTIONS_JSONL,
    GRAPH_JSON,
    TRIGGERS_JSONL,
    ArtifactSpec,
)

__all__ = [
    "ARTIFACT_SCHEMA_VERSION",
    "ARTIFACT_SPECS",
    "CALLS_JSONL",
    "FUNCTIONS_JSONL",
    "GRAPH_JSON",
    "TRIGGERS_JSONL",
    "ArtifactSpec",
]
