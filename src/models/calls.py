"""Call edge models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from contract.artifacts import ARTIFACT_SCHEMA_VERSION

UNKNOWN_CALLEE = "unknown"


class CallEdge(BaseModel):
    """One call expression attributed to its lexically enclosing function."""

    model_config = ConfigDict(frozen=True)

    schema_version: int = Field(default=ARTIFACT_SCHEMA_VERSION)
    caller_id: str
    caller_name: str
    callee_id: str | None = None
    callee_name: str
    file_path: str
    line: int
    receiver: str | None = Field(
        default=None,
        description="Receiver expression of a member call (not used for resolution)",
    )

    @property
    def resolved(self) -> bool:
        return self.callee_id is not None


__all__ = ["UNKNOWN_CALLEE", "CallEdge"]
