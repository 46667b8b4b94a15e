"""Runtime trigger models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from contract.artifacts import ARTIFACT_SCHEMA_VERSION


class TriggerEntry(BaseModel):
    """Associates a function with the external event that invokes it."""

    model_config = ConfigDict(frozen=True)

    schema_version: int = Field(default=ARTIFACT_SCHEMA_VERSION)
    function_name: str
    file_path: str
    trigger: str


__all__ = ["TriggerEntry"]
