"""Function entity models.

A function entity describes one function-like construct found by the
boundary extractor: its identity, its inclusive 1-based line range and the
name of the function that lexically encloses it.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from contract.artifacts import ARTIFACT_SCHEMA_VERSION

FunctionKind = Literal["declaration", "binding", "method", "property", "default_export"]


def build_function_id(file_path: str, name: str, start_line: int) -> str:
    """Derive the deterministic function id for ``(file_path, name, start_line)``."""
    return f"{file_path}:{name}:{start_line}"


class FunctionEntity(BaseModel):
    """A function-like construct registered in the function index."""

    model_config = ConfigDict(frozen=True)

    schema_version: int = Field(default=ARTIFACT_SCHEMA_VERSION)
    id: str
    name: str
    file_path: str
    start_line: int
    end_line: int
    parent_function_name: str | None = Field(
        default=None,
        description="Nearest lexically enclosing function (not a caller)",
    )
    kind: FunctionKind = "declaration"

    def contains_line(self, line: int) -> bool:
        return self.start_line <= line <= self.end_line


__all__ = ["FunctionEntity", "FunctionKind", "build_function_id"]
