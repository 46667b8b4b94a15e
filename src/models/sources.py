"""Source file input model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class SourceFile(BaseModel):
    """A file path and its already-loaded text."""

    model_config = ConfigDict(frozen=True)

    path: str
    text: str


__all__ = ["SourceFile"]
