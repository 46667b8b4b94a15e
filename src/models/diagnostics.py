"""Diagnostic input and attribution models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

OUTSIDE_FUNCTION = "(outside function)"


class Diagnostic(BaseModel):
    """A compiler or linter diagnostic for one file (1-based lines)."""

    model_config = ConfigDict(frozen=True)

    code: str | None = None
    message: str
    severity: str | None = None
    start_line: int = Field(ge=1)
    end_line: int | None = None

    @field_validator("code", mode="before")
    @classmethod
    def coerce_code(cls, v: object) -> object:
        """Diagnostic producers emit numeric and string codes alike."""
        if isinstance(v, bool):
            msg = "code must be a string or an integer"
            raise ValueError(msg)
        if isinstance(v, int):
            return str(v)
        return v

    @model_validator(mode="after")
    def check_range(self) -> Diagnostic:
        if self.end_line is not None and self.end_line < self.start_line:
            msg = "end_line must not precede start_line"
            raise ValueError(msg)
        return self


class DiagnosticAttribution(BaseModel):
    """A diagnostic attributed to the function that owns its line."""

    model_config = ConfigDict(frozen=True)

    file_path: str
    message: str
    line: int
    function_name: str
    code: str | None = None

    @property
    def outside_function(self) -> bool:
        return self.function_name == OUTSIDE_FUNCTION


class DiagnosticReport(BaseModel):
    """An attribution enriched with its caller chain and trigger label."""

    model_config = ConfigDict(frozen=True)

    attribution: DiagnosticAttribution
    caller_chain: list[str] = Field(default_factory=list)
    trigger: str | None = None


__all__ = [
    "OUTSIDE_FUNCTION",
    "Diagnostic",
    "DiagnosticAttribution",
    "DiagnosticReport",
]
