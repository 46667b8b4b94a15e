from __future__ import annotations

from pathlib import Path
from typing import Any

import tomllib
from pydantic import BaseModel, ConfigDict, Field, field_validator

from diagnostics.mapper import DEFAULT_SUPPRESSED_CODES
from graph.chains import DEFAULT_MAX_DEPTH
from parse.languages import SUPPORTED_EXTENSIONS
from parse.treesitter_triggers import DEFAULT_EVENT_PROPS

CONFIG_FILENAME = "callchain.toml"

DEFAULT_EXCLUDE_DIRS = (
    "node_modules",
    ".next",
    "dist",
    "build",
    ".turbo",
    "out",
    ".cache",
    "coverage",
)


class CallChainConfig(BaseModel):
    """Configuration for callchain indexing passes."""

    model_config = ConfigDict(extra="forbid")

    output_dir: str = Field(
        default=".callchain",
        description="Output directory for generated artifacts",
    )
    include: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to include (empty = all supported files)",
    )
    exclude: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to exclude",
    )
    extensions: list[str] = Field(
        default_factory=lambda: list(SUPPORTED_EXTENSIONS),
        description="File extensions to index",
    )
    exclude_dirs: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXCLUDE_DIRS),
        description="Directory names skipped anywhere in the tree (build output)",
    )
    nested_gitignore: bool = Field(
        default=False,
        description=(
            "Enable nested .gitignore composition (default: false for root-only)"
        ),
    )
    max_chain_depth: int = Field(
        default=DEFAULT_MAX_DEPTH,
        ge=1,
        description="Maximum caller expansions when reconstructing a chain",
    )
    suppressed_codes: list[str] = Field(
        default_factory=lambda: sorted(DEFAULT_SUPPRESSED_CODES),
        description="Diagnostic codes dropped before attribution",
    )
    trigger_event_props: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EVENT_PROPS),
        description="JSX props whose handlers are recorded as runtime triggers",
    )
    tolerate_syntax_errors: bool = Field(
        default=False,
        description="Index files with syntax errors instead of skipping them",
    )

    @field_validator("extensions")
    @classmethod
    def validate_extensions(cls, v: list[str]) -> list[str]:
        """Require dotted extensions with a grammar behind them."""
        unsupported = [ext for ext in v if ext.lower() not in SUPPORTED_EXTENSIONS]
        if unsupported:
            msg = (
                f"Unsupported extensions {unsupported}. "
                f"Supported: {', '.join(SUPPORTED_EXTENSIONS)}"
            )
            raise ValueError(msg)
        return [ext.lower() for ext in v]

    @field_validator("suppressed_codes", mode="before")
    @classmethod
    def validate_suppressed_codes(cls, v: Any) -> Any:
        """Accept integer codes as written in TOML and compare them as strings.

        Note: this runs in `mode="before"` so integer TOML values are
        converted before list[str] validation rejects them.
        """
        if v is None:
            return []

        if not isinstance(v, list):
            msg = "suppressed_codes must be a list of codes"
            raise ValueError(msg)

        codes: list[str] = []
        for code in v:
            if isinstance(code, bool) or not isinstance(code, (int, str)):
                msg = f"Invalid diagnostic code {code!r}: expected string or integer"
                raise ValueError(msg)
            codes.append(str(code))
        return codes


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def resolve_output_dir(root: Path, output_dir: str) -> Path:
    """Resolve a config-provided output_dir safely within the repo root.

    The config output_dir must be a non-empty relative path that remains
    within the repository root after resolution. Absolute paths and paths
    that escape the root are rejected.
    """
    if not output_dir:
        msg = "output_dir must be a non-empty relative path"
        raise ConfigError(msg)

    if output_dir.startswith("~"):
        msg = "output_dir must be a relative path within the repo root"
        raise ConfigError(msg)

    output_path = Path(output_dir)
    if output_path.is_absolute():
        msg = "output_dir must be a relative path within the repo root"
        raise ConfigError(msg)

    try:
        resolved_root = root.resolve()
        resolved_output = (resolved_root / output_path).resolve()
    except OSError as exc:
        msg = f"Failed to resolve output_dir '{output_dir}': {exc}"
        raise ConfigError(msg) from exc

    try:
        resolved_output.relative_to(resolved_root)
    except ValueError as exc:
        msg = f"output_dir '{output_dir}' escapes the repository root"
        raise ConfigError(msg) from exc

    return resolved_output


def load_config(root: Path) -> CallChainConfig:
    """Load configuration from callchain.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return CallChainConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return CallChainConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e
