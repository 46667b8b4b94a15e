"""Configuration loading for callchain."""

from rules.config import (
    CONFIG_FILENAME,
    CallChainConfig,
    ConfigError,
    load_config,
    resolve_output_dir,
)

__all__ = [
    "CONFIG_FILENAME",
    "CallChainConfig",
    "ConfigError",
    "load_config",
    "resolve_output_dir",
]
