"""Shared utilities for callchain."""

from __future__ import annotations

import os
from pathlib import Path


def normalize_path(file_path: str | Path) -> str:
    """Normalise a file path used as a registry key.

    Collapses redundant separators and ``.``/``..`` segments the way
    ``os.path.normpath`` does, and converts backslashes to forward slashes so
    that keys produced on Windows and POSIX hosts compare equal.

    Examples:
        >>> normalize_path("src/./app.tsx")
        'src/app.tsx'
        >>> normalize_path("src\\\\components\\\\..\\\\app.tsx")
        'src/app.tsx'
    """
    path_str = file_path.as_posix() if isinstance(file_path, Path) else str(file_path)
    return os.path.normpath(path_str.replace("\\", "/")).replace("\\", "/")


def relative_posix(path: Path, root: Path) -> str:
    """Return ``path`` relative to ``root`` as a POSIX string."""
    return path.relative_to(root).as_posix()
