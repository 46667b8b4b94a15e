"""Loading discovered source files into memory."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from models.sources import SourceFile
from scan.files import find_source_files
from utils import relative_posix

if TYPE_CHECKING:
    from pathlib import Path

    from rules.config import CallChainConfig

logger = logging.getLogger(__name__)


def load_source_files(
    root: Path,
    config: CallChainConfig,
    *,
    output_dir: str | None = None,
) -> list[SourceFile]:
    """Read every indexable file under ``root`` into a :class:`SourceFile`.

    Paths are relative POSIX paths. Files that cannot be read or decoded as
    UTF-8 are skipped with a warning.
    """
    files: list[SourceFile] = []
    for file_path in find_source_files(
        root,
        extensions=config.extensions,
        output_dir=config.output_dir if output_dir is None else output_dir,
        include_patterns=config.include,
        exclude_patterns=config.exclude,
        exclude_dirs=config.exclude_dirs,
        nested_gitignore=config.nested_gitignore,
    ):
        relative_path = relative_posix(file_path, root)
        try:
            text = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Skipping unreadable file %s: %s", relative_path, exc)
            continue
        files.append(SourceFile(path=relative_path, text=text))

    logger.info("Loaded %d source files from %s", len(files), root)
    return files


__all__ = ["load_source_files"]
