"""Source file discovery.

Discovery walks the tree top-down so that excluded directories (build output,
dependency folders, the artifact directory) are pruned before their contents
are listed. Symlinked directories are never entered and symlinked files are
never returned, so nothing outside the root is indexed.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass, field
from fnmatch import fnmatch
from pathlib import Path
from typing import TYPE_CHECKING, cast

from gitignore_parser import parse_gitignore  # type: ignore[import-untyped]

if TYPE_CHECKING:
    from collections.abc import Collection, Iterator

GitignoreMatcher = Callable[[str], bool]


def _gitignore_files(root: Path, *, nested: bool) -> list[Path]:
    """Regular ``.gitignore`` files that apply under ``root``, shallowest first."""
    if not nested:
        candidates = [root / ".gitignore"]
    else:
        candidates = sorted(
            root.rglob(".gitignore"),
            key=lambda p: (len(p.relative_to(root).parts), p.as_posix()),
        )
    return [path for path in candidates if path.is_file() and not path.is_symlink()]


def _build_gitignore_matcher(
    root: Path,
    *,
    nested_gitignore: bool,
) -> GitignoreMatcher | None:
    """Compose the applicable ``.gitignore`` files into one predicate.

    Each nested file only judges paths below its own directory; paths it
    cannot relate to are treated as not ignored by that file.
    """
    matchers = [
        cast("GitignoreMatcher", parse_gitignore(path))
        for path in _gitignore_files(root, nested=nested_gitignore)
    ]
    if not matchers:
        return None

    def matches(path_str: str) -> bool:
        for matcher in matchers:
            try:
                if matcher(path_str):
                    return True
            except ValueError:
                continue
        return False

    return matches


@dataclass(frozen=True)
class _SourceFilter:
    """Per-file acceptance rules for one discovery run."""

    root: Path
    extensions: frozenset[str]
    include_patterns: tuple[str, ...] = ()
    exclude_patterns: tuple[str, ...] = ()
    gitignore: GitignoreMatcher | None = field(default=None, compare=False)

    def accepts(self, path: Path) -> bool:
        if path.suffix.lower() not in self.extensions or path.is_symlink():
            return False

        rel_path = path.relative_to(self.root).as_posix()
        if self.gitignore is not None and self.gitignore(str(path)):
            return False
        if self.include_patterns and not any(
            fnmatch(rel_path, pattern) for pattern in self.include_patterns
        ):
            return False
        return not any(fnmatch(rel_path, pattern) for pattern in self.exclude_patterns)


def _prune_dirs(
    dirpath: Path,
    dirnames: list[str],
    root: Path,
    skipped: Collection[str],
    output_dir: str,
) -> None:
    """Drop excluded and symlinked directories from an ``os.walk`` listing."""
    at_root = dirpath == root
    dirnames[:] = sorted(
        name
        for name in dirnames
        if name not in skipped
        and not (at_root and name == output_dir)
        and not (dirpath / name).is_symlink()
    )


def find_source_files(
    directory: Path,
    *,
    extensions: Collection[str],
    output_dir: str = ".callchain",
    include_patterns: list[str] | None = None,
    exclude_patterns: list[str] | None = None,
    exclude_dirs: Collection[str] = (),
    nested_gitignore: bool = False,
) -> Iterator[Path]:
    """Find all source files with one of ``extensions``, respecting .gitignore.

    Args:
        directory: Directory to search for source files
        extensions: Lower-case dotted suffixes to accept (e.g. ".tsx")
        output_dir: Top-level directory name to skip (default ".callchain")
        include_patterns: Optional list of fnmatch patterns; if provided,
            files must match at least one pattern to be included
        exclude_patterns: Optional list of fnmatch patterns; files matching
            any pattern are excluded
        exclude_dirs: Directory names skipped wherever they appear
        nested_gitignore: Compose every .gitignore under ``directory``

    Yields:
        Path objects for each source file found, sorted lexicographically
        by relative path for deterministic ordering.
    """
    root = Path(os.path.abspath(directory))
    source_filter = _SourceFilter(
        root=root,
        extensions=frozenset(ext.lower() for ext in extensions),
        include_patterns=tuple(include_patterns or ()),
        exclude_patterns=tuple(exclude_patterns or ()),
        gitignore=_build_gitignore_matcher(root, nested_gitignore=nested_gitignore),
    )
    skipped = frozenset(exclude_dirs)

    matched: list[Path] = []
    for dirpath_str, dirnames, filenames in os.walk(root):
        dirpath = Path(dirpath_str)
        _prune_dirs(dirpath, dirnames, root, skipped, output_dir)
        matched.extend(
            path
            for path in (dirpath / name for name in filenames)
            if source_filter.accepts(path)
        )

    matched.sort(key=lambda p: p.relative_to(root).as_posix())
    for path in matched:
        yield directory / path.relative_to(root)


__all__ = ["find_source_files"]
