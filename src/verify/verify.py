"""Reproducibility check for callchain artifacts."""

from __future__ import annotations

import logging
import tempfile
from dataclasses import dataclass
from pathlib import Path

from artifacts.write import generate_all_artifacts

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeterminismResult:
    ok: bool
    mismatches: tuple[str, ...] = ()
    missing: tuple[str, ...] = ()
    extra: tuple[str, ...] = ()


def _snapshot(directory: Path) -> dict[str, bytes]:
    """Map every file under ``directory`` (relative POSIX path) to its bytes."""
    return {
        path.relative_to(directory).as_posix(): path.read_bytes()
        for path in directory.rglob("*")
        if path.is_file()
    }


def verify_determinism(*, root: Path, artifacts_dir: Path) -> DeterminismResult:
    """Re-run an indexing pass and compare it with the artifacts on disk.

    Every pass clears and rebuilds its indices, so an unchanged source tree
    must reproduce ``artifacts_dir`` byte for byte.

    Raises:
        FileNotFoundError: If artifacts_dir does not exist.
        NotADirectoryError: If artifacts_dir is not a directory.
    """
    if not artifacts_dir.exists():
        msg = f"Artifacts directory does not exist: {artifacts_dir}"
        raise FileNotFoundError(msg)
    if not artifacts_dir.is_dir():
        msg = f"Artifacts path is not a directory: {artifacts_dir}"
        raise NotADirectoryError(msg)

    expected = _snapshot(artifacts_dir)
    with tempfile.TemporaryDirectory(prefix="callchain-verify-") as temp_dir:
        generate_all_artifacts(root=root, out_dir=Path(temp_dir))
        regenerated = _snapshot(Path(temp_dir))

    shared = expected.keys() & regenerated.keys()
    result = DeterminismResult(
        ok=expected == regenerated,
        mismatches=tuple(sorted(p for p in shared if expected[p] != regenerated[p])),
        missing=tuple(sorted(expected.keys() - regenerated.keys())),
        extra=tuple(sorted(regenerated.keys() - expected.keys())),
    )
    if not result.ok:
        logger.warning(
            "Artifacts in %s differ from a fresh pass (%d mismatched, %d missing, "
            "%d extra)",
            artifacts_dir,
            len(result.mismatches),
            len(result.missing),
            len(result.extra),
        )
    return result


__all__ = ["DeterminismResult", "verify_determinism"]
