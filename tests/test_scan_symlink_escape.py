from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

from rules.config import CallChainConfig
from scan.files import _build_gitignore_matcher, find_source_files
from scan.sources import load_source_files

if TYPE_CHECKING:
    from pathlib import Path

_EXTENSIONS = (".js", ".ts", ".py")


def _relative(paths: list[Path], root: Path) -> list[str]:
    return [path.relative_to(root).as_posix() for path in paths]


@pytest.mark.skipif(
    os.name == "nt",
    reason="Symlink semantics vary on Windows test runners.",
)
def test_find_source_files_skips_symlinked_dirs(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    repo_root.mkdir()
    (repo_root / "pkg").mkdir()
    (repo_root / "pkg" / "module.js").write_text("run();\n", encoding="utf-8")

    external_root = tmp_path / "external"
    external_root.mkdir()
    (external_root / "leak.js").write_text("leak();\n", encoding="utf-8")

    symlink_dir = repo_root / "linked"
    symlink_dir.symlink_to(external_root, target_is_directory=True)

    results = _relative(
        list(find_source_files(repo_root, extensions=_EXTENSIONS)), repo_root
    )

    assert "pkg/module.js" in results
    assert "linked/leak.js" not in results


@pytest.mark.skipif(
    os.name == "nt",
    reason="Symlink semantics vary on Windows test runners.",
)
def test_nested_gitignore_skips_symlinked_gitignore(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    repo_root.mkdir()
    (repo_root / "pkg").mkdir()
    (repo_root / "pkg" / "module.js").write_text("run();\n", encoding="utf-8")
    (repo_root / ".gitignore").write_text("*.bin\n", encoding="utf-8")

    external_root = tmp_path / "external"
    external_root.mkdir()
    (external_root / "outside.gitignore").write_text(
        "pkg/module.js\n", encoding="utf-8"
    )

    symlink_gitignore = repo_root / "linked.gitignore"
    symlink_gitignore.symlink_to(external_root / "outside.gitignore")

    matcher = _build_gitignore_matcher(repo_root, nested_gitignore=True)
    assert matcher is not None
    assert matcher(str(repo_root / "pkg" / "module.js")) is False


def test_find_source_files_filters_extensions_and_build_dirs(tmp_path: Path) -> None:
    for rel_path in (
        "src/b.ts",
        "src/a.js",
        "src/readme.md",
        "node_modules/lib/index.js",
        "dist/bundle.js",
        ".callchain/functions.jsonl",
    ):
        path = tmp_path / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("x\n", encoding="utf-8")

    results = _relative(
        list(
            find_source_files(
                tmp_path,
                extensions=_EXTENSIONS,
                exclude_dirs=("node_modules", "dist"),
            )
        ),
        tmp_path,
    )

    assert results == ["src/a.js", "src/b.ts"]


def test_find_source_files_respects_gitignore_and_patterns(tmp_path: Path) -> None:
    (tmp_path / ".gitignore").write_text("*.gen.ts\n", encoding="utf-8")
    for rel_path in ("src/api.gen.ts", "src/app.ts", "src/app.test.ts"):
        path = tmp_path / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("x\n", encoding="utf-8")

    results = _relative(
        list(
            find_source_files(
                tmp_path,
                extensions=_EXTENSIONS,
                exclude_patterns=["*.test.ts"],
            )
        ),
        tmp_path,
    )

    assert results == ["src/app.ts"]


def test_load_source_files_skips_undecodable_files(tmp_path: Path) -> None:
    (tmp_path / "good.js").write_text("ok();\n", encoding="utf-8")
    (tmp_path / "bad.js").write_bytes(b"\xff\xfe\x00broken")

    files = load_source_files(tmp_path, CallChainConfig())

    assert [(source.path, source.text) for source in files] == [("good.js", "ok();\n")]
