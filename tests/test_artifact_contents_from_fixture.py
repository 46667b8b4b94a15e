from __future__ import annotations

import shutil
from pathlib import Path

import orjson

from artifacts.utils import load_jsonl
from artifacts.write import generate_all_artifacts
from contract.artifacts import (
    ARTIFACT_SCHEMA_VERSION,
    ARTIFACT_SPECS,
    CALLS_JSONL,
    FUNCTIONS_JSONL,
    GRAPH_JSON,
    TRIGGERS_JSONL,
)


def _copy_fixture(repo_root: Path) -> None:
    fixture_root = Path(__file__).parent / "fixtures" / "mini_app"
    shutil.copytree(fixture_root, repo_root)


def test_artifact_contents_generated_from_committed_fixture(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _copy_fixture(repo_root)
    out_dir = tmp_path / "artifacts"

    result = generate_all_artifacts(root=repo_root, out_dir=out_dir)

    assert result["file_count"] == 3
    assert result["failed_files"] == []
    assert result["function_count"] == 13
    assert result["edge_count"] == 13
    assert result["resolved_edge_count"] == 9
    assert result["trigger_count"] == 1
    assert result["cycle_count"] == 0

    functions = load_jsonl(out_dir / FUNCTIONS_JSONL)
    assert [(f["file_path"], f["start_line"]) for f in functions] == sorted(
        (f["file_path"], f["start_line"]) for f in functions
    )
    assert {f["schema_version"] for f in functions} == {ARTIFACT_SCHEMA_VERSION}
    assert "node_modules/lib/index.js" not in {f["file_path"] for f in functions}
    inner = next(f for f in functions if f["name"] == "inner")
    assert inner["id"] == "src/utils.js:inner:2"
    assert inner["parent_function_name"] == "outer"

    calls = load_jsonl(out_dir / CALLS_JSONL)
    assert len(calls) == 13
    unresolved = sorted(c["callee_name"] for c in calls if c["callee_id"] is None)
    assert unresolved == ["print", "save", "setCount", "useState"]

    triggers = load_jsonl(out_dir / TRIGGERS_JSONL)
    assert triggers == [
        {
            "file_path": "src/App.tsx",
            "function_name": "handleClick",
            "schema_version": ARTIFACT_SCHEMA_VERSION,
            "trigger": "User interaction (onClick)",
        }
    ]

    graph = orjson.loads((out_dir / GRAPH_JSON).read_bytes())
    assert len(graph["nodes"]) == 13
    assert len(graph["edges"]) == 9
    assert graph["cycles"] == []


def test_generated_records_are_sorted_key_jsonl(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _copy_fixture(repo_root)
    out_dir = tmp_path / "artifacts"

    generate_all_artifacts(root=repo_root, out_dir=out_dir)

    for raw_line in (out_dir / CALLS_JSONL).read_text(encoding="utf-8").splitlines():
        record = orjson.loads(raw_line)
        assert list(record) == sorted(record)


def test_recursion_cycles_are_reported(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    repo_root.mkdir()
    (repo_root / "loop.js").write_text(
        "function ping() {\n  pong();\n}\nfunction pong() {\n  ping();\n}\n",
        encoding="utf-8",
    )
    out_dir = tmp_path / "artifacts"

    result = generate_all_artifacts(root=repo_root, out_dir=out_dir)

    graph = orjson.loads((out_dir / GRAPH_JSON).read_bytes())
    assert result["cycle_count"] == 1
    assert graph["cycles"] == [["loop.js:ping:1", "loop.js:pong:4"]]


def test_output_directory_holds_exactly_the_contract_artifacts(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _copy_fixture(repo_root)
    out_dir = tmp_path / "artifacts"

    result = generate_all_artifacts(root=repo_root, out_dir=out_dir)

    expected = sorted(spec.filename for spec in ARTIFACT_SPECS.values())
    assert sorted(path.name for path in out_dir.iterdir()) == expected
    assert result["artifacts"] == [
        str(out_dir / spec.filename) for spec in ARTIFACT_SPECS.values()
    ]
