"""Command-line interface for callchain."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import orjson

from analysis.session import AnalysisSession
from artifacts.write import generate_all_artifacts
from diagnostics.loader import DiagnosticsFormatError, load_diagnostics
from graph.projection import project_chain, render_mermaid
from rules.config import ConfigError, load_config
from scan.sources import load_source_files
from utils import normalize_path
from verify.verify import verify_determinism

_JSON_OPTIONS = orjson.OPT_INDENT_2 | orjson.OPT_SORT_KEYS


def _add_common_paths(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Repository root (default: .)",
    )


def _add_format(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--format",
        choices=("json", "mermaid"),
        default="json",
        help="Output format (default: json)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="callchain")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging on stderr",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    index_parser = subparsers.add_parser("index", help="Index a repository")
    _add_common_paths(index_parser)
    index_parser.add_argument(
        "--out-dir",
        default=None,
        help="Output directory for generated artifacts (default: config output dir)",
    )

    verify_parser = subparsers.add_parser(
        "verify", help="Verify determinism of artifacts"
    )
    _add_common_paths(verify_parser)
    verify_parser.add_argument(
        "--artifacts-dir",
        default=None,
        help="Artifacts directory (default: config output dir)",
    )

    chain_parser = subparsers.add_parser(
        "chain", help="Reconstruct the caller chain of a function"
    )
    _add_common_paths(chain_parser)
    chain_parser.add_argument(
        "--file", required=True, help="File path relative to root"
    )
    chain_parser.add_argument(
        "--function", required=True, help="Target function name"
    )
    chain_parser.add_argument(
        "--max-depth",
        type=int,
        default=None,
        help="Maximum caller expansions (default: config max_chain_depth)",
    )
    chain_parser.add_argument(
        "--fallback",
        action="store_true",
        help="Use the lexical parent when no caller is recorded",
    )
    _add_format(chain_parser)

    diagnose_parser = subparsers.add_parser(
        "diagnose", help="Attribute diagnostics to functions and caller chains"
    )
    _add_common_paths(diagnose_parser)
    diagnose_parser.add_argument(
        "--file", required=True, help="File path relative to root"
    )
    diagnose_parser.add_argument(
        "--diagnostics", required=True, help="Path to a diagnostics JSON document"
    )
    _add_format(diagnose_parser)

    roadmap_parser = subparsers.add_parser(
        "roadmap", help="Print the per-file function roadmap"
    )
    _add_common_paths(roadmap_parser)
    _add_format(roadmap_parser)

    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _write_json(payload: object) -> None:
    sys.stdout.write(orjson.dumps(payload, option=_JSON_OPTIONS).decode())
    sys.stdout.write("\n")


def _resolve_output_dir(out_dir: str | None) -> Path | None:
    if out_dir is None:
        return None
    return Path(out_dir).expanduser().resolve()


def _resolve_artifacts_dir(root: Path, artifacts_dir: str | None) -> Path:
    if artifacts_dir is None:
        config = load_config(root)
        return (root / config.output_dir).resolve()
    return Path(artifacts_dir).expanduser().resolve()


def _indexed_session(root: Path) -> AnalysisSession:
    config = load_config(root)
    session = AnalysisSession(config)
    session.index(load_source_files(root, config))
    return session


def _handle_index(root: Path, out_dir: str | None) -> int:
    result = generate_all_artifacts(root=root, out_dir=_resolve_output_dir(out_dir))
    failed_files = result.get("failed_files")
    if isinstance(failed_files, list):
        for failed in failed_files:
            sys.stderr.write(f"skipped: {failed}\n")
    return 0


def _handle_verify(root: Path, artifacts_dir: str | None) -> int:
    resolved_artifacts_dir = _resolve_artifacts_dir(root, artifacts_dir)
    try:
        result = verify_determinism(root=root, artifacts_dir=resolved_artifacts_dir)
    except (FileNotFoundError, NotADirectoryError) as exc:
        sys.stderr.write(f"artifacts-dir: {resolved_artifacts_dir}\n")
        sys.stderr.write(f"error: {exc}\n")
        return 2
    if not result.ok:
        for label, paths in (
            ("missing", result.missing),
            ("extra", result.extra),
            ("mismatches", result.mismatches),
        ):
            for path in paths:
                sys.stderr.write(f"{label}: {path}\n")
        return 1
    return 0


def _handle_chain(
    root: Path,
    file_path: str,
    function_name: str,
    max_depth: int | None,
    fallback: bool,
    output_format: str,
) -> int:
    session = _indexed_session(root)
    chain = session.caller_chain(
        function_name,
        normalize_path(file_path),
        fallback=fallback,
        max_depth=max_depth,
    )
    if output_format == "mermaid":
        sys.stdout.write(render_mermaid(project_chain(chain)))
    else:
        _write_json({"function": function_name, "file": file_path, "chain": chain})
    return 0


def _handle_diagnose(
    root: Path, file_path: str, diagnostics_path: str, output_format: str
) -> int:
    diagnostics = load_diagnostics(Path(diagnostics_path).expanduser())
    session = _indexed_session(root)
    normalized = normalize_path(file_path)
    reports = session.diagnose(normalized, diagnostics)
    if output_format == "mermaid":
        owners = [
            report.attribution.function_name
            for report in reports
            if not report.attribution.outside_function
        ]
        sys.stdout.write(
            render_mermaid(session.execution_graph(normalized, dict.fromkeys(owners)))
        )
    else:
        _write_json([report.model_dump() for report in reports])
    return 0


def _handle_roadmap(root: Path, output_format: str) -> int:
    session = _indexed_session(root)
    if output_format == "mermaid":
        sys.stdout.write(render_mermaid(session.call_graph_view()))
    else:
        _write_json([entry.model_dump() for entry in session.roadmap()])
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    root = Path(args.root).expanduser().resolve()

    try:
        if args.command == "index":
            return _handle_index(root, args.out_dir)

        if args.command == "verify":
            return _handle_verify(root, args.artifacts_dir)

        if args.command == "chain":
            return _handle_chain(
                root,
                args.file,
                args.function,
                args.max_depth,
                args.fallback,
                args.format,
            )

        if args.command == "diagnose":
            return _handle_diagnose(root, args.file, args.diagnostics, args.format)

        if args.command == "roadmap":
            return _handle_roadmap(root, args.format)
    except (ConfigError, DiagnosticsFormatError) as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
