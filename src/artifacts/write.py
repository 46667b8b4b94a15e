from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from analysis.session import AnalysisSession
from artifacts.utils import output_dir_name, write_json, write_jsonl
from contract.artifacts import (
    ARTIFACT_SPECS,
    CALLS_JSONL,
    FUNCTIONS_JSONL,
    GRAPH_JSON,
    TRIGGERS_JSONL,
)
from graph.algos import build_id_graph, find_cycles
from rules.config import load_config, resolve_output_dir
from scan.sources import load_source_files

if TYPE_CHECKING:
    from pathlib import Path

    from rules.config import CallChainConfig

logger = logging.getLogger(__name__)


def generate_all_artifacts(
    *,
    root: Path,
    out_dir: Path | None = None,
    config: CallChainConfig | None = None,
) -> dict[str, object]:
    """Run one indexing pass over a repository and write its artifacts.

    Args:
        root: Root directory of the repository to analyze
        out_dir: Optional output directory for generated artifacts
        config: Optional configuration (default: loaded from callchain.toml)

    Returns:
        Dictionary with counts and list of generated artifact paths.
    """
    if config is None:
        config = load_config(root)

    if out_dir is None:
        out_dir = resolve_output_dir(root, config.output_dir)

    out_dir.mkdir(parents=True, exist_ok=True)

    files = load_source_files(
        root, config, output_dir=output_dir_name(out_dir, root)
    )
    session = AnalysisSession(config)
    summary = session.index(files)

    functions = sorted(
        session.function_index.get_all(),
        key=lambda entity: (entity.file_path, entity.start_line),
    )
    edges = session.call_graph.get_all()
    triggers = session.trigger_index.get_all()
    view = session.call_graph_view()
    cycles = find_cycles(build_id_graph(edges))

    write_jsonl(out_dir / FUNCTIONS_JSONL, functions)
    write_jsonl(out_dir / CALLS_JSONL, edges)
    write_jsonl(out_dir / TRIGGERS_JSONL, triggers)
    write_json(
        out_dir / GRAPH_JSON,
        {
            "nodes": [node.model_dump() for node in view.nodes],
            "edges": [edge.model_dump() for edge in view.edges],
            "cycles": cycles,
        },
    )

    artifacts_list = [spec.filename for spec in ARTIFACT_SPECS.values()]
    logger.info("Wrote %d artifacts to %s", len(artifacts_list), out_dir)

    return {
        "file_count": summary.file_count,
        "failed_files": list(summary.failed_files),
        "function_count": summary.function_count,
        "edge_count": summary.edge_count,
        "resolved_edge_count": summary.resolved_edge_count,
        "trigger_count": summary.trigger_count,
        "cycle_count": len(cycles),
        "artifacts": [str(out_dir / name) for name in artifacts_list],
    }
