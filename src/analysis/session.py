"""Analysis sessions: one set of indices and the passes that build them.

A session owns its registries outright, so independent sessions (for
example in tests) never observe each other's state. Within a session,
``index`` runs the phases strictly in order:

1. parse every file once,
2. rebuild the function index over all files,
3. rebuild the call graph (which needs the complete function index),
4. rebuild the trigger index.

Passes are serialised by a lock; a second ``index`` call waits for the
running one to finish instead of interleaving with it.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING

from diagnostics.mapper import map_diagnostics
from graph.chains import reconstruct_chain, reconstruct_chain_with_fallback
from graph.projection import (
    build_execution_graph,
    build_roadmap,
    project_call_graph,
)
from index.call_graph import CallGraphIndex
from index.function_index import FunctionIndex
from index.trigger_index import TriggerIndex
from models.diagnostics import DiagnosticReport
from parse.name_resolution import SameFileResolver
from parse.treesitter_calls import resolve_calls
from parse.treesitter_functions import extract_function_boundaries
from parse.treesitter_parser import TreeSitterParser
from parse.treesitter_triggers import extract_runtime_triggers
from rules.config import CallChainConfig

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from models.diagnostics import Diagnostic
    from models.graph import GraphView, RoadmapFile
    from models.sources import SourceFile
    from parse.name_resolution import CalleeResolver
    from parse.syntax import ParsedSource
    from parse.treesitter_parser import SourceParser

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IndexSummary:
    """Counts describing one completed indexing pass."""

    file_count: int
    parsed_count: int
    failed_files: tuple[str, ...]
    function_count: int
    edge_count: int
    resolved_edge_count: int
    trigger_count: int


class AnalysisSession:
    """Owns the function, call-graph and trigger indices of one analysis."""

    def __init__(
        self,
        config: CallChainConfig | None = None,
        *,
        parser: SourceParser | None = None,
        resolver: CalleeResolver | None = None,
    ) -> None:
        self.config = config if config is not None else CallChainConfig()
        self.parser = (
            parser
            if parser is not None
            else TreeSitterParser(
                tolerate_syntax_errors=self.config.tolerate_syntax_errors
            )
        )
        self.resolver = resolver if resolver is not None else SameFileResolver()
        self.function_index = FunctionIndex()
        self.call_graph = CallGraphIndex()
        self.trigger_index = TriggerIndex()
        self.file_paths: list[str] = []
        self._lock = threading.Lock()

    def _parse_all(
        self, files: Sequence[SourceFile]
    ) -> tuple[list[ParsedSource], list[str]]:
        parsed: list[ParsedSource] = []
        failed: list[str] = []
        for source in files:
            try:
                result = self.parser.parse(source.path, source.text)
            except ValueError as exc:
                logger.warning("Failed to parse %s: %s", source.path, exc)
                result = None
            if result is None:
                failed.append(source.path)
            else:
                parsed.append(result)
        return parsed, failed

    def index(self, files: Sequence[SourceFile]) -> IndexSummary:
        """Rebuild every index from ``files`` and return pass counts."""
        with self._lock:
            logger.info("Indexing %d files", len(files))
            self.file_paths = [source.path for source in files]
            parsed, failed = self._parse_all(files)
            return self._index_parsed(parsed, file_count=len(files), failed=failed)

    def index_parsed(self, parsed: Sequence[ParsedSource]) -> IndexSummary:
        """Rebuild every index from trees produced outside the session's parser."""
        with self._lock:
            return self._index_parsed(parsed)

    def _index_parsed(
        self,
        parsed: Sequence[ParsedSource],
        *,
        file_count: int | None = None,
        failed: Sequence[str] = (),
    ) -> IndexSummary:
        if file_count is None:
            self.file_paths = [source.file_path for source in parsed]

        function_count = extract_function_boundaries(parsed, self.function_index)
        edge_count = resolve_calls(
            parsed, self.function_index, self.call_graph, self.resolver
        )
        trigger_count = extract_runtime_triggers(
            parsed, self.trigger_index, self.config.trigger_event_props
        )

        resolved = sum(
            1 for edge in self.call_graph.get_all() if edge.callee_id is not None
        )
        return IndexSummary(
            file_count=len(parsed) if file_count is None else file_count,
            parsed_count=len(parsed),
            failed_files=tuple(failed),
            function_count=function_count,
            edge_count=edge_count,
            resolved_edge_count=resolved,
            trigger_count=trigger_count,
        )

    def caller_chain(
        self,
        function_name: str,
        file_path: str,
        *,
        fallback: bool = False,
        max_depth: int | None = None,
    ) -> list[str]:
        depth = self.config.max_chain_depth if max_depth is None else max_depth
        if fallback:
            return reconstruct_chain_with_fallback(
                self.call_graph, self.function_index, function_name, file_path, depth
            )
        return reconstruct_chain(self.call_graph, function_name, file_path, depth)

    def diagnose(
        self, file_path: str, diagnostics: Iterable[Diagnostic]
    ) -> list[DiagnosticReport]:
        """Attribute diagnostics and attach each owner's caller chain and trigger."""
        reports: list[DiagnosticReport] = []
        for attribution in map_diagnostics(
            file_path,
            diagnostics,
            self.function_index,
            frozenset(self.config.suppressed_codes),
        ):
            if attribution.outside_function:
                reports.append(DiagnosticReport(attribution=attribution))
                continue
            trigger = self.trigger_index.find(attribution.function_name, file_path)
            reports.append(
                DiagnosticReport(
                    attribution=attribution,
                    caller_chain=self.caller_chain(
                        attribution.function_name, file_path
                    ),
                    trigger=trigger.trigger if trigger else None,
                )
            )
        return reports

    def execution_graph(
        self, file_path: str, function_names: Iterable[str]
    ) -> GraphView:
        return build_execution_graph(
            file_path,
            function_names,
            self.call_graph,
            self.function_index,
            self.trigger_index,
            self.config.max_chain_depth,
        )

    def call_graph_view(self, *, include_unresolved: bool = False) -> GraphView:
        return project_call_graph(
            self.function_index,
            self.call_graph,
            self.trigger_index,
            include_unresolved=include_unresolved,
        )

    def roadmap(self) -> list[RoadmapFile]:
        return build_roadmap(self.file_paths, self.function_index, self.call_graph)


__all__ = ["AnalysisSession", "IndexSummary"]
