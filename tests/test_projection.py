from __future__ import annotations

import sys

from graph.algos import build_id_graph, find_cycles
from graph.projection import (
    build_execution_graph,
    build_roadmap,
    mermaid_id,
    project_call_graph,
    project_chain,
    render_mermaid,
)
from index.call_graph import CallGraphIndex
from index.function_index import FunctionIndex
from index.trigger_index import TriggerIndex
from models.calls import CallEdge
from models.functions import FunctionEntity, build_function_id
from models.graph import GraphEdge, GraphNode, GraphView
from models.triggers import TriggerEntry

_FILE = "src/App.jsx"


def _indices() -> tuple[FunctionIndex, CallGraphIndex, TriggerIndex]:
    function_index = FunctionIndex()
    for name, start, end, parent in (
        ("App", 1, 20, None),
        ("handleClick", 3, 6, "App"),
        ("save", 8, 10, "App"),
    ):
        function_index.add(
            FunctionEntity(
                id=build_function_id(_FILE, name, start),
                name=name,
                file_path=_FILE,
                start_line=start,
                end_line=end,
                parent_function_name=parent,
            )
        )

    call_graph = CallGraphIndex()
    for line, callee, callee_id in (
        (4, "save", build_function_id(_FILE, "save", 8)),
        (5, "save", build_function_id(_FILE, "save", 8)),
        (5, "track", None),
    ):
        call_graph.add(
            CallEdge(
                caller_id=build_function_id(_FILE, "handleClick", 3),
                caller_name="handleClick",
                callee_id=callee_id,
                callee_name=callee,
                file_path=_FILE,
                line=line,
            )
        )

    trigger_index = TriggerIndex()
    trigger_index.add(
        TriggerEntry(
            function_name="handleClick",
            file_path=_FILE,
            trigger="User interaction (onClick)",
        )
    )
    return function_index, call_graph, trigger_index


def test_project_chain_has_node_per_name_and_edge_per_pair() -> None:
    view = project_chain(["c", "b", "a"])

    assert [node.id for node in view.nodes] == ["c", "b", "a"]
    assert [(edge.source, edge.target) for edge in view.edges] == [
        ("c", "b"),
        ("b", "a"),
    ]


def test_project_call_graph_dedupes_repeated_calls() -> None:
    function_index, call_graph, trigger_index = _indices()

    view = project_call_graph(function_index, call_graph, trigger_index)

    assert len(view.nodes) == 3
    assert [(edge.source, edge.target) for edge in view.edges] == [
        ("src/App.jsx:handleClick:3", "src/App.jsx:save:8"),
    ]
    handler = next(node for node in view.nodes if node.label == "handleClick")
    assert handler.trigger == "User interaction (onClick)"


def test_project_call_graph_can_include_unresolved_callees() -> None:
    function_index, call_graph, _ = _indices()

    view = project_call_graph(function_index, call_graph, include_unresolved=True)

    assert "unresolved:track" in [node.id for node in view.nodes]
    assert ("src/App.jsx:handleClick:3", "unresolved:track") in [
        (edge.source, edge.target) for edge in view.edges
    ]


def test_execution_graph_labels_triggered_functions() -> None:
    function_index, call_graph, trigger_index = _indices()

    view = build_execution_graph(
        _FILE, ["save"], call_graph, function_index, trigger_index
    )

    assert [node.label for node in view.nodes] == [
        "handleClick (User interaction (onClick))",
        "save",
    ]
    assert [(edge.source, edge.target) for edge in view.edges] == [
        ("handleClick", "save"),
    ]


def test_execution_graph_merges_chains_of_several_functions() -> None:
    function_index, call_graph, trigger_index = _indices()

    view = build_execution_graph(
        _FILE, ["save", "handleClick"], call_graph, function_index, trigger_index
    )

    assert [node.id for node in view.nodes] == ["handleClick", "save", "App"]
    assert [(edge.source, edge.target) for edge in view.edges] == [
        ("handleClick", "save"),
        ("App", "handleClick"),
    ]


def test_roadmap_lists_functions_and_their_calls_per_file() -> None:
    function_index, call_graph, _ = _indices()

    [entry] = build_roadmap([_FILE], function_index, call_graph)

    assert entry.name == "App.jsx"
    assert [fn.name for fn in entry.functions] == ["App", "handleClick", "save"]
    assert entry.functions[1].calls == ["save", "save", "track"]
    assert entry.functions[0].calls == []


def test_render_mermaid_sanitises_ids_and_escapes_labels() -> None:
    view = GraphView(
        nodes=[
            GraphNode(id="src/a.js:main:1", label='main "entry"'),
            GraphNode(id="src/a.js:run:5", label="run"),
        ],
        edges=[GraphEdge(source="src/a.js:main:1", target="src/a.js:run:5")],
    )

    assert render_mermaid(view) == (
        "graph TD\n"
        '  src_a_js_main_1["main #quot;entry#quot;"]\n'
        '  src_a_js_run_5["run"]\n'
        "  src_a_js_main_1 --> src_a_js_run_5\n"
    )
    assert mermaid_id("a-b.c") == "a_b_c"


def test_find_cycles_reports_recursion_over_resolved_edges() -> None:
    def edge(caller: str, callee: str | None) -> CallEdge:
        return CallEdge(
            caller_id=caller,
            caller_name=caller,
            callee_id=callee,
            callee_name=callee or "unknown",
            file_path="a.js",
            line=1,
        )

    graph = build_id_graph(
        [
            edge("a", "b"),
            edge("b", "a"),
            edge("c", "c"),
            edge("d", "a"),
            edge("d", None),
        ]
    )

    assert find_cycles(graph) == [["a", "b"], ["c"]]


def test_find_cycles_survives_chains_deeper_than_recursion_limit() -> None:
    depth = sys.getrecursionlimit() * 2
    graph = {f"f{i:05d}": {f"f{i + 1:05d}"} for i in range(depth)}
    graph[f"f{depth:05d}"] = {"f00000"}

    cycles = find_cycles(graph)

    assert len(cycles) == 1
    assert len(cycles[0]) == depth + 1
