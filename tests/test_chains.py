from __future__ import annotations

from graph.chains import (
    DEFAULT_MAX_DEPTH,
    reconstruct_chain,
    reconstruct_chain_with_fallback,
)
from index.call_graph import CallGraphIndex
from index.function_index import FunctionIndex
from models.calls import CallEdge
from models.functions import FunctionEntity, build_function_id

_FILE = "src/app.js"


def _graph(*pairs: tuple[str, str]) -> CallGraphIndex:
    """Build a call graph from ``(caller, callee)`` name pairs."""
    graph = CallGraphIndex()
    for line, (caller, callee) in enumerate(pairs, start=1):
        graph.add(
            CallEdge(
                caller_id=build_function_id(_FILE, caller, 1),
                caller_name=caller,
                callee_id=build_function_id(_FILE, callee, 1),
                callee_name=callee,
                file_path=_FILE,
                line=line,
            )
        )
    return graph


def test_linear_chain_runs_from_root_caller_to_target() -> None:
    graph = _graph(("c", "b"), ("b", "a"))

    assert reconstruct_chain(graph, "a", _FILE) == ["c", "b", "a"]


def test_function_without_callers_is_its_own_chain() -> None:
    assert reconstruct_chain(_graph(), "a", _FILE) == ["a"]


def test_callers_are_looked_up_in_the_given_file_only() -> None:
    graph = _graph(("b", "a"))

    assert reconstruct_chain(graph, "a", "src/other.js") == ["a"]


def test_cycle_terminates_and_dedupes() -> None:
    graph = _graph(("a", "b"), ("b", "a"))

    chain = reconstruct_chain(graph, "a", _FILE)

    assert chain == ["b", "a"]
    assert len(chain) == len(set(chain))


def test_fan_in_concatenates_caller_chains_in_edge_order() -> None:
    graph = _graph(("b", "a"), ("c", "a"), ("d", "b"))

    assert reconstruct_chain(graph, "a", _FILE) == ["d", "b", "a", "c"]


def test_depth_limit_truncates_silently() -> None:
    graph = _graph(("d", "c"), ("c", "b"), ("b", "a"))

    assert reconstruct_chain(graph, "a", _FILE, max_depth=2) == ["b", "a"]
    assert reconstruct_chain(graph, "a", _FILE, max_depth=1) == ["a"]
    assert reconstruct_chain(graph, "a", _FILE, max_depth=0) == []


def test_chain_contains_target_without_duplicates_on_cyclic_graph() -> None:
    graph = _graph(("b", "a"), ("c", "b"), ("a", "c"), ("x", "c"))

    for target in ("a", "b", "c", "x"):
        chain = reconstruct_chain(graph, target, _FILE)
        assert chain
        assert target in chain
        assert len(chain) == len(set(chain))


def test_fallback_uses_lexical_parent_when_no_callers() -> None:
    function_index = FunctionIndex()
    function_index.add(
        FunctionEntity(
            id=build_function_id(_FILE, "App", 1),
            name="App",
            file_path=_FILE,
            start_line=1,
            end_line=10,
        )
    )
    function_index.add(
        FunctionEntity(
            id=build_function_id(_FILE, "handleClick", 3),
            name="handleClick",
            file_path=_FILE,
            start_line=3,
            end_line=5,
            parent_function_name="App",
        )
    )

    chain = reconstruct_chain_with_fallback(
        _graph(), function_index, "handleClick", _FILE
    )

    assert chain == ["App", "handleClick"]


def test_fallback_keeps_graph_chain_when_callers_exist() -> None:
    function_index = FunctionIndex()
    graph = _graph(("main", "helper"))

    chain = reconstruct_chain_with_fallback(graph, function_index, "helper", _FILE)

    assert chain == ["main", "helper"]


class _CountingGraph(CallGraphIndex):
    def __init__(self) -> None:
        super().__init__()
        self.lookups = 0

    def get_callers_of(self, callee_name: str, file_path: str) -> list[CallEdge]:
        self.lookups += 1
        return super().get_callers_of(callee_name, file_path)


def test_repeated_self_calls_expand_each_caller_once() -> None:
    graph = _CountingGraph()
    graph.extend(_graph(*[("walk", "walk")] * 20, ("main", "walk")).get_all())

    chain = reconstruct_chain(graph, "walk", _FILE)

    assert chain == ["walk", "main"]
    assert graph.lookups <= 2 * DEFAULT_MAX_DEPTH
