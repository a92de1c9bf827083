"""Cross-engine property tests

For both engines over seeded random graphs:
- Every edge points forward in the result of an acyclic graph
- The result holds every node exactly once
- Node states never move backwards within a trace
- Any graph with a cycle ends in an error-flagged final step
Also covers the caller guard (run_sort) and exception conversion.
"""

import pytest

from graph import Graph, NodeState, parse, random_dag, random_dag_adjacency
from sorting import (
    CycleError,
    EmptyGraphError,
    IncompleteOrderError,
    Trace,
    TraceRecorder,
    run_bfs,
    run_dfs,
    run_sort,
    topological_order,
)
from sorting.recorder import STATE_RANK

ENGINES = [run_dfs, run_bfs]
SEEDS = range(25)


def assert_monotonic(trace: Trace) -> None:
    last: dict[str, int] = {}
    for step in trace.steps:
        for node, state in step.states.items():
            rank = STATE_RANK[NodeState(state)]
            assert rank >= last.get(node, 0), f"{node} regressed at step {step.index}"
            last[node] = rank


def cyclic_graph(seed: int) -> Graph:
    """A random DAG plus one edge closing a cycle."""
    adjacency = random_dag_adjacency(8, 12, seed=seed)
    adjacency["7"].append("0")
    adjacency["0"].append("7")
    return Graph(adjacency={node: tuple(targets) for node, targets in adjacency.items()})


class TestAcyclicProperties:
    """Order validity, completeness and monotonicity on random DAGs."""

    @pytest.mark.parametrize("engine", ENGINES)
    @pytest.mark.parametrize("seed", SEEDS)
    def test_edges_point_forward(self, engine, seed):
        graph = parse(random_dag(8, 12, seed=seed))
        trace = engine(graph)
        assert trace.succeeded
        position = {node: i for i, node in enumerate(trace.order)}
        for source, target in graph.edges():
            assert position[source] < position[target]

    @pytest.mark.parametrize("engine", ENGINES)
    @pytest.mark.parametrize("seed", SEEDS)
    def test_result_is_permutation_of_nodes(self, engine, seed):
        graph = parse(random_dag(8, 12, seed=seed))
        result = engine(graph).final_step.result
        assert sorted(result) == sorted(graph.nodes)
        assert len(result) == len(set(result))

    @pytest.mark.parametrize("engine", ENGINES)
    @pytest.mark.parametrize("seed", SEEDS)
    def test_states_never_regress(self, engine, seed):
        assert_monotonic(engine(parse(random_dag(8, 12, seed=seed))))

    @pytest.mark.parametrize("engine", ENGINES)
    def test_same_graph_same_trace(self, engine):
        graph = parse(random_dag(8, 12, seed=99))
        assert engine(graph) == engine(graph)


class TestCyclicProperties:
    """Both engines flag every cyclic graph."""

    @pytest.mark.parametrize("engine", ENGINES)
    @pytest.mark.parametrize("seed", SEEDS)
    def test_error_final_step(self, engine, seed):
        trace = engine(cyclic_graph(seed))
        assert not trace.succeeded
        assert trace.final_step.final
        assert trace.final_step.error
        assert_monotonic(trace)

    @pytest.mark.parametrize("seed", SEEDS)
    def test_dfs_cycle_is_closed_walk(self, seed):
        graph = cyclic_graph(seed)
        cycle = run_dfs(graph).final_step.cycle
        assert cycle[0] == cycle[-1]
        assert len(cycle) >= 3
        for source, target in zip(cycle, cycle[1:]):
            assert target in graph.successors(source)
        # Minimal: no node repeats before the closing one
        assert len(set(cycle[:-1])) == len(cycle) - 1


class TestExampleScenarios:
    """The reference scenarios for both engines."""

    def test_diamond_chain(self):
        graph = parse("0: 1,2\n1: 3\n2: 3\n3: 4\n4:", "list")
        for engine in ENGINES:
            order = engine(graph).order
            assert order.index("0") < order.index("1") < order.index("3") < order.index("4")
            assert order.index("0") < order.index("2") < order.index("3")
        assert run_dfs(graph).order == ["0", "2", "1", "3", "4"]

    def test_two_cycle(self):
        graph = parse("0: 1\n1: 0", "list")
        assert run_dfs(graph).final_step.cycle == ("0", "1", "0")
        assert run_bfs(graph).final_step.result == ()

    def test_matrix_chain(self):
        graph = parse("0 1 2\n0 0 1 0\n1 0 0 1\n2 0 0 0", "matrix")
        assert graph.adjacency == {"0": ("1",), "1": ("2",), "2": ()}
        assert run_dfs(graph).order == ["0", "1", "2"]
        assert run_bfs(graph).order == ["0", "1", "2"]


class TestRunSort:
    """Test the caller guard and exception conversion."""

    def test_empty_graph_rejected(self):
        with pytest.raises(EmptyGraphError, match="Graph is empty"):
            run_sort(parse("   ", "list"), "dfs")

    def test_dispatch(self):
        graph = parse("a: b\nb:")
        assert run_sort(graph, "dfs").algorithm == "dfs"
        assert run_sort(graph, "bfs").algorithm == "bfs"

    def test_unknown_algorithm(self):
        with pytest.raises(ValueError):
            run_sort(parse("a:"), "astar")

    def test_topological_order(self):
        assert topological_order(parse("b: a\na:"), "bfs") == ["b", "a"]

    def test_cycle_error(self):
        with pytest.raises(CycleError) as excinfo:
            topological_order(parse("0: 1\n1: 0"), "dfs")
        assert excinfo.value.cycle == ["0", "1", "0"]

    def test_incomplete_order_error(self):
        with pytest.raises(IncompleteOrderError) as excinfo:
            topological_order(parse("s: a\na: b\nb: a"), "bfs")
        assert excinfo.value.partial_order == ["s"]


class TestTraceRecorder:
    """Test the recorder's own guarantees."""

    def test_regression_rejected(self):
        recorder = TraceRecorder(parse("a:"), "dfs")
        recorder.set_state("a", NodeState.PROCESSED)
        with pytest.raises(RuntimeError):
            recorder.set_state("a", NodeState.VISITING)

    def test_snapshots_are_copies(self):
        recorder = TraceRecorder(parse("a:"), "dfs")
        first = recorder.record("before")
        recorder.set_state("a", NodeState.VISITING)
        assert first.states["a"] == NodeState.UNVISITED

    def test_nothing_after_final(self):
        recorder = TraceRecorder(parse("a:"), "dfs")
        recorder.succeed("done", ["a"])
        with pytest.raises(RuntimeError):
            recorder.record("late")

    def test_succeed_accepts_order_field(self):
        recorder = TraceRecorder(parse("a:"), "bfs")
        recorder.set_state("a", NodeState.PROCESSED)
        trace = recorder.succeed("done", ["a"], order=["a"], queue=[])
        assert trace.order == ["a"]
        assert trace.final_step.order == ("a",)


class TestReadOnlyTraces:
    """Steps and outcomes cannot be changed in place."""

    @pytest.mark.parametrize("engine", ENGINES)
    def test_step_containers_are_read_only(self, engine):
        step = engine(parse("a: b\nb:")).final_step
        with pytest.raises(TypeError):
            step.states["a"] = NodeState.UNVISITED
        with pytest.raises(AttributeError):
            step.result.append("c")

    def test_kahn_step_containers_are_read_only(self):
        step = run_bfs(parse("a: b\nb:")).steps[1]
        with pytest.raises(TypeError):
            step.in_degree["b"] = 5
        with pytest.raises(AttributeError):
            step.queue.append("b")

    def test_trace_steps_and_outcome_are_read_only(self):
        trace = run_dfs(parse("0: 1\n1: 0"))
        with pytest.raises(AttributeError):
            trace.steps.append(trace.final_step)
        with pytest.raises(AttributeError):
            trace.outcome.cycle.append("2")

    def test_order_is_a_fresh_list(self):
        trace = run_bfs(parse("a: b\nb:"))
        trace.order.append("z")
        assert trace.order == ["a", "b"]

    def test_steps_still_dump_to_plain_json(self):
        step = run_bfs(parse("a: b\nb:")).steps[1]
        data = step.model_dump(mode="json")
        assert data["states"] == {"a": "queued", "b": "unvisited"}
        assert data["queue"] == ["a"]
        assert data["in_degree"] == {"a": 0, "b": 1}
