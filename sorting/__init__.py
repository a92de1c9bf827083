"""Topological sort trace engine

Runs DFS-based sort or Kahn's algorithm over a parsed graph and records
every state transition as a replayable Trace.

Engines are pure functions of the graph: they read it, never mutate it,
never log, and never raise on a cycle. A cycle is the last, flagged step
of an otherwise valid trace, so the steps leading up to it can still be
replayed.

## Example usage

    from graph import parse
    from sorting import run_sort

    graph = parse("0: 1,2\\n1: 3\\n2: 3\\n3: 4\\n4:", "list")
    trace = run_sort(graph, "dfs")
    for step in trace.steps:
        print(step.index, step.message)
    print(trace.order)  # ['0', '2', '1', '3', '4']
"""

from graph import Algorithm, Graph

from .dfs import run_dfs
from .errors import (
    CycleError,
    EmptyGraphError,
    IncompleteOrderError,
    SortError,
)
from .kahn import run_bfs
from .recorder import TraceRecorder
from .state_types import SortFailure, SortOutcome, SortSuccess, Trace

ENGINES = {
    Algorithm.DFS: run_dfs,
    Algorithm.BFS: run_bfs,
}


def run_sort(graph: Graph, algorithm: Algorithm | str = Algorithm.DFS) -> Trace:
    """Guard against an empty graph, then run the selected engine.

    Raises:
        EmptyGraphError: If the graph has no nodes
        ValueError: If the algorithm name is unknown
    """
    engine = ENGINES[Algorithm(algorithm)]
    if graph.is_empty:
        raise EmptyGraphError()
    return engine(graph)


def topological_order(graph: Graph, algorithm: Algorithm | str = Algorithm.DFS) -> list[str]:
    """Return the order directly, raising CycleError/IncompleteOrderError on a cycle."""
    trace = run_sort(graph, algorithm)
    trace.raise_for_failure()
    return list(trace.order or [])


__all__ = [
    "ENGINES",
    "CycleError",
    "EmptyGraphError",
    "IncompleteOrderError",
    "SortError",
    "SortFailure",
    "SortOutcome",
    "SortSuccess",
    "Trace",
    "TraceRecorder",
    "run_bfs",
    "run_dfs",
    "run_sort",
    "topological_order",
]
