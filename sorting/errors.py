"""Error types raised around sorting runs

Engines never raise these while recording: a cycle ends the trace with a
flagged step instead. They exist for callers that want an exception
(Trace.raise_for_failure, topological_order) and for the empty-graph guard.
"""


class SortError(Exception):
    """Base class for sorting failures."""


class EmptyGraphError(SortError):
    """Raised by the caller guard when a parsed graph has no nodes."""

    def __init__(self, message: str = "Graph is empty. Please enter a valid graph."):
        super().__init__(message)


class CycleError(SortError):
    """DFS found a back edge. `cycle` is the closed walk, first == last."""

    def __init__(self, message: str, cycle: list[str]):
        super().__init__(message)
        self.cycle = cycle


class IncompleteOrderError(SortError):
    """Kahn's queue drained before every node was emitted."""

    def __init__(self, message: str, partial_order: list[str]):
        super().__init__(message)
        self.partial_order = partial_order
