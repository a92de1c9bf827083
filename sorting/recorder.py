"""Append-only step recording shared by the sorting engines"""

from typing import Any

from graph import Algorithm, FailureKind, Graph, NodeState, TraceStep

from .state_types import SortFailure, SortSuccess, Trace

# Position of each state along a run; a node may only move forward
STATE_RANK: dict[NodeState, int] = {
    NodeState.UNVISITED: 0,
    NodeState.QUEUED: 1,
    NodeState.VISITING: 2,
    NodeState.PROCESSED: 3,
}


class TraceRecorder:
    """Owns the node-state map and the growing step list of one run.

    Every recorded step carries a full copy of the current node states, so
    steps stay valid snapshots after later transitions.
    """

    def __init__(self, graph: Graph, algorithm: Algorithm) -> None:
        self.algorithm = algorithm
        self.states: dict[str, NodeState] = {node: NodeState.UNVISITED for node in graph.nodes}
        self._steps: list[TraceStep] = []
        self._closed = False

    @property
    def steps(self) -> list[TraceStep]:
        return list(self._steps)

    def state_of(self, node: str) -> NodeState:
        return self.states[node]

    def set_state(self, node: str, state: NodeState) -> None:
        current = self.states[node]
        if STATE_RANK[state] < STATE_RANK[current]:
            raise RuntimeError(f"Node {node} cannot move from {current.value} back to {state.value}")
        self.states[node] = state

    def record(self, message: str, **fields: Any) -> TraceStep:
        """Append a step snapshotting the current states plus `fields`."""
        if self._closed:
            raise RuntimeError("Trace already has a final step")
        step = TraceStep(
            index=len(self._steps),
            message=message,
            states=dict(self.states),
            **fields,
        )
        self._steps.append(step)
        if step.final:
            self._closed = True
        return step

    def succeed(self, message: str, result: list[str], **fields: Any) -> Trace:
        """Record the terminal success step and build the trace.

        `fields` may carry the engine's own `order` snapshot; the outcome
        order is always `result`.
        """
        self.record(message, result=list(result), final=True, **fields)
        return Trace(
            algorithm=self.algorithm,
            steps=self.steps,
            outcome=SortSuccess(order=list(result)),
        )

    def fail(
        self,
        message: str,
        failure: FailureKind,
        partial_order: list[str],
        cycle: list[str] | None = None,
        **fields: Any,
    ) -> Trace:
        """Record the terminal error step and build the trace."""
        self.record(
            message,
            final=True,
            error=True,
            failure=failure,
            cycle=list(cycle) if cycle is not None else None,
            **fields,
        )
        return Trace(
            algorithm=self.algorithm,
            steps=self.steps,
            outcome=SortFailure(
                failure=failure,
                message=message,
                partial_order=list(partial_order),
                cycle=list(cycle) if cycle is not None else None,
            ),
        )
