"""DFS-based topological sort with back-edge cycle detection

Classic post-order algorithm: a node is pushed onto the output stack once
all of its successors are finished, and the reversed stack is the order.

The descent is iterative: each frame holds a node and a cursor into its
successor list, so graph depth is not bounded by Python's recursion limit.
The trace is identical to the recursive formulation.
"""

from dataclasses import dataclass

from graph import Algorithm, FailureKind, Graph, NodeState

from .recorder import TraceRecorder
from .state_types import Trace


@dataclass
class _Frame:
    node: str
    cursor: int = 0


def run_dfs(graph: Graph) -> Trace:
    """Run DFS topological sort over `graph` and return the full trace.

    Roots are tried in key order and successors in adjacency order, which
    fully determines the trace. The graph is only read.

    A back edge ends the run with an error step whose `cycle` is the suffix
    of the current path starting at the repeated node, closed by that node.
    """
    recorder = TraceRecorder(graph, Algorithm.DFS)
    output_stack: list[str] = []

    recorder.record("Starting DFS-based Topological Sort", stack=[])

    for root in graph.nodes:
        if recorder.state_of(root) != NodeState.UNVISITED:
            continue
        cycle = _descend(graph, root, recorder, output_stack)
        if cycle is not None:
            return recorder.fail(
                f"Cycle detected: {' → '.join(cycle)}",
                failure=FailureKind.CYCLE,
                partial_order=list(reversed(output_stack)),
                cycle=cycle,
                stack=list(output_stack),
            )

    order = list(reversed(output_stack))
    return recorder.succeed("Reversing stack to get topological order", order, stack=[])


def _descend(
    graph: Graph,
    root: str,
    recorder: TraceRecorder,
    output_stack: list[str],
) -> list[str] | None:
    """Depth-first traversal from `root`. Returns a cycle path or None."""
    frames: list[_Frame] = []
    path: list[str] = []
    on_path: set[str] = set()

    def enter(node: str) -> None:
        frames.append(_Frame(node))
        path.append(node)
        on_path.add(node)
        recorder.set_state(node, NodeState.VISITING)
        recorder.record(
            f"Visiting node {node}",
            stack=list(output_stack),
            active_node=node,
        )

    enter(root)
    while frames:
        frame = frames[-1]
        successors = graph.successors(frame.node)

        if frame.cursor < len(successors):
            neighbor = successors[frame.cursor]
            frame.cursor += 1
            recorder.record(
                f"Exploring edge {frame.node} → {neighbor}",
                stack=list(output_stack),
                active_edge=(frame.node, neighbor),
            )
            if neighbor in on_path:
                return path[path.index(neighbor):] + [neighbor]
            if recorder.state_of(neighbor) == NodeState.UNVISITED:
                enter(neighbor)
            continue

        frames.pop()
        path.pop()
        on_path.discard(frame.node)
        recorder.set_state(frame.node, NodeState.PROCESSED)
        output_stack.append(frame.node)
        recorder.record(
            f"Finished processing node {frame.node}, adding to stack",
            stack=list(output_stack),
            active_node=frame.node,
        )

    return None
