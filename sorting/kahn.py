"""Kahn's algorithm (BFS topological sort) with in-degree elimination"""

from collections import deque

from graph import Algorithm, FailureKind, Graph, NodeState

from .recorder import TraceRecorder
from .state_types import Trace


def run_bfs(graph: Graph) -> Trace:
    """Run Kahn's algorithm over `graph` and return the full trace.

    The queue is strict FIFO, seeded in key order; successors are relaxed in
    adjacency order. If the queue drains before every node is emitted the
    graph has a cycle, reported as an error step carrying the partial order.
    Kahn's algorithm cannot tell which nodes form the cycle, so `cycle` is
    never set. The graph is only read.
    """
    recorder = TraceRecorder(graph, Algorithm.BFS)
    in_degree = graph.in_degrees()
    queue: deque[str] = deque()
    order: list[str] = []

    def snapshot() -> dict:
        return {"queue": list(queue), "in_degree": dict(in_degree), "order": list(order)}

    recorder.record("Starting BFS (Kahn's) - Calculated in-degrees", **snapshot())

    for node in graph.nodes:
        if in_degree[node] == 0:
            queue.append(node)
            recorder.set_state(node, NodeState.QUEUED)
    recorder.record(f"Added nodes with 0 in-degree: [{', '.join(queue)}]", **snapshot())

    while queue:
        node = queue.popleft()
        recorder.set_state(node, NodeState.VISITING)
        recorder.record(f"Processing {node} from queue", active_node=node, **snapshot())

        order.append(node)
        recorder.set_state(node, NodeState.PROCESSED)

        for neighbor in graph.successors(node):
            in_degree[neighbor] -= 1
            recorder.record(
                f"Decremented in-degree of {neighbor} to {in_degree[neighbor]}",
                active_edge=(node, neighbor),
                **snapshot(),
            )
            if in_degree[neighbor] == 0:
                queue.append(neighbor)
                recorder.set_state(neighbor, NodeState.QUEUED)
                recorder.record(f"Added {neighbor} to queue", active_node=neighbor, **snapshot())

    if len(order) < len(graph):
        return recorder.fail(
            "Error: Cycle detected! Not all nodes were visited.",
            failure=FailureKind.INCOMPLETE_ORDER,
            partial_order=order,
            result=list(order),
            **snapshot(),
        )
    return recorder.succeed("Completed! All nodes processed.", order, **snapshot())
