"""Random DAG generation for quick experiments"""

import random


def random_dag_adjacency(
    num_nodes: int = 8,
    num_edges: int = 10,
    seed: int | None = None,
) -> dict[str, list[str]]:
    """Draw a random acyclic graph over nodes "0".."num_nodes-1".

    Only pairs u < v become edges, so the result is always acyclic.
    Gives up after 5 * num_edges draws, so sparse results are possible.
    """
    if num_nodes <= 0:
        return {}

    rng = random.Random(seed)
    adjacency: dict[str, list[str]] = {str(node): [] for node in range(num_nodes)}
    edges: set[tuple[int, int]] = set()

    max_edges = num_nodes * (num_nodes - 1) // 2
    attempts = 0
    while len(edges) < num_edges and len(edges) < max_edges and attempts < num_edges * 5:
        attempts += 1
        u = rng.randrange(num_nodes)
        v = rng.randrange(num_nodes)
        if u >= v or (u, v) in edges:
            continue
        edges.add((u, v))
        adjacency[str(u)].append(str(v))

    return adjacency


def random_dag(num_nodes: int = 8, num_edges: int = 10, seed: int | None = None) -> str:
    """Random DAG rendered as adjacency-list text, ready for graph.parser.parse."""
    adjacency = random_dag_adjacency(num_nodes, num_edges, seed)
    return "\n".join(f"{node}: {','.join(neighbors)}" for node, neighbors in adjacency.items())
