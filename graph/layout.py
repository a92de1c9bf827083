"""Circular node layout for canvas renderers"""

import math

from .types import Graph, GraphEdge, GraphNode


def circular_layout(
    nodes: list[str],
    width: float,
    height: float,
    node_radius: float,
) -> dict[str, tuple[float, float]]:
    """Place nodes evenly on a circle, sorted by id, first node at 12 o'clock.

    The circle leaves three node radii of margin inside the canvas.
    """
    if not nodes:
        return {}

    center_x = width / 2
    center_y = height / 2
    radius = min(width, height) / 2 - node_radius * 3
    ordered = sorted(nodes)

    positions: dict[str, tuple[float, float]] = {}
    for idx, node in enumerate(ordered):
        angle = (idx / len(ordered)) * 2 * math.pi - (math.pi / 2)
        positions[node] = (
            center_x + radius * math.cos(angle),
            center_y + radius * math.sin(angle),
        )
    return positions


def build_render_graph(
    graph: Graph,
    width: float,
    height: float,
    node_radius: float,
) -> tuple[list[GraphNode], list[GraphEdge]]:
    """Convert a parsed graph into positioned nodes and edges for drawing."""
    positions = circular_layout(graph.nodes, width, height, node_radius)
    in_degrees = graph.in_degrees()

    nodes = [
        GraphNode(
            id=node,
            label=node,
            x=positions[node][0],
            y=positions[node][1],
            out_degree=len(graph.successors(node)),
            in_degree=in_degrees[node],
        )
        for node in graph.nodes
    ]
    edges = [GraphEdge(source=source, target=target) for source, target in graph.edges()]
    return nodes, edges
