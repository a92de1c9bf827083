"""Graph package for the topological sort visualizer

This package provides:
- Graph types (Graph, GraphNode, GraphEdge, TraceStep) for graphs and trace snapshots
- Enums (NodeState, InputMode, Algorithm, FailureKind) for categorization
- Parsing of adjacency-list and adjacency-matrix text
- Circular layout and random DAG generation for renderers

This package is shared between the trace engine and the server.
"""

from .enums import Algorithm, FailureKind, InputMode, NodeState
from .generator import random_dag, random_dag_adjacency
from .layout import build_render_graph, circular_layout
from .parser import (
    SAMPLE_INPUTS,
    FormatError,
    parse,
    parse_adjacency_list,
    parse_adjacency_matrix,
)
from .types import Graph, GraphEdge, GraphNode, TraceStep

__all__ = [
    # Enums
    "Algorithm",
    "FailureKind",
    "InputMode",
    "NodeState",
    # Graph types
    "Graph",
    "GraphNode",
    "GraphEdge",
    "TraceStep",
    # Parsing
    "SAMPLE_INPUTS",
    "FormatError",
    "parse",
    "parse_adjacency_list",
    "parse_adjacency_matrix",
    # Rendering helpers
    "build_render_graph",
    "circular_layout",
    "random_dag",
    "random_dag_adjacency",
]
