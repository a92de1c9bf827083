"""Graph enums for the topological sort visualizer

Provides enums used for node states, input formats, and algorithm selection.
These are shared between the trace engine and the server.
"""

from enum import Enum


class NodeState(str, Enum):
    """State of a node at one instant of a sorting run.

    DFS moves unvisited -> visiting -> processed.
    Kahn's algorithm moves unvisited -> queued -> visiting -> processed.
    """

    UNVISITED = "unvisited"
    QUEUED = "queued"
    VISITING = "visiting"
    PROCESSED = "processed"


class InputMode(str, Enum):
    """Text format of a raw graph description."""

    LIST = "list"
    MATRIX = "matrix"


class Algorithm(str, Enum):
    """Topological sorting algorithm to animate."""

    DFS = "dfs"
    BFS = "bfs"


class FailureKind(str, Enum):
    """Why a sorting run could not produce a full order."""

    CYCLE = "cycle"  # DFS found a back edge
    INCOMPLETE_ORDER = "incomplete_order"  # Kahn's queue drained early
