"""Graph types for the topological sort visualizer

These types are the single source of truth for graphs and trace steps,
used across the trace engine, REST responses, and AG-UI streaming.

Key feature: ConfigDict(use_enum_values=True) ensures enums serialize
as strings (e.g., "visiting") rather than enum objects, matching frontend expectations.

Graphs and steps are read-only all the way down: mappings are held as
`MappingProxyType` views and sequences as tuples. Both still dump to plain
dicts and JSON arrays.
"""

from types import MappingProxyType
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, PlainSerializer, model_validator

from .enums import FailureKind, NodeState


def _as_dict(value: MappingProxyType) -> dict:
    return dict(value)


Adjacency = Annotated[
    dict[str, tuple[str, ...]],
    AfterValidator(MappingProxyType),
    PlainSerializer(_as_dict, return_type=dict[str, tuple[str, ...]]),
]
StateMap = Annotated[
    dict[str, NodeState],
    AfterValidator(MappingProxyType),
    PlainSerializer(_as_dict, return_type=dict[str, str]),
]
DegreeMap = Annotated[
    dict[str, int],
    AfterValidator(MappingProxyType),
    PlainSerializer(_as_dict, return_type=dict[str, int]),
]


class Graph(BaseModel):
    """Directed graph as an ordered adjacency list.

    Key order is the parse order and successor order is the order in which
    neighbours were written. Both drive the engines' tie-breaking, so they
    are preserved exactly. Parallel edges are kept.
    """

    model_config = ConfigDict(frozen=True, validate_default=True)

    adjacency: Adjacency = {}

    @model_validator(mode="after")
    def _check_invariants(self) -> "Graph":
        for node, successors in self.adjacency.items():
            for target in successors:
                if target == node:
                    raise ValueError(f"Self-loop on node '{node}'")
                if target not in self.adjacency:
                    raise ValueError(f"Edge {node} -> {target} targets an undeclared node")
        return self

    @property
    def nodes(self) -> list[str]:
        return list(self.adjacency)

    @property
    def is_empty(self) -> bool:
        return not self.adjacency

    @property
    def edge_count(self) -> int:
        return sum(len(successors) for successors in self.adjacency.values())

    def successors(self, node: str) -> tuple[str, ...]:
        return self.adjacency[node]

    def edges(self) -> list[tuple[str, str]]:
        """All edges in key order then adjacency order, one entry per parallel edge."""
        return [(node, target) for node, successors in self.adjacency.items() for target in successors]

    def in_degrees(self) -> dict[str, int]:
        """Count incoming edges per node. Parallel edges count once each."""
        degrees = {node: 0 for node in self.adjacency}
        for _, target in self.edges():
            degrees[target] += 1
        return degrees

    def to_text(self) -> str:
        """Render as adjacency-list text.

        Parses back to an identical graph unless an identifier contains `:` or
        `,`, which only matrix headers can produce.
        """
        return "\n".join(
            f"{node}: {','.join(successors)}" for node, successors in self.adjacency.items()
        )

    def __len__(self) -> int:
        return len(self.adjacency)

    def __contains__(self, node: object) -> bool:
        return node in self.adjacency


class GraphNode(BaseModel):
    """A node as handed to a renderer, with its canvas position."""

    id: str
    label: str
    x: float
    y: float
    out_degree: int
    in_degree: int


class GraphEdge(BaseModel):
    """A directed edge as handed to a renderer."""

    source: str
    target: str


class TraceStep(BaseModel):
    """Immutable snapshot of one state transition of a sorting run.

    Used for:
    - Trace replay by index (PlaybackSession)
    - REST API responses (TraceResponse)
    - AG-UI streaming CUSTOM events

    A renderer must draw exactly what a step carries and never recompute
    extra state (e.g. cycle edges for Kahn's algorithm, which never sets `cycle`).
    """

    model_config = ConfigDict(use_enum_values=True, frozen=True)

    index: int
    message: str
    states: StateMap

    # DFS auxiliary state: the post-order output stack
    stack: tuple[str, ...] | None = None

    # Kahn auxiliary state
    queue: tuple[str, ...] | None = None
    in_degree: DegreeMap | None = None
    order: tuple[str, ...] | None = None  # partial output so far

    active_node: str | None = None
    active_edge: tuple[str, str] | None = None

    # Terminal fields
    result: tuple[str, ...] | None = None
    cycle: tuple[str, ...] | None = None  # closed walk, first == last
    final: bool = False
    error: bool = False
    failure: FailureKind | None = None
