"""REST API request/response payload types

These types define the contract for the REST API endpoints:
- /api/samples: Default input text per mode
- /api/graph: Parse graph text for drawing
- /api/graph/random: Generate a random DAG
- /api/sort: Run an algorithm and return the whole trace
- /api/sort/stream: Streaming trace (AG-UI events, see server.events)
- /api/session: Playback session with a server-held cursor
"""

from pydantic import BaseModel, ConfigDict, Field

from graph import Algorithm, GraphEdge, GraphNode, InputMode, TraceStep
from sorting import SortOutcome


class GraphRequest(BaseModel):
    """Request body carrying raw graph text."""

    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    text: str
    mode: InputMode = InputMode.LIST


class GraphStats(BaseModel):
    """Statistics about a parsed graph."""

    node_count: int
    edge_count: int


class GraphResponse(BaseModel):
    """Response for /api/graph: positioned nodes and edges for the canvas."""

    nodes: list[GraphNode]
    edges: list[GraphEdge]
    stats: GraphStats


class RandomGraphRequest(BaseModel):
    """Request body for /api/graph/random. Unset counts use configured defaults."""

    num_nodes: int | None = Field(default=None, ge=0, le=200)
    num_edges: int | None = Field(default=None, ge=0)
    seed: int | None = None


class RandomGraphResponse(BaseModel):
    """Random DAG as adjacency-list text."""

    text: str
    mode: str = InputMode.LIST.value


class SortRequest(BaseModel):
    """Request body for running a sort.

    Used by /api/sort, /api/sort/stream and /api/session.
    """

    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    text: str
    mode: InputMode = InputMode.LIST
    algorithm: Algorithm = Algorithm.DFS
    interval: float | None = Field(default=None, ge=0)  # Stream only: seconds between steps
    speed: int | None = None  # Stream only: slider position, overrides interval


class TraceResponse(BaseModel):
    """Response for /api/sort: the graph plus its full trace."""

    model_config = ConfigDict(use_enum_values=True)

    algorithm: Algorithm
    graph: GraphResponse
    steps: list[TraceStep]
    outcome: SortOutcome


class SessionResponse(BaseModel):
    """Current position of the playback session."""

    model_config = ConfigDict(use_enum_values=True)

    session_id: str
    algorithm: Algorithm
    cursor: int
    total_steps: int
    step: TraceStep
    finished: bool
    summary: str | None = None
