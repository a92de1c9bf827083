"""FastAPI server for the topological sort visualizer

Includes:
- REST API for parsing graphs and generating random DAGs
- REST API returning a whole trace for client-side playback
- AG-UI streaming endpoint replaying a trace over SSE, optionally timed
- A single server-held playback session (start, next, reset, clear)
"""

import asyncio
import uuid
from typing import AsyncGenerator

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import StreamingResponse

from graph import (
    SAMPLE_INPUTS,
    FormatError,
    Graph,
    InputMode,
    TraceStep,
    build_render_graph,
    parse,
    random_dag,
)
from sorting import EmptyGraphError, Trace, run_sort

from . import config as visualizer_config
from .events import (
    encode_event,
    graph_snapshot,
    run_error,
    run_finished,
    run_started,
    step_events,
)
from .payloads import (
    GraphRequest,
    GraphResponse,
    GraphStats,
    RandomGraphRequest,
    RandomGraphResponse,
    SessionResponse,
    SortRequest,
    TraceResponse,
)
from .session import AutoPlayer, LogEntry, PlaybackSession

# --- FastAPI App ---

app = FastAPI(
    title="Topological Sort Visualizer",
    description="Step-by-step traces of DFS and Kahn's topological sorting",
    version="0.1.0",
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# The one playback session; replaced on every start, dropped on clear
app.state.session = None


def parse_graph(text: str, mode: InputMode | str) -> Graph:
    """Parse request text, mapping bad input to HTTP 400."""
    try:
        return parse(text, mode)
    except FormatError as e:
        print(f"[SERVER] Rejected {mode} input: {e}")
        raise HTTPException(status_code=400, detail=str(e)) from e


def run_trace(graph: Graph, algorithm: str) -> Trace:
    """Run the sort, mapping the empty-graph guard to HTTP 400."""
    try:
        trace = run_sort(graph, algorithm)
    except EmptyGraphError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    status = "ok" if trace.succeeded else f"failed ({trace.outcome.failure})"
    print(f"[SERVER] {algorithm} run on {len(graph)} nodes: {len(trace.steps)} steps, {status}")
    return trace


def render_graph(graph: Graph) -> GraphResponse:
    cfg = visualizer_config.CONFIG
    nodes, edges = build_render_graph(graph, cfg.canvas_width, cfg.canvas_height, cfg.node_radius)
    return GraphResponse(
        nodes=nodes,
        edges=edges,
        stats=GraphStats(node_count=len(graph), edge_count=graph.edge_count),
    )


def stream_interval(request: SortRequest) -> float:
    """Seconds between streamed steps; 0 streams the whole trace at once."""
    cfg = visualizer_config.CONFIG
    if request.speed is not None:
        return cfg.interval_from_slider(request.speed)
    if request.interval:
        return cfg.clamp_interval(request.interval)
    return 0.0


@app.get("/api/samples")
async def get_samples() -> dict[str, str]:
    """Default input text for each input mode."""
    return dict(SAMPLE_INPUTS)


@app.post("/api/graph", response_model=GraphResponse)
async def get_graph(request: GraphRequest) -> GraphResponse:
    """Parse graph text and return positioned nodes and edges."""
    graph = parse_graph(request.text, request.mode)
    if graph.is_empty:
        raise HTTPException(status_code=400, detail=str(EmptyGraphError()))
    return render_graph(graph)


@app.post("/api/graph/random", response_model=RandomGraphResponse)
async def get_random_graph(request: RandomGraphRequest) -> RandomGraphResponse:
    """Generate a random DAG as adjacency-list text."""
    cfg = visualizer_config.CONFIG
    num_nodes = cfg.random_nodes if request.num_nodes is None else request.num_nodes
    num_edges = cfg.random_edges if request.num_edges is None else request.num_edges
    text = random_dag(num_nodes, num_edges, seed=request.seed)
    return RandomGraphResponse(text=text)


@app.post("/api/sort", response_model=TraceResponse)
async def sort_graph(request: SortRequest) -> TraceResponse:
    """Run the selected algorithm and return the complete trace.

    A cyclic graph is not an HTTP error: the trace ends in a flagged step
    and `outcome.status` is "failure".
    """
    graph = parse_graph(request.text, request.mode)
    trace = run_trace(graph, request.algorithm)
    return TraceResponse(
        algorithm=trace.algorithm,
        graph=render_graph(graph),
        steps=trace.steps,
        outcome=trace.outcome,
    )


@app.post("/api/sort/stream")
async def stream_sort(request: SortRequest):
    """Replay a trace with AG-UI streaming.

    Returns SSE stream with events:
    - RUN_STARTED: Run begins
    - RUN_ERROR: Input rejected (bad syntax, self-loop, empty graph); stream ends
    - STATE_SNAPSHOT: Positioned graph
    - STEP_STARTED / CUSTOM trace_step / STEP_FINISHED: One group per step
    - RUN_FINISHED: Outcome, including cycle failures

    With `interval` or `speed` set, steps are paced by an AutoPlayer;
    disconnecting cancels it.
    """
    thread_id = uuid.uuid4().hex
    run_id = uuid.uuid4().hex

    async def event_generator() -> AsyncGenerator[str, None]:
        """Generate AG-UI SSE events."""
        yield encode_event(run_started(thread_id, run_id))

        try:
            graph = parse(request.text, request.mode)
            trace = run_sort(graph, request.algorithm)
        except (FormatError, EmptyGraphError) as e:
            print(f"[STREAM] Run {run_id} rejected: {e}")
            code = "format_error" if isinstance(e, FormatError) else "empty_graph"
            yield encode_event(run_error(str(e), code=code))
            return

        yield encode_event(graph_snapshot(render_graph(graph)))

        session = PlaybackSession(graph, trace, request.mode)
        interval = stream_interval(request)
        print(f"[STREAM] Run {run_id}: {session.total_steps} steps, interval={interval}s")

        for event in step_events(session.current_step):
            yield encode_event(event)

        if interval <= 0:
            while (step := session.next_step()) is not None:
                for event in step_events(step):
                    yield encode_event(event)
        else:
            step_queue: asyncio.Queue[TraceStep] = asyncio.Queue()
            player = AutoPlayer(session, interval, on_step=step_queue.put_nowait)
            player.start()
            try:
                while True:
                    step = await step_queue.get()
                    for event in step_events(step):
                        yield encode_event(event)
                    if step.final:
                        break
            finally:
                player.cancel()

        yield encode_event(run_finished(thread_id, run_id, trace))
        print(f"[STREAM] Run {run_id} complete")

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )


# --- Playback Session Endpoints ---


def current_session() -> PlaybackSession:
    session = app.state.session
    if session is None:
        raise HTTPException(status_code=404, detail="No active session. Start a run first.")
    return session


def session_response(session: PlaybackSession) -> SessionResponse:
    return SessionResponse(
        session_id=session.session_id,
        algorithm=session.algorithm,
        cursor=session.cursor,
        total_steps=session.total_steps,
        step=session.current_step,
        finished=session.is_finished,
        summary=session.summary,
    )


@app.post("/api/session", response_model=SessionResponse)
async def start_session(request: SortRequest) -> SessionResponse:
    """Parse, run and open a fresh session, discarding any previous one."""
    graph = parse_graph(request.text, request.mode)
    trace = run_trace(graph, request.algorithm)
    app.state.session = PlaybackSession(graph, trace, request.mode)
    print(f"[SESSION] Started {app.state.session.session_id} ({request.algorithm})")
    return session_response(app.state.session)


@app.get("/api/session", response_model=SessionResponse)
async def get_session() -> SessionResponse:
    return session_response(current_session())


@app.post("/api/session/next", response_model=SessionResponse)
async def next_session_step() -> SessionResponse:
    """Advance one step; a no-op once the final step is showing."""
    session = current_session()
    session.next_step()
    return session_response(session)


@app.post("/api/session/reset", response_model=SessionResponse)
async def reset_session() -> SessionResponse:
    session = current_session()
    session.reset()
    print(f"[SESSION] Reset {session.session_id}")
    return session_response(session)


@app.get("/api/session/log", response_model=list[LogEntry])
async def get_session_log() -> list[LogEntry]:
    return current_session().log()


@app.delete("/api/session", status_code=204)
async def clear_session() -> None:
    """Drop the session; the next request must start a new one."""
    if app.state.session is not None:
        print(f"[SESSION] Cleared {app.state.session.session_id}")
    app.state.session = None
