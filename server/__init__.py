"""Server-side components for the topological sort visualizer

This package contains the FastAPI server, AG-UI trace streaming, REST API
payloads, and the playback session that replays a trace.
Uses the official ag-ui-protocol package for AG-UI event types and encoding.
"""

from .app import app
from .config import CONFIG, VisualizerConfig, configure
from .enums import PlaybackStatus
from .events import encode_event
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
from .session import AutoPlayer, LogEntry, PlaybackSession, summarize_step

# Re-export AG-UI types from official package for convenience
from ag_ui.core import (
    EventType as AGUIEventType,
    RunStartedEvent,
    RunFinishedEvent,
    RunErrorEvent,
    StepStartedEvent,
    StepFinishedEvent,
    StateSnapshotEvent,
    CustomEvent,
)
from ag_ui.encoder import EventEncoder

__all__ = [
    "app",
    "CONFIG",
    "VisualizerConfig",
    "configure",
    "PlaybackStatus",
    "AutoPlayer",
    "LogEntry",
    "PlaybackSession",
    "summarize_step",
    "encode_event",
    "AGUIEventType",
    "RunStartedEvent",
    "RunFinishedEvent",
    "RunErrorEvent",
    "StepStartedEvent",
    "StepFinishedEvent",
    "StateSnapshotEvent",
    "CustomEvent",
    "EventEncoder",
    "GraphRequest",
    "GraphResponse",
    "GraphStats",
    "RandomGraphRequest",
    "RandomGraphResponse",
    "SessionResponse",
    "SortRequest",
    "TraceResponse",
]
