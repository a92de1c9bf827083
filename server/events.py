"""AG-UI protocol events for streaming a trace

A trace is streamed as:
- RUN_STARTED: Run begins (threadId, runId)
- STATE_SNAPSHOT: The positioned graph
- STEP_STARTED / CUSTOM("trace_step") / STEP_FINISHED: One triple per trace step
- RUN_FINISHED: Run complete, outcome in `result` (cycles included)
- RUN_ERROR: Input was rejected before any trace existed
"""

import time
from typing import Any

from ag_ui.core import (
    BaseEvent,
    CustomEvent,
    RunErrorEvent,
    RunFinishedEvent,
    RunStartedEvent,
    StateSnapshotEvent,
    StepFinishedEvent,
    StepStartedEvent,
)
from ag_ui.encoder import EventEncoder

from graph import TraceStep
from sorting import Trace

from .payloads import GraphResponse

TRACE_STEP_EVENT = "trace_step"

encoder = EventEncoder()


def encode_event(event: BaseEvent) -> str:
    """Encode an event as SSE, stamping a millisecond timestamp on a copy."""
    stamped = event.model_copy(update={"timestamp": int(time.time() * 1000)})
    return encoder.encode(stamped)


def step_name(step: TraceStep) -> str:
    return f"step-{step.index}"


def run_started(thread_id: str, run_id: str) -> RunStartedEvent:
    return RunStartedEvent(thread_id=thread_id, run_id=run_id)


def graph_snapshot(graph: GraphResponse) -> StateSnapshotEvent:
    return StateSnapshotEvent(snapshot=graph.model_dump())


def step_events(step: TraceStep) -> list[BaseEvent]:
    """STEP_STARTED, the step payload as a CUSTOM event, STEP_FINISHED."""
    name = step_name(step)
    return [
        StepStartedEvent(step_name=name),
        CustomEvent(name=TRACE_STEP_EVENT, value=step.model_dump(mode="json")),
        StepFinishedEvent(step_name=name),
    ]


def run_finished(thread_id: str, run_id: str, trace: Trace) -> RunFinishedEvent:
    """RUN_FINISHED for any completed trace, including ones ending in a cycle."""
    result: dict[str, Any] = {
        "algorithm": trace.algorithm,
        "step_count": len(trace.steps),
        "outcome": trace.outcome.model_dump(mode="json"),
    }
    return RunFinishedEvent(thread_id=thread_id, run_id=run_id, result=result)


def run_error(message: str, code: str | None = None) -> RunErrorEvent:
    """RUN_ERROR for input rejected before a trace could be produced."""
    return RunErrorEvent(message=message, code=code)
