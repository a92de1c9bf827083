"""Playback of a recorded trace: cursor stepping and cancellable autoplay

A PlaybackSession pairs one parsed graph with one trace and a cursor.
It is created fresh on every start and thrown away on the next start or
clear, so nothing carries over between runs. The trace itself is
read-only; cancelling autoplay at any point leaves it intact.
"""

import asyncio
import inspect
import uuid
from typing import Any, Awaitable, Callable

from pydantic import BaseModel

from graph import Algorithm, FailureKind, Graph, InputMode, TraceStep
from sorting import Trace

from .enums import PlaybackStatus

StepCallback = Callable[[TraceStep], Awaitable[Any] | Any]


class LogEntry(BaseModel):
    """One line of the step log shown beside the canvas."""

    index: int
    label: str  # e.g. "Step 3: Visiting node 1"
    active: bool


def summarize_step(step: TraceStep, algorithm: Algorithm | str) -> str:
    """Human-readable result for a final step.

    Success lists the order; a DFS failure shows the cycle path; a Kahn's
    failure only says that no order exists, since no cycle path is known.
    """
    if step.error:
        if step.cycle:
            return f"Cycle detected: {' → '.join(step.cycle)}"
        return "Cycle detected: a topological sort is not possible."
    order = " → ".join(step.result or [])
    return f"Final topological order ({Algorithm(algorithm).value.upper()}): {order}"


class PlaybackSession:
    """Trace plus cursor, advanced manually or by an AutoPlayer."""

    def __init__(
        self,
        graph: Graph,
        trace: Trace,
        mode: InputMode | str = InputMode.LIST,
    ) -> None:
        self.session_id = uuid.uuid4().hex
        self.graph = graph
        self.trace = trace
        self.mode = InputMode(mode)
        self.cursor = 0

    @property
    def algorithm(self) -> Algorithm:
        return Algorithm(self.trace.algorithm)

    @property
    def total_steps(self) -> int:
        return len(self.trace.steps)

    @property
    def current_step(self) -> TraceStep:
        return self.trace.steps[self.cursor]

    @property
    def is_finished(self) -> bool:
        return self.current_step.final

    @property
    def summary(self) -> str | None:
        """Result text once the cursor sits on the final step."""
        if not self.is_finished:
            return None
        return summarize_step(self.current_step, self.algorithm)

    @property
    def failure(self) -> FailureKind | None:
        step = self.current_step
        return FailureKind(step.failure) if step.final and step.failure else None

    def next_step(self) -> TraceStep | None:
        """Advance the cursor by one. Returns None once at the final step."""
        if self.is_finished:
            return None
        self.cursor += 1
        return self.current_step

    def reset(self) -> TraceStep:
        self.cursor = 0
        return self.current_step

    def log(self) -> list[LogEntry]:
        """Steps up to and including the cursor, with 1-based labels."""
        return [
            LogEntry(
                index=step.index,
                label=f"Step {step.index + 1}: {step.message}",
                active=step.index == self.cursor,
            )
            for step in self.trace.steps[: self.cursor + 1]
        ]


class AutoPlayer:
    """Timed playback over a session: start, pause, resume, cancel.

    Advances the session cursor by one step per tick from an asyncio task.
    Must be started from inside a running event loop.
    """

    def __init__(
        self,
        session: PlaybackSession,
        interval: float,
        on_step: StepCallback | None = None,
    ) -> None:
        self.session = session
        self.interval = interval
        self.on_step = on_step
        self.status = PlaybackStatus.FINISHED if session.is_finished else PlaybackStatus.IDLE
        self._task: asyncio.Task | None = None
        self._running = asyncio.Event()

    def start(self) -> None:
        if self._task is not None:
            raise RuntimeError("Autoplay already started")
        if self.status == PlaybackStatus.FINISHED:
            return
        self._running.set()
        self.status = PlaybackStatus.PLAYING
        self._task = asyncio.create_task(self._run())

    def pause(self) -> None:
        if self.status == PlaybackStatus.PLAYING:
            self._running.clear()
            self.status = PlaybackStatus.PAUSED

    def resume(self) -> None:
        if self.status == PlaybackStatus.PAUSED:
            self.status = PlaybackStatus.PLAYING
            self._running.set()

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        if self.status != PlaybackStatus.FINISHED:
            self.status = PlaybackStatus.CANCELLED

    async def wait(self) -> None:
        """Block until autoplay finishes or is cancelled."""
        if self._task is None:
            return
        try:
            await self._task
        except asyncio.CancelledError:
            if not self._task.cancelled():
                raise

    async def _run(self) -> None:
        while not self.session.is_finished:
            await self._running.wait()
            await asyncio.sleep(self.interval)
            if not self._running.is_set():
                # Paused during the sleep; wait again before ticking
                continue
            step = self.session.next_step()
            if step is not None and self.on_step is not None:
                result = self.on_step(step)
                if inspect.isawaitable(result):
                    await result
        self.status = PlaybackStatus.FINISHED
