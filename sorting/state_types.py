"""Trace types for topological sorting runs

These types define what one algorithm invocation produces:
- SortSuccess: The run emitted every node in a valid order
- SortFailure: The run stopped on a cycle, with whatever it had so far
- Trace: The ordered, replayable steps plus the tagged outcome
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from graph import Algorithm, FailureKind, TraceStep

from .errors import CycleError, IncompleteOrderError


class SortSuccess(BaseModel):
    """Outcome of a run that ordered every node."""

    model_config = ConfigDict(frozen=True)

    status: Literal["success"] = "success"
    order: tuple[str, ...]


class SortFailure(BaseModel):
    """Outcome of a run that found the graph cyclic.

    `cycle` is only set by DFS; Kahn's algorithm detects that a cycle exists
    but not which nodes form it.
    """

    model_config = ConfigDict(use_enum_values=True, frozen=True)

    status: Literal["failure"] = "failure"
    failure: FailureKind
    message: str
    partial_order: tuple[str, ...] = ()
    cycle: tuple[str, ...] | None = None


SortOutcome = Annotated[SortSuccess | SortFailure, Field(discriminator="status")]


class Trace(BaseModel):
    """Complete record of one sorting run.

    Created fresh on every run and never mutated afterwards. Consumers
    replay it by index; the last step is always `final`.
    """

    model_config = ConfigDict(use_enum_values=True, frozen=True)

    algorithm: Algorithm
    steps: tuple[TraceStep, ...]
    outcome: SortOutcome

    @property
    def final_step(self) -> TraceStep:
        return self.steps[-1]

    @property
    def succeeded(self) -> bool:
        return isinstance(self.outcome, SortSuccess)

    @property
    def order(self) -> list[str] | None:
        """A fresh list of the topological order, or None if the run failed."""
        if isinstance(self.outcome, SortSuccess):
            return list(self.outcome.order)
        return None

    def __len__(self) -> int:
        return len(self.steps)

    def raise_for_failure(self) -> None:
        """Raise CycleError or IncompleteOrderError if the run failed."""
        outcome = self.outcome
        if isinstance(outcome, SortSuccess):
            return
        if outcome.failure == FailureKind.CYCLE:
            raise CycleError(outcome.message, cycle=list(outcome.cycle or []))
        raise IncompleteOrderError(outcome.message, partial_order=list(outcome.partial_order))
