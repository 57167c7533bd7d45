"""
Domain-level optimizer contracts for keyopt.

This module defines:

- `IOptimizer`: the `maximize` / `minimize` entry points shared by
  optimizers over a given function capability.
- `ProgressReport`: a value object describing the state of a run at a
  reporting point.
- `IOptimizerObserver`: the callback interface through which a run reports
  progress. Optimizers never print or log directly; they notify an observer.

Notes
-----
- The boolean returned by `maximize` / `minimize` signals convergence. An
  optimizer without a convergence test always returns False, which is not a
  failure.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Protocol, runtime_checkable

from ._vector import IVector


@runtime_checkable
class IOptimizer(Protocol):
    """
    Optimizer interface contract.

    Both methods mutate `point` in place, starting from its current value.
    """

    def maximize(self, function: object, point: IVector) -> bool:
        """Move `point` toward a maximum of `function`; return True on convergence."""
        ...

    def minimize(self, function: object, point: IVector) -> bool:
        """Move `point` toward a minimum of `function`; return True on convergence."""
        ...


@dataclass(frozen=True)
class ProgressReport:
    """
    Snapshot of a run at a reporting point.

    Attributes
    ----------
    iteration : int
        Zero-based index of the step just completed, or -1 for the report
        made before the first step.
    pass_count : float
        Fractional number of passes over the data completed so far.
    value : float
        Objective value over all examples at the current point.
    avg_learning_rate : Optional[float]
        Mean learning rate over parameters with nonzero gradient in the last
        step (None before the first step or if the gradient was all zeros).
    avg_step_size : Optional[float]
        Mean absolute step over the same parameters.
    elapsed_seconds : float
        Wall-clock seconds since the stepping loop started.
    """

    iteration: int
    pass_count: float
    value: float
    avg_learning_rate: Optional[float] = None
    avg_step_size: Optional[float] = None
    elapsed_seconds: float = 0.0


@runtime_checkable
class IOptimizerObserver(Protocol):
    """
    Receives progress notifications from an optimizer run.
    """

    def on_start(
        self, num_iterations: int, stop_by: Optional[datetime], maximize: bool
    ) -> None:
        """
        Called once after initialization.

        Parameters
        ----------
        num_iterations : int
            Step budget of the run.
        stop_by : Optional[datetime]
            Wall-clock deadline, if any.
        maximize : bool
            Direction of the run; larger values are better when True.
        """
        ...

    def on_progress(self, report: ProgressReport) -> None:
        """Called with the full-data value before step 0 (optional) and at pass boundaries."""
        ...

    def on_deadline(self, now: datetime, stop_by: datetime) -> None:
        """Called when the run stops early because the deadline has passed."""
        ...
