"""
Observers of optimizer runs.

- `LoggingObserver` writes progress through the standard `logging` module.
  It is the default observer of `SGD`.
- `RecordingObserver` keeps progress in a `ProgressHistory` for inspection
  by tests or by search drivers.
- `CompositeObserver` fans notifications out to several observers.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ...domain._optimizers import IOptimizerObserver, ProgressReport
from ._history import ProgressHistory

logger = logging.getLogger(__name__)


class LoggingObserver:
    """
    Observer that logs progress.

    Full-data values, the step budget and early stops are logged at INFO;
    average learning rate, average step size and time per pass at DEBUG.

    Parameters
    ----------
    log : Optional[logging.Logger]
        Logger to write to; defaults to this module's logger.
    """

    def __init__(self, log: Optional[logging.Logger] = None) -> None:
        self._log = log if log is not None else logger

    def on_start(
        self, num_iterations: int, stop_by: Optional[datetime], maximize: bool
    ) -> None:
        self._log.info("Setting number of batch gradient steps: %d", num_iterations)
        if stop_by is not None:
            remaining = (stop_by - _now(stop_by)).total_seconds()
            self._log.debug("Max time allotted (hr): %.4f", remaining / 3600.0)

    def on_progress(self, report: ProgressReport) -> None:
        self._log.info(
            "Function value on all examples = %g at iteration = %d on pass = %.2f",
            report.value,
            report.iteration,
            report.pass_count,
        )
        if report.avg_learning_rate is not None:
            self._log.debug("Average learning rate: %g", report.avg_learning_rate)
        if report.avg_step_size is not None:
            self._log.debug("Average step size: %g", report.avg_step_size)
        if report.pass_count > 0:
            self._log.debug(
                "Average time per pass (min): %.2g",
                report.elapsed_seconds / 60.0 / report.pass_count,
            )

    def on_deadline(self, now: datetime, stop_by: datetime) -> None:
        self._log.info(
            "Current time is after stop-by time. now=%s, stopBy=%s", now, stop_by
        )
        self._log.info("Stopping training early.")


class RecordingObserver:
    """
    Observer that records every report.

    Attributes
    ----------
    history : ProgressHistory
        Reports of the most recent run (reset by `on_start`).
    num_iterations : Optional[int]
        Step budget announced by the most recent run.
    stopped_early : bool
        Whether the most recent run stopped because of its deadline.
    stopped_at : Optional[datetime]
        Time at which the deadline stop was detected.
    """

    def __init__(self) -> None:
        self.history = ProgressHistory()
        self.num_iterations: Optional[int] = None
        self.stopped_early = False
        self.stopped_at: Optional[datetime] = None

    def on_start(
        self, num_iterations: int, stop_by: Optional[datetime], maximize: bool
    ) -> None:
        self.history = ProgressHistory(maximize=maximize)
        self.num_iterations = int(num_iterations)
        self.stopped_early = False
        self.stopped_at = None

    def on_progress(self, report: ProgressReport) -> None:
        self.history.append(report)

    def on_deadline(self, now: datetime, stop_by: datetime) -> None:
        self.stopped_early = True
        self.stopped_at = now


class CompositeObserver:
    """Forward every notification to each of `observers`, in order."""

    def __init__(self, *observers: IOptimizerObserver) -> None:
        self._observers: Sequence[IOptimizerObserver] = tuple(observers)

    def on_start(
        self, num_iterations: int, stop_by: Optional[datetime], maximize: bool
    ) -> None:
        for o in self._observers:
            o.on_start(num_iterations, stop_by, maximize)

    def on_progress(self, report: ProgressReport) -> None:
        for o in self._observers:
            o.on_progress(report)

    def on_deadline(self, now: datetime, stop_by: datetime) -> None:
        for o in self._observers:
            o.on_deadline(now, stop_by)


def _now(reference: datetime) -> datetime:
    """Current time, timezone-aware if `reference` is."""
    return datetime.now(reference.tzinfo)
