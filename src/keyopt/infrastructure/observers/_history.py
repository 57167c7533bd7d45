"""
Optimization progress history.

This module defines a lightweight container recording the full-data values
reported by an optimizer run, in a manner similar to Keras' `History`
object. Besides the raw values it keeps the best value seen so far and the
elapsed time at each report, which is what search drivers built on top of
an optimizer introspect.

Design goals
------------
- Minimal surface area: no dependency on vectors, functions or schedules
- Deterministic ordering: one entry per report, in report order
- Human-readable and debugger-friendly representation
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ...domain._optimizers import ProgressReport


@dataclass
class ProgressHistory:
    """
    Container for per-report optimization progress.

    Attributes
    ----------
    maximize : bool
        Direction used to define "best"; larger is better when True.
    iterations : List[int]
        Step index of each report (-1 for the report before the first step).
    pass_counts : List[float]
        Fractional number of passes completed at each report.
    values : List[float]
        Objective value over all examples at each report.
    best_values : List[float]
        Best value among `values[:k + 1]` for each report `k`. The sequence
        is monotone (non-increasing when minimizing, non-decreasing when
        maximizing).
    elapsed_seconds : List[float]
        Seconds since the stepping loop started, at each report.

    Notes
    -----
    This object is intentionally passive: it performs no aggregation beyond
    the running best.
    """

    maximize: bool = False
    iterations: List[int] = field(default_factory=list)
    pass_counts: List[float] = field(default_factory=list)
    values: List[float] = field(default_factory=list)
    best_values: List[float] = field(default_factory=list)
    elapsed_seconds: List[float] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.values)

    def _is_better(self, a: float, b: float) -> bool:
        return a > b if self.maximize else a < b

    def append(self, report: ProgressReport) -> None:
        """
        Record a report.

        Parameters
        ----------
        report : ProgressReport
            Report emitted by the optimizer.
        """
        value = float(report.value)
        if self.best_values and not self._is_better(value, self.best_values[-1]):
            best = self.best_values[-1]
        else:
            best = value
        self.iterations.append(int(report.iteration))
        self.pass_counts.append(float(report.pass_count))
        self.values.append(value)
        self.best_values.append(best)
        self.elapsed_seconds.append(float(report.elapsed_seconds))

    def best(self) -> Optional[float]:
        """Return the best value recorded so far, or None if empty."""
        return self.best_values[-1] if self.best_values else None

    def last(self) -> Dict[str, float]:
        """
        Return the most recent entry as a mapping.

        Returns
        -------
        Dict[str, float]
            Keys `iteration`, `pass_count`, `value`, `best_value` and
            `elapsed_seconds`; empty when nothing was recorded.
        """
        if not self.values:
            return {}
        return {
            "iteration": float(self.iterations[-1]),
            "pass_count": self.pass_counts[-1],
            "value": self.values[-1],
            "best_value": self.best_values[-1],
            "elapsed_seconds": self.elapsed_seconds[-1],
        }
