"""
Gain schedule contract.

A gain schedule turns observed gradients and the iteration count into a
learning rate per parameter. The optimizer drives it with the following
protocol, once per step:

1. `take_note_of_gradient(gradient)` with the batch gradient of the step;
2. `get_learning_rate(iter_count, i)` (or the vectorized
   `get_learning_rates`) for each parameter it updates.

`init(function)` resets the state to the dimensionality of the objective and
is called once at the start of every run.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import numpy as np

from ._function import IFunction
from ._vector import IVector


@runtime_checkable
class IGainSchedule(Protocol):
    """
    Stateful policy producing per-parameter learning rates.
    """

    def init(self, function: IFunction) -> None:
        """Reset internal state sized to `function.get_num_dimensions()`."""
        ...

    def take_note_of_gradient(self, gradient: IVector) -> None:
        """Update internal accumulators with the gradient of the current step."""
        ...

    def get_learning_rate(self, iter_count: int, i: int) -> float:
        """Return the learning rate for parameter `i` at step `iter_count`."""
        ...

    def get_learning_rates(self, iter_count: int, indices: np.ndarray) -> np.ndarray:
        """Vectorized `get_learning_rate` over an array of parameter indices."""
        ...

    def copy(self) -> "IGainSchedule":
        """Return an independent snapshot (state arrays are not shared)."""
        ...

    def is_same_for_all_parameters(self) -> bool:
        """Return True if the rate is a scalar shared by all parameters."""
        ...

    def get_eta0(self) -> float:
        """
        Return the single shared base learning rate.

        Raises
        ------
        NoGlobalLearningRateError
            If the schedule has no such parameter.
        """
        ...

    def set_eta0(self, eta0: float) -> None:
        """Set the single shared base learning rate (same errors as `get_eta0`)."""
        ...
