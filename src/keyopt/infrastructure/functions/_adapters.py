"""
Adapters between function capabilities.
"""

from __future__ import annotations

import numpy as np

from ...domain._function import IDifferentiableFunction
from ...domain._vector import IVector
from ._base import AbstractDifferentiableBatchFunction


class FunctionAsBatchFunction(AbstractDifferentiableBatchFunction):
    """
    Present a plain differentiable function as a differentiable batch function.

    The wrapped function has no notion of examples, so the batch argument is
    ignored: every batch evaluates the whole function. The reported number of
    examples is chosen by the caller and only influences how an optimizer
    sizes its passes (e.g., `num_examples=1` with `batch_size=1` makes every
    step a full pass).

    Parameters
    ----------
    fn : IDifferentiableFunction
        The function to wrap.
    num_examples : int
        Number of examples to report. Must be >= 1.
    """

    def __init__(self, fn: IDifferentiableFunction, num_examples: int) -> None:
        self._fn = fn
        self.set_num_examples(num_examples)

    def set_point(self, point: IVector) -> None:
        super().set_point(point)
        self._fn.set_point(point)

    def batch_value(self, batch: np.ndarray) -> float:
        return self._fn.get_value()

    def batch_gradient(self, batch: np.ndarray, gradient: IVector) -> None:
        self._fn.get_gradient(gradient)

    def get_num_dimensions(self) -> int:
        return self._fn.get_num_dimensions()

    def get_num_examples(self) -> int:
        return self._num_examples

    def set_num_examples(self, num_examples: int) -> None:
        if num_examples < 1:
            raise ValueError(f"num_examples must be >= 1, got {num_examples}")
        self._num_examples = int(num_examples)
