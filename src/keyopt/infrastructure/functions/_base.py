"""
Base classes for batch objective functions.

`AbstractBatchFunction` and `AbstractDifferentiableBatchFunction` implement
the "all examples" convention of the batch capabilities once, so concrete
objectives only implement evaluation over an explicit batch:

- `get_value(batch=None)` resolves `None` to `[0, num_examples)` and calls
  `batch_value(batch)`;
- `get_gradient(gradient, batch=None)` does the same for
  `batch_gradient(batch, gradient)`.

Because both paths go through the same hook with the same index array, the
value over "all examples" is identical to the value over the explicit full
range.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from ...domain._errors import DimensionMismatchError
from ...domain._vector import IVector
from ..vectors._dense import DenseVector


@dataclass(frozen=True)
class ValueGradient:
    """
    Value and gradient of a function evaluated together.

    Attributes
    ----------
    value : float
        Function value.
    gradient : IVector
        Gradient vector owned by the receiver.
    """

    value: float
    gradient: IVector


def full_batch(num_examples: int) -> np.ndarray:
    """Return the index array `[0, num_examples)`."""
    return np.arange(int(num_examples), dtype=np.int64)


def check_point(point: IVector, num_dimensions: int) -> None:
    """
    Raise `DimensionMismatchError` if `point` does not have `num_dimensions` entries.
    """
    if len(point) != num_dimensions:
        raise DimensionMismatchError(num_dimensions, len(point), "point dimensions")


class AbstractBatchFunction(ABC):
    """
    Base class for functions defined over a fixed set of examples.

    Subclasses implement `get_num_dimensions`, `get_num_examples` and
    `batch_value`. The point bound by `set_point` is available as
    `self._point`.
    """

    _point: Optional[IVector] = None

    def set_point(self, point: IVector) -> None:
        """
        Bind the evaluation point.

        Raises
        ------
        DimensionMismatchError
            If the point length differs from `get_num_dimensions()`.
        """
        check_point(point, self.get_num_dimensions())
        self._point = point

    def get_value(self, batch: Optional[Sequence[int]] = None) -> float:
        """
        Return the value over `batch`, or over all examples when `batch` is None.
        """
        return float(self.batch_value(self._resolve_batch(batch)))

    def _resolve_batch(self, batch: Optional[Sequence[int]]) -> np.ndarray:
        """
        Turn a batch argument into a validated int64 index array.

        Raises
        ------
        IndexError
            If an index lies outside `[0, num_examples)`.
        """
        n = self.get_num_examples()
        if batch is None:
            return full_batch(n)
        idx = np.asarray(batch, dtype=np.int64).reshape(-1)
        if idx.size and (int(idx.min()) < 0 or int(idx.max()) >= n):
            raise IndexError(f"batch indices must lie in [0, {n}), got {idx.tolist()}")
        return idx

    def _require_point(self) -> IVector:
        if self._point is None:
            raise RuntimeError("set_point() must be called before evaluation")
        return self._point

    @abstractmethod
    def get_num_dimensions(self) -> int: ...

    @abstractmethod
    def get_num_examples(self) -> int: ...

    @abstractmethod
    def batch_value(self, batch: np.ndarray) -> float:
        """
        Return the value restricted to the examples in `batch`.

        Parameters
        ----------
        batch : np.ndarray
            Validated int64 example indices (duplicates allowed).
        """
        ...


class AbstractDifferentiableBatchFunction(AbstractBatchFunction):
    """
    Base class for differentiable batch functions.

    Subclasses additionally implement `batch_gradient`.
    """

    def get_gradient(
        self, gradient: IVector, batch: Optional[Sequence[int]] = None
    ) -> None:
        """
        Add the gradient over `batch` (all examples when None) into `gradient`.
        """
        check_point(gradient, self.get_num_dimensions())
        self.batch_gradient(self._resolve_batch(batch), gradient)

    def get_value_gradient(
        self,
        batch: Optional[Sequence[int]] = None,
        gradient: Optional[IVector] = None,
    ) -> ValueGradient:
        """
        Evaluate value and gradient over the same batch.

        Parameters
        ----------
        batch : Optional[Sequence[int]]
            Example indices; None means every example.
        gradient : Optional[IVector]
            Zeroed storage for the gradient. A new `DenseVector` is allocated
            when omitted.

        Returns
        -------
        ValueGradient
            The value and the filled gradient storage.
        """
        idx = self._resolve_batch(batch)
        if gradient is None:
            gradient = DenseVector.zeros(self.get_num_dimensions())
        else:
            check_point(gradient, self.get_num_dimensions())
        value = float(self.batch_value(idx))
        self.batch_gradient(idx, gradient)
        return ValueGradient(value, gradient)

    @abstractmethod
    def batch_gradient(self, batch: np.ndarray, gradient: IVector) -> None:
        """
        Add the gradient restricted to the examples in `batch` into `gradient`.
        """
        ...
