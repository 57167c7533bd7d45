"""
Reference objective functions.

These objectives are small, closed-form functions used to exercise the
optimizers and to build composite objectives with the combinators:

- `QuadraticFunction`: separable weighted quadratic bowl (plain,
  differentiable).
- `l2_regularizer`: `weight / 2 * ||x||^2`, a `QuadraticFunction` centered
  at the origin.
- `LeastSquaresBatchFunction`: sum of per-example squared residuals of a
  linear model (differentiable batch). Its gradient only touches the
  parameters with nonzero features in the batch, so it produces genuinely
  sparse gradients when evaluated into a `SparseVector`.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Union

import numpy as np

from ...domain._vector import IVector
from ._base import AbstractDifferentiableBatchFunction, check_point


ArrayLike = Union[Sequence[float], np.ndarray]


class QuadraticFunction:
    """
    Weighted quadratic `f(x) = sum_i a_i * (x_i - c_i)^2`.

    Parameters
    ----------
    center : array-like
        Minimizer `c` (for positive coefficients).
    coefficients : Optional[array-like or float]
        Per-dimension weights `a`. A scalar is broadcast; defaults to 1.

    Examples
    --------
    `QuadraticFunction([0.0])` is `f(x) = x^2`.
    """

    def __init__(
        self,
        center: ArrayLike,
        coefficients: Optional[Union[ArrayLike, float]] = None,
    ) -> None:
        self._center = np.array(center, dtype=np.float64).reshape(-1)
        n = self._center.shape[0]
        if coefficients is None:
            self._coef = np.ones(n, dtype=np.float64)
        else:
            self._coef = np.broadcast_to(
                np.asarray(coefficients, dtype=np.float64), (n,)
            ).copy()
        self._point: Optional[IVector] = None

    def set_point(self, point: IVector) -> None:
        check_point(point, self.get_num_dimensions())
        self._point = point

    def _offset(self) -> np.ndarray:
        if self._point is None:
            raise RuntimeError("set_point() must be called before evaluation")
        return self._point.to_numpy() - self._center

    def get_value(self) -> float:
        d = self._offset()
        return float(np.sum(self._coef * d * d))

    def get_gradient(self, gradient: IVector) -> None:
        check_point(gradient, self.get_num_dimensions())
        d = self._offset()
        gradient.add_entries(np.arange(d.shape[0]), 2.0 * self._coef * d)

    def get_num_dimensions(self) -> int:
        return int(self._center.shape[0])


def l2_regularizer(num_dimensions: int, weight: float = 1.0) -> QuadraticFunction:
    """
    Return the L2 penalty `weight / 2 * ||x||^2`.

    With the fixed-decay schedule, `weight` is the natural choice for the
    schedule's `lam` coefficient.
    """
    return QuadraticFunction(np.zeros(num_dimensions), 0.5 * float(weight))


class LeastSquaresBatchFunction(AbstractDifferentiableBatchFunction):
    """
    Least-squares loss of a linear model over a dataset.

    `f_batch(x) = sum_{j in batch} 0.5 * (a_j . x - b_j)^2`

    Parameters
    ----------
    features : array-like, shape (num_examples, num_dimensions)
        Feature rows `a_j`.
    targets : array-like, shape (num_examples,)
        Targets `b_j`.

    Notes
    -----
    - Values and gradients are sums over the batch (not means), so a batch of
      all examples gives the full-dataset objective.
    - The gradient of example `j` is `r_j * a_j` and only touches the columns
      where `a_j` is nonzero.
    """

    def __init__(self, features: np.ndarray, targets: ArrayLike) -> None:
        self._features = np.array(features, dtype=np.float64, ndmin=2)
        self._targets = np.array(targets, dtype=np.float64).reshape(-1)
        if self._features.shape[0] != self._targets.shape[0]:
            raise ValueError(
                "features and targets must have the same number of rows, got "
                f"{self._features.shape[0]} and {self._targets.shape[0]}"
            )
        self._cols: List[np.ndarray] = []
        self._vals: List[np.ndarray] = []
        for row in self._features:
            nz = np.flatnonzero(row)
            self._cols.append(nz.astype(np.int64))
            self._vals.append(row[nz])

    def _residuals(self, batch: np.ndarray) -> np.ndarray:
        x = self._require_point().to_numpy()
        return self._features[batch] @ x - self._targets[batch]

    def batch_value(self, batch: np.ndarray) -> float:
        r = self._residuals(batch)
        return float(0.5 * np.sum(r * r))

    def batch_gradient(self, batch: np.ndarray, gradient: IVector) -> None:
        if batch.size == 0:
            return
        r = self._residuals(batch)
        cols = np.concatenate([self._cols[j] for j in batch.tolist()])
        vals = np.concatenate(
            [self._vals[j] * r_k for j, r_k in zip(batch.tolist(), r.tolist())]
        )
        gradient.add_entries(cols, vals)

    def get_num_dimensions(self) -> int:
        return int(self._features.shape[1])

    def get_num_examples(self) -> int:
        return int(self._features.shape[0])
