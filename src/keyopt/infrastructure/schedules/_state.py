"""
Shared helpers for accumulator-based schedules.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from ...domain._errors import (
    AccumulatorInvariantError,
    DimensionMismatchError,
    NonFiniteLearningRateError,
)
from ...domain._vector import IVector


def require_initialized(state: Optional[np.ndarray], schedule: str) -> np.ndarray:
    """Return `state`, or raise if the schedule's `init()` has not been called."""
    if state is None:
        raise RuntimeError(f"{schedule}.init() must be called before use")
    return state


def check_gradient_length(gradient: IVector, num_dimensions: int) -> None:
    if len(gradient) != num_dimensions:
        raise DimensionMismatchError(
            num_dimensions, len(gradient), "gradient dimensions"
        )


def check_non_negative(
    name: str, accum: np.ndarray, indices: Optional[np.ndarray] = None
) -> None:
    """
    Raise `AccumulatorInvariantError` on the first negative entry of `accum`.

    `indices`, when given, maps entries of `accum` to parameter indices.
    """
    bad = np.flatnonzero(accum < 0.0)
    if bad.size:
        k = int(bad[0])
        i = int(indices[k]) if indices is not None else k
        raise AccumulatorInvariantError(name, i, float(accum[k]))


def check_finite_rates(lr: np.ndarray, indices: Optional[np.ndarray] = None) -> None:
    """
    Raise `NonFiniteLearningRateError` on the first NaN or infinite rate.

    Parameters
    ----------
    lr : np.ndarray
        Rates to check.
    indices : Optional[np.ndarray]
        Parameter indices of the entries of `lr`, when `lr` is not indexed
        by parameter directly.
    """
    bad = np.flatnonzero(~np.isfinite(lr))
    if bad.size:
        k = int(bad[0])
        i = int(indices[k]) if indices is not None else k
        raise NonFiniteLearningRateError(i, float(lr[k]))
