"""
Dense vector implementation backed by a NumPy array.

`DenseVector` stores every entry explicitly in a contiguous float64 array.
It is the usual representation for the point being optimized and for
gradients of objectives that touch most parameters on every evaluation.
"""

from __future__ import annotations

from typing import Iterator, Sequence, Tuple, Union

import numpy as np

from ...domain._errors import DimensionMismatchError
from ...domain._vector import IVector
from ._index import check_index, check_indices


class DenseVector:
    """
    Fixed-length dense vector of float64 values.

    Parameters
    ----------
    values : array-like
        Initial values. The data is copied and flattened to one dimension.

    Notes
    -----
    - Every index is an explicit entry: `items()` and `indices_values()`
      visit all of them, including zeros.
    - Negative indices are rejected rather than wrapped.
    """

    __slots__ = ("_data",)

    def __init__(self, values: Union[Sequence[float], np.ndarray]) -> None:
        self._data = np.array(values, dtype=np.float64).reshape(-1)

    @classmethod
    def zeros(cls, num_dimensions: int) -> "DenseVector":
        """
        Create an all-zero vector.

        Parameters
        ----------
        num_dimensions : int
            Vector length. Must be non-negative.

        Returns
        -------
        DenseVector
            A new zero vector.
        """
        if num_dimensions < 0:
            raise ValueError(f"num_dimensions must be >= 0, got {num_dimensions}")
        return cls(np.zeros(int(num_dimensions), dtype=np.float64))

    def __len__(self) -> int:
        return int(self._data.shape[0])

    def __repr__(self) -> str:
        return f"DenseVector({self._data.tolist()!r})"

    def get(self, i: int) -> float:
        check_index(i, len(self))
        return float(self._data[i])

    def set(self, i: int, value: float) -> None:
        check_index(i, len(self))
        self._data[i] = value

    def add(self, i: int, value: float) -> None:
        check_index(i, len(self))
        self._data[i] += value

    def scale(self, multiplier: float) -> None:
        self._data *= multiplier

    def add_vector(self, other: IVector) -> None:
        """
        Add `other` elementwise.

        Raises
        ------
        DimensionMismatchError
            If the vectors have different lengths.
        """
        if len(other) != len(self):
            raise DimensionMismatchError(len(self), len(other), "vector lengths")
        if isinstance(other, DenseVector):
            self._data += other._data
            return
        idx, vals = other.indices_values()
        np.add.at(self._data, idx, vals)

    def add_entries(self, indices: np.ndarray, values: np.ndarray) -> None:
        idx = check_indices(indices, len(self))
        # add.at accumulates repeated indices instead of keeping only the last
        np.add.at(self._data, idx, np.asarray(values, dtype=np.float64))

    def items(self) -> Iterator[Tuple[int, float]]:
        for i, v in enumerate(self._data.tolist()):
            yield i, v

    def indices_values(self) -> Tuple[np.ndarray, np.ndarray]:
        return np.arange(len(self), dtype=np.int64), self._data.copy()

    def to_numpy(self) -> np.ndarray:
        return self._data.copy()

    def copy(self) -> "DenseVector":
        return DenseVector(self._data)

    def zero(self) -> None:
        self._data.fill(0.0)
