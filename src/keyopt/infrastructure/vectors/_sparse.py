"""
Sparse vector implementation backed by a dictionary.

`SparseVector` keeps only the entries that were written. It is meant for
gradients of objectives whose examples touch a small subset of parameters
(e.g., sparse linear models), so that update logic iterating over explicit
entries costs time proportional to the touched parameters rather than to the
full dimensionality.
"""

from __future__ import annotations

from typing import Dict, Iterator, Mapping, Optional, Tuple

import numpy as np

from ...domain._errors import DimensionMismatchError
from ...domain._vector import IVector
from ._index import check_index, check_indices


class SparseVector:
    """
    Fixed-length vector storing explicit entries in a dict.

    Parameters
    ----------
    num_dimensions : int
        Vector length.
    entries : Optional[Mapping[int, float]]
        Initial explicit entries.

    Notes
    -----
    - `get` of an index that was never written returns 0.0.
    - Writing a zero keeps the entry explicit; explicitness tracks which
      parameters an objective touched, not which are nonzero.
    """

    __slots__ = ("_n", "_entries")

    def __init__(
        self, num_dimensions: int, entries: Optional[Mapping[int, float]] = None
    ) -> None:
        if num_dimensions < 0:
            raise ValueError(f"num_dimensions must be >= 0, got {num_dimensions}")
        self._n = int(num_dimensions)
        self._entries: Dict[int, float] = {}
        if entries:
            for i, v in entries.items():
                self.set(int(i), float(v))

    def __len__(self) -> int:
        return self._n

    def __repr__(self) -> str:
        return f"SparseVector({self._n}, {dict(sorted(self._entries.items()))!r})"

    @property
    def num_explicit(self) -> int:
        """Number of explicit entries."""
        return len(self._entries)

    def get(self, i: int) -> float:
        check_index(i, self._n)
        return self._entries.get(i, 0.0)

    def set(self, i: int, value: float) -> None:
        check_index(i, self._n)
        self._entries[i] = float(value)

    def add(self, i: int, value: float) -> None:
        check_index(i, self._n)
        self._entries[i] = self._entries.get(i, 0.0) + float(value)

    def scale(self, multiplier: float) -> None:
        for i in self._entries:
            self._entries[i] *= multiplier

    def add_vector(self, other: IVector) -> None:
        if len(other) != self._n:
            raise DimensionMismatchError(self._n, len(other), "vector lengths")
        for i, v in other.items():
            self._entries[i] = self._entries.get(i, 0.0) + v

    def add_entries(self, indices: np.ndarray, values: np.ndarray) -> None:
        idx = check_indices(indices, self._n)
        vals = np.asarray(values, dtype=np.float64).reshape(-1)
        for i, v in zip(idx.tolist(), vals.tolist()):
            self._entries[i] = self._entries.get(i, 0.0) + v

    def items(self) -> Iterator[Tuple[int, float]]:
        for i in sorted(self._entries):
            yield i, self._entries[i]

    def indices_values(self) -> Tuple[np.ndarray, np.ndarray]:
        keys = sorted(self._entries)
        idx = np.fromiter(keys, dtype=np.int64, count=len(keys))
        vals = np.fromiter(
            (self._entries[i] for i in keys), dtype=np.float64, count=len(keys)
        )
        return idx, vals

    def to_numpy(self) -> np.ndarray:
        out = np.zeros(self._n, dtype=np.float64)
        idx, vals = self.indices_values()
        out[idx] = vals
        return out

    def copy(self) -> "SparseVector":
        other = SparseVector(self._n)
        other._entries = dict(self._entries)
        return other

    def zero(self) -> None:
        self._entries.clear()
