"""
Domain-level vector contract.

This module defines the `IVector` protocol: a fixed-length numeric vector
over parameter indices. Points being optimized and gradients produced by
objective functions are both `IVector`s.

Notes
-----
- A vector distinguishes *explicit* entries from implicit zeros. Dense
  vectors treat every index as explicit; sparse vectors only the indices that
  were written. Iteration (`items`, `indices_values`) visits explicit entries
  only, which is what lets update logic stay proportional to the number of
  touched parameters.
- The contract is structural; any object providing these members can be
  used as a point or a gradient.
"""

from __future__ import annotations

from typing import Iterator, Protocol, Tuple, runtime_checkable

import numpy as np


@runtime_checkable
class IVector(Protocol):
    """
    Fixed-length numeric vector with get/set/add/scale/iterate operations.
    """

    def __len__(self) -> int:
        """Return the number of dimensions (not the number of explicit entries)."""
        ...

    def get(self, i: int) -> float:
        """Return entry `i` (0.0 for an implicit entry)."""
        ...

    def set(self, i: int, value: float) -> None:
        """Overwrite entry `i`."""
        ...

    def add(self, i: int, value: float) -> None:
        """Add `value` to entry `i`."""
        ...

    def scale(self, multiplier: float) -> None:
        """Multiply every explicit entry by `multiplier` in place."""
        ...

    def add_vector(self, other: "IVector") -> None:
        """Add the explicit entries of `other` elementwise."""
        ...

    def add_entries(self, indices: np.ndarray, values: np.ndarray) -> None:
        """Add `values[k]` to entry `indices[k]` for every k."""
        ...

    def items(self) -> Iterator[Tuple[int, float]]:
        """Iterate `(index, value)` over explicit entries in index order."""
        ...

    def indices_values(self) -> Tuple[np.ndarray, np.ndarray]:
        """Return explicit entries as `(int64 indices, float64 values)` arrays."""
        ...

    def to_numpy(self) -> np.ndarray:
        """Return a dense float64 copy of the vector."""
        ...

    def copy(self) -> "IVector":
        """Return an independent copy."""
        ...

    def zero(self) -> None:
        """Reset every entry to zero."""
        ...
