"""
Index validation shared by vector implementations.
"""

from __future__ import annotations

import numpy as np


def check_index(i: int, length: int) -> None:
    """
    Raise `IndexError` unless `0 <= i < length`.

    Negative indices are rejected; vectors never wrap around.
    """
    if not 0 <= i < length:
        raise IndexError(f"index {i} out of range for vector of length {length}")


def check_indices(indices: np.ndarray, length: int) -> np.ndarray:
    """
    Validate an index array and return it as a flat int64 array.

    Raises
    ------
    IndexError
        If any index lies outside `[0, length)`.
    """
    idx = np.asarray(indices, dtype=np.int64).reshape(-1)
    if idx.size and (int(idx.min()) < 0 or int(idx.max()) >= length):
        raise IndexError(
            f"indices out of range for vector of length {length}: "
            f"min={int(idx.min())}, max={int(idx.max())}"
        )
    return idx
