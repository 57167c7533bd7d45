"""
Minibatch index sampling.

`BatchSampler` produces, on demand, ordered arrays of `batch_size` example
indices drawn from `[0, num_examples)`.

Sampling modes
--------------
- With replacement: every call draws `batch_size` indices independently and
  uniformly. No state is kept besides the random generator.
- Without replacement: the sampler walks a shuffled permutation of all
  indices. When fewer than `batch_size` indices remain, the remainder is
  taken, a fresh permutation is drawn, and the batch is completed from the
  start of the new permutation ("wrap" policy). Every index therefore
  appears exactly once per permutation, and a batch that straddles a
  reshuffle may repeat an index from the previous permutation.

Both modes are deterministic for a seeded `numpy.random.Generator`.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from ...domain._errors import BatchSizeError


class BatchSampler:
    """
    Sampler of example indices for minibatches.

    Parameters
    ----------
    with_replacement : bool
        Sampling mode (see module docstring).
    num_examples : int
        Size of the index range. Must be >= 1.
    batch_size : int
        Number of indices per batch. Must be >= 1, and <= `num_examples`
        when sampling without replacement.
    rng : Optional[np.random.Generator]
        Random source. A fresh unseeded generator is used when omitted.

    Raises
    ------
    ValueError
        If `num_examples < 1` or `batch_size < 1`.
    BatchSizeError
        If `batch_size > num_examples` without replacement.
    """

    def __init__(
        self,
        with_replacement: bool,
        num_examples: int,
        batch_size: int,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        if num_examples < 1:
            raise ValueError(f"num_examples must be >= 1, got {num_examples}")
        if batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {batch_size}")
        if not with_replacement and batch_size > num_examples:
            raise BatchSizeError(batch_size, num_examples)

        self.with_replacement = bool(with_replacement)
        self.num_examples = int(num_examples)
        self.batch_size = int(batch_size)
        self._rng = rng if rng is not None else np.random.default_rng()

        self._perm: Optional[np.ndarray] = None
        self._cursor = 0

    def sample_batch(self) -> np.ndarray:
        """
        Draw the next batch.

        Returns
        -------
        np.ndarray
            int64 array of length `batch_size` with entries in
            `[0, num_examples)`.
        """
        if self.with_replacement:
            return self._rng.integers(
                0, self.num_examples, size=self.batch_size, dtype=np.int64
            )
        return self._next_from_permutation()

    def _next_from_permutation(self) -> np.ndarray:
        if self._perm is None:
            self._reshuffle()
        remaining = self.num_examples - self._cursor
        if remaining >= self.batch_size:
            batch = self._perm[self._cursor : self._cursor + self.batch_size].copy()
            self._cursor += self.batch_size
            return batch

        # Wrap: remainder of this permutation, then the head of the next one.
        head = self._perm[self._cursor :].copy()
        self._reshuffle()
        need = self.batch_size - head.shape[0]
        tail = self._perm[:need].copy()
        self._cursor = need
        return np.concatenate([head, tail])

    def _reshuffle(self) -> None:
        self._perm = self._rng.permutation(self.num_examples).astype(np.int64)
        self._cursor = 0
