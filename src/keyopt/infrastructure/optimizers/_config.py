"""
Run configuration for the SGD engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ...domain._errors import InvalidHyperparameterError
from ..schedules._bottou import BottouConfig


@dataclass(frozen=True)
class SGDConfig:
    """
    Options for `SGD`.

    Attributes
    ----------
    initial_lr : float
        Initial learning rate `gamma_0` of the default fixed-decay schedule.
        Must be > 0.
    lam : float
        Decay coefficient of the default fixed-decay schedule. Must be >= 0.
    num_passes : float
        Number of passes over the dataset; may be fractional. Must be > 0.
    batch_size : int
        Number of examples per step. Must be >= 1.
    with_replacement : bool
        Whether batches are sampled with replacement.
    stop_by : Optional[datetime]
        Wall-clock deadline. The run stops after the first step that ends
        past it.
    compute_value_on_iter_zero : bool
        Whether to evaluate and report the full-data value before the first
        step. Purely observational.
    sparse_gradients : bool
        Whether each step's gradient storage is a `SparseVector` (only the
        parameters touched by the batch are explicit) instead of a
        `DenseVector`.
    seed : Optional[int]
        Seed of the batch sampler's generator. Each run draws a generator
        from this seed, so repeated runs are identical.

    Notes
    -----
    The configuration is immutable; derive variants with
    `dataclasses.replace`.
    """

    initial_lr: float = 0.1
    lam: float = 1.0
    num_passes: float = 10
    batch_size: int = 15
    with_replacement: bool = False
    stop_by: Optional[datetime] = None
    compute_value_on_iter_zero: bool = True
    sparse_gradients: bool = False
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if not self.initial_lr > 0.0:
            raise InvalidHyperparameterError("initial_lr", self.initial_lr, "> 0")
        if not self.lam >= 0.0:
            raise InvalidHyperparameterError("lam", self.lam, ">= 0")
        if not self.num_passes > 0:
            raise InvalidHyperparameterError("num_passes", self.num_passes, "> 0")
        if self.batch_size < 1:
            raise InvalidHyperparameterError("batch_size", self.batch_size, ">= 1")

    def bottou_config(self) -> BottouConfig:
        """Return the fixed-decay schedule options implied by this config."""
        return BottouConfig(initial_lr=self.initial_lr, lam=self.lam)
