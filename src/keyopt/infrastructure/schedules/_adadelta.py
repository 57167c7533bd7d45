"""
AdaDelta learning rates.

AdaDelta tweaks AdaGrad by replacing the ever-growing sum of squared
gradients with exponentially decayed averages, and by scaling with a decayed
average of squared updates instead of a global learning rate. On neural
network training it is far less sensitive to its hyperparameters than SGD or
AdaGrad.

Matthew D. Zeiler (2012) "ADADELTA: An Adaptive Learning Rate Method"
http://arxiv.org/abs/1212.5701

Update, per parameter `i` and step::

    grad_accum[i] = rho * grad_accum[i] + (1 - rho) * g_i^2
    lr[i]         = sqrt((upd_accum[i] + eps) / (grad_accum[i] + eps))
    update_i      = lr[i] * g_i
    upd_accum[i]  = rho * upd_accum[i] + (1 - rho) * update_i^2

The state is dense: every step decays every parameter, and a missing
gradient entry acts as `g_i = 0`. The arithmetic is vectorized over all
dimensions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from ...domain._errors import InvalidHyperparameterError, NoGlobalLearningRateError
from ...domain._function import IFunction
from ...domain._vector import IVector
from ._state import (
    check_finite_rates,
    check_gradient_length,
    check_non_negative,
    require_initialized,
)


@dataclass(frozen=True)
class AdaDeltaConfig:
    """
    Options for `AdaDeltaSchedule`.

    Attributes
    ----------
    decay_rate : float
        Decay rate `rho` of the running averages, in [0, 1].
    constant_addend : float
        Smoothing constant `eps` added inside the square root. Must be > 0,
        which keeps every rate finite and strictly positive.
    init_from_first_gradient : bool
        If True, the first update uses `rho = 0` so the accumulators start
        from the first observed squared gradient instead of a blend against
        zeros. Most AdaDelta implementations behave as if this were False.
    """

    decay_rate: float = 0.95
    constant_addend: float = 1e-6
    init_from_first_gradient: bool = False

    def __post_init__(self) -> None:
        if not 0.0 <= self.decay_rate <= 1.0:
            raise InvalidHyperparameterError(
                "decay_rate", self.decay_rate, "in [0, 1]"
            )
        if not self.constant_addend > 0.0:
            raise InvalidHyperparameterError(
                "constant_addend", self.constant_addend, "> 0"
            )


class AdaDeltaSchedule:
    """
    Per-parameter AdaDelta gain schedule.

    Parameters
    ----------
    config : Optional[AdaDeltaConfig]
        Schedule options; defaults to `AdaDeltaConfig()`.

    Notes
    -----
    - Rates are strictly per-parameter: `get_eta0` / `set_eta0` raise
      `NoGlobalLearningRateError`.
    - A negative accumulator entry raises `AccumulatorInvariantError` and a
      non-finite rate raises `NonFiniteLearningRateError`; both indicate
      corrupted input upstream (e.g., non-finite gradients).
    """

    def __init__(self, config: Optional[AdaDeltaConfig] = None) -> None:
        self._config = config if config is not None else AdaDeltaConfig()
        self._grad_accum: Optional[np.ndarray] = None
        self._upd_accum: Optional[np.ndarray] = None
        self._lr: Optional[np.ndarray] = None
        self._initialized = False

    @property
    def config(self) -> AdaDeltaConfig:
        return self._config

    @property
    def gradient_accumulator(self) -> np.ndarray:
        """Copy of the decayed mean of squared gradients."""
        return require_initialized(self._grad_accum, "AdaDeltaSchedule").copy()

    @property
    def update_accumulator(self) -> np.ndarray:
        """Copy of the decayed mean of squared updates."""
        return require_initialized(self._upd_accum, "AdaDeltaSchedule").copy()

    def init(self, function: IFunction) -> None:
        n = function.get_num_dimensions()
        self._grad_accum = np.zeros(n, dtype=np.float64)
        self._upd_accum = np.zeros(n, dtype=np.float64)
        self._lr = np.zeros(n, dtype=np.float64)
        self._initialized = False

    def take_note_of_gradient(self, gradient: IVector) -> None:
        grad_accum = require_initialized(self._grad_accum, "AdaDeltaSchedule")
        upd_accum = require_initialized(self._upd_accum, "AdaDeltaSchedule")
        check_gradient_length(gradient, grad_accum.shape[0])

        cfg = self._config
        # On the first step, optionally use the current gradient only.
        rho = (
            0.0
            if not self._initialized and cfg.init_from_first_gradient
            else cfg.decay_rate
        )
        self._initialized = True

        # TODO: restrict to explicit gradient entries by decaying untouched
        # indices lazily (rho ** steps_since_last_touch) when they reappear.
        g = gradient.to_numpy()
        grad_accum *= rho
        grad_accum += (1.0 - rho) * g * g
        self._lr = self._compute_learning_rates(grad_accum, upd_accum)
        update = self._lr * g
        upd_accum *= rho
        upd_accum += (1.0 - rho) * update * update

    def _compute_learning_rates(
        self, grad_accum: np.ndarray, upd_accum: np.ndarray
    ) -> np.ndarray:
        """
        Compute `sqrt((upd_accum + eps) / (grad_accum + eps))` elementwise.

        Both accumulators must be non-negative; with `eps > 0` numerator and
        denominator are then strictly positive and the result is finite
        unless the accumulators themselves overflowed.
        """
        check_non_negative("gradient", grad_accum)
        check_non_negative("update", upd_accum)
        eps = self._config.constant_addend
        lr = np.sqrt((upd_accum + eps) / (grad_accum + eps))
        check_finite_rates(lr)
        return lr

    def get_learning_rate(self, iter_count: int, i: int) -> float:
        return float(require_initialized(self._lr, "AdaDeltaSchedule")[i])

    def get_learning_rates(self, iter_count: int, indices: np.ndarray) -> np.ndarray:
        lr = require_initialized(self._lr, "AdaDeltaSchedule")
        return lr[np.asarray(indices, dtype=np.int64)]

    def copy(self) -> "AdaDeltaSchedule":
        other = AdaDeltaSchedule(self._config)
        if self._grad_accum is not None:
            other._grad_accum = self._grad_accum.copy()
            other._upd_accum = self._upd_accum.copy()
            other._lr = self._lr.copy()
        other._initialized = self._initialized
        return other

    def is_same_for_all_parameters(self) -> bool:
        return False

    def get_eta0(self) -> float:
        raise NoGlobalLearningRateError(type(self).__name__)

    def set_eta0(self, eta0: float) -> None:
        raise NoGlobalLearningRateError(type(self).__name__)
