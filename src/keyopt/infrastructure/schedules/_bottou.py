"""
Fixed time-decay learning rate.

The rate at step `t` is

    gamma_t = gamma_0 / (1 + gamma_0 * lam * t)

as recommended in Leon Bottou's (2012) "Stochastic Gradient Descent Tricks".
When the objective carries an L2 regularizer `lam / 2 * ||w||^2`, `lam`
should be set to that same coefficient; for a Gaussian prior with variance
`sigma^2`, `lam = 1 / sigma^2`.

The schedule keeps no state besides its configuration, and the rate is the
same for every parameter.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

import numpy as np

from ...domain._errors import InvalidHyperparameterError
from ...domain._function import IFunction
from ...domain._vector import IVector


@dataclass(frozen=True)
class BottouConfig:
    """
    Options for `BottouSchedule`.

    Attributes
    ----------
    initial_lr : float
        Initial learning rate `gamma_0`. Must be > 0.
    lam : float
        Decay coefficient `lam`. Must be >= 0; 0 gives a constant rate.
    """

    initial_lr: float = 0.1
    lam: float = 1.0

    def __post_init__(self) -> None:
        if not self.initial_lr > 0.0:
            raise InvalidHyperparameterError("initial_lr", self.initial_lr, "> 0")
        if not self.lam >= 0.0:
            raise InvalidHyperparameterError("lam", self.lam, ">= 0")


class BottouSchedule:
    """
    Gain schedule with the fixed time-decay rate of Bottou (2012).

    Parameters
    ----------
    config : Optional[BottouConfig]
        Schedule options; defaults to `BottouConfig()`.
    """

    def __init__(self, config: Optional[BottouConfig] = None) -> None:
        self._config = config if config is not None else BottouConfig()

    @property
    def config(self) -> BottouConfig:
        return self._config

    def init(self, function: IFunction) -> None:
        # Stateless: nothing to size.
        pass

    def take_note_of_gradient(self, gradient: IVector) -> None:
        pass

    def _rate(self, iter_count: int) -> float:
        eta0 = self._config.initial_lr
        return eta0 / (1.0 + eta0 * self._config.lam * iter_count)

    def get_learning_rate(self, iter_count: int, i: int) -> float:
        return self._rate(iter_count)

    def get_learning_rates(self, iter_count: int, indices: np.ndarray) -> np.ndarray:
        return np.full(np.shape(indices), self._rate(iter_count), dtype=np.float64)

    def copy(self) -> "BottouSchedule":
        return BottouSchedule(self._config)

    def is_same_for_all_parameters(self) -> bool:
        return True

    def get_eta0(self) -> float:
        return self._config.initial_lr

    def set_eta0(self, eta0: float) -> None:
        self._config = replace(self._config, initial_lr=float(eta0))
