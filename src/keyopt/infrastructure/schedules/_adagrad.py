"""
AdaGrad learning rates (Duchi et al., 2011).

Each parameter keeps the running sum of its squared gradients, and its rate
is

    lr_i = eta / (constant_addend + sqrt(sum_sq_i))

Only the explicit entries of a gradient update the sums, so sparse gradients
cost time proportional to the number of touched parameters. A parameter that
has never been touched keeps `lr_i = eta / constant_addend`; it is only ever
multiplied by a zero gradient.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

import numpy as np

from ...domain._errors import InvalidHyperparameterError
from ...domain._function import IFunction
from ...domain._vector import IVector
from ._state import (
    check_finite_rates,
    check_gradient_length,
    check_non_negative,
    require_initialized,
)


@dataclass(frozen=True)
class AdaGradConfig:
    """
    Options for `AdaGradSchedule`.

    Attributes
    ----------
    eta : float
        Base learning rate. Must be > 0.
    constant_addend : float
        Amount added to the root of the sum of squares. Must be > 0.
    """

    eta: float = 0.1
    constant_addend: float = 1e-9

    def __post_init__(self) -> None:
        if not self.eta > 0.0:
            raise InvalidHyperparameterError("eta", self.eta, "> 0")
        if not self.constant_addend > 0.0:
            raise InvalidHyperparameterError(
                "constant_addend", self.constant_addend, "> 0"
            )


class AdaGradSchedule:
    """
    Per-parameter AdaGrad gain schedule.

    Parameters
    ----------
    config : Optional[AdaGradConfig]
        Schedule options; defaults to `AdaGradConfig()`.
    """

    def __init__(self, config: Optional[AdaGradConfig] = None) -> None:
        self._config = config if config is not None else AdaGradConfig()
        self._sum_sq: Optional[np.ndarray] = None

    @property
    def config(self) -> AdaGradConfig:
        return self._config

    @property
    def gradient_accumulator(self) -> np.ndarray:
        """Copy of the per-parameter sums of squared gradients."""
        return require_initialized(self._sum_sq, "AdaGradSchedule").copy()

    def init(self, function: IFunction) -> None:
        self._sum_sq = np.zeros(function.get_num_dimensions(), dtype=np.float64)

    def take_note_of_gradient(self, gradient: IVector) -> None:
        sum_sq = require_initialized(self._sum_sq, "AdaGradSchedule")
        check_gradient_length(gradient, sum_sq.shape[0])
        idx, vals = gradient.indices_values()
        np.add.at(sum_sq, idx, vals * vals)
        check_non_negative("gradient", sum_sq[idx], idx)

    def get_learning_rates(self, iter_count: int, indices: np.ndarray) -> np.ndarray:
        sum_sq = require_initialized(self._sum_sq, "AdaGradSchedule")
        idx = np.asarray(indices, dtype=np.int64)
        lr = self._config.eta / (self._config.constant_addend + np.sqrt(sum_sq[idx]))
        check_finite_rates(lr, idx)
        return lr

    def get_learning_rate(self, iter_count: int, i: int) -> float:
        return float(self.get_learning_rates(iter_count, np.array([i]))[0])

    def copy(self) -> "AdaGradSchedule":
        other = AdaGradSchedule(self._config)
        if self._sum_sq is not None:
            other._sum_sq = self._sum_sq.copy()
        return other

    def is_same_for_all_parameters(self) -> bool:
        return False

    def get_eta0(self) -> float:
        return self._config.eta

    def set_eta0(self, eta0: float) -> None:
        self._config = replace(self._config, eta=float(eta0))
