"""
Stochastic gradient descent with minibatches.

This module provides the `SGD` engine: it draws a batch of example indices,
evaluates the objective's gradient on that batch at the current point, asks
a gain schedule for per-parameter learning rates, and moves the point. The
point is updated in place.

Design notes
------------
- The engine consumes any `IDifferentiableBatchFunction`; plain
  differentiable functions are wrapped with `FunctionAsBatchFunction`.
- Learning rates come from an `IGainSchedule`. The default is the fixed
  time-decay rate of Bottou (2012) built from `SGDConfig.initial_lr` and
  `SGDConfig.lam`; AdaGrad and AdaDelta are drop-in replacements.
- Only explicit gradient entries are visited when updating the point, so
  sparse gradients cost time proportional to the touched parameters.
- There is no convergence test. A run ends when the step budget
  `ceil(num_passes * num_examples / batch_size)` is exhausted or when the
  configured deadline has passed; `maximize` / `minimize` always return
  False.
- Progress is reported to an `IOptimizerObserver` (logging by default); the
  loop itself never logs.
"""

from __future__ import annotations

import math
import time
from datetime import datetime
from typing import Optional, Tuple

import numpy as np

from ...domain._function import IDifferentiableBatchFunction
from ...domain._gain_schedule import IGainSchedule
from ...domain._optimizers import IOptimizerObserver, ProgressReport
from ...domain._vector import IVector
from ..functions._base import check_point
from ..observers._observers import LoggingObserver
from ..sampling._batch_sampler import BatchSampler
from ..schedules._bottou import BottouSchedule
from ..vectors._dense import DenseVector
from ..vectors._sparse import SparseVector
from ._config import SGDConfig


class SGD:
    """
    Minibatch stochastic gradient optimizer.

    Parameters
    ----------
    config : Optional[SGDConfig]
        Run options; defaults to `SGDConfig()`.
    schedule : Optional[IGainSchedule]
        Gain schedule. Defaults to `BottouSchedule(config.bottou_config())`.
        The schedule is re-initialized at the start of every run.
    observer : Optional[IOptimizerObserver]
        Progress observer; defaults to a `LoggingObserver`.
    rng : Optional[np.random.Generator]
        Random source for batch sampling. When given, it is shared across
        runs and `config.seed` is ignored.

    Attributes
    ----------
    iterations : int
        Step budget of the current (or last) run.
    iter_count : int
        Index of the step being (or last) executed.
    last_batch_value : Optional[float]
        Objective value on the batch of the most recent step.
    """

    def __init__(
        self,
        config: Optional[SGDConfig] = None,
        *,
        schedule: Optional[IGainSchedule] = None,
        observer: Optional[IOptimizerObserver] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        self.config = config if config is not None else SGDConfig()
        self.schedule = (
            schedule
            if schedule is not None
            else BottouSchedule(self.config.bottou_config())
        )
        self.observer = observer if observer is not None else LoggingObserver()
        self._rng = rng

        self.iterations = 0
        self.iter_count = 0
        self.last_batch_value: Optional[float] = None
        self._sampler: Optional[BatchSampler] = None

    def init(self, function: IDifferentiableBatchFunction) -> None:
        """
        Prepare a run over `function`.

        Sizes the step budget, builds the batch sampler, resets the step
        counter and initializes the gain schedule.

        Raises
        ------
        BatchSizeError
            If `batch_size > num_examples` without replacement.
        """
        cfg = self.config
        num_examples = function.get_num_examples()
        rng = self._rng if self._rng is not None else np.random.default_rng(cfg.seed)

        self.iter_count = 0
        self.last_batch_value = None
        self._sampler = BatchSampler(
            cfg.with_replacement, num_examples, cfg.batch_size, rng
        )
        self.iterations = int(math.ceil(cfg.num_passes * num_examples / cfg.batch_size))
        self.schedule.init(function)

    def maximize(self, function: IDifferentiableBatchFunction, point: IVector) -> bool:
        """
        Maximize `function` starting at `point` (updated in place).

        Returns
        -------
        bool
            Always False: no convergence test is performed.
        """
        return self._optimize(function, point, maximize=True)

    def minimize(self, function: IDifferentiableBatchFunction, point: IVector) -> bool:
        """
        Minimize `function` starting at `point` (updated in place).

        Returns
        -------
        bool
            Always False: no convergence test is performed.
        """
        return self._optimize(function, point, maximize=False)

    def _optimize(
        self, function: IDifferentiableBatchFunction, point: IVector, maximize: bool
    ) -> bool:
        check_point(point, function.get_num_dimensions())
        self.init(function)

        cfg = self.config
        num_examples = function.get_num_examples()
        self.observer.on_start(self.iterations, cfg.stop_by, maximize)

        if cfg.compute_value_on_iter_zero:
            function.set_point(point)
            self.observer.on_progress(
                ProgressReport(iteration=-1, pass_count=0.0, value=function.get_value())
            )

        pass_count = 0
        start = time.perf_counter()
        for t in range(self.iterations):
            self.iter_count = t
            avg_lr, avg_step = self._step(function, point, maximize)

            # Passes are measured by the number of examples processed so far.
            pass_count_frac = (t + 1) * cfg.batch_size / num_examples
            completed = int(math.floor(pass_count_frac))
            if completed > pass_count or t == self.iterations - 1:
                function.set_point(point)
                self.observer.on_progress(
                    ProgressReport(
                        iteration=t,
                        pass_count=pass_count_frac,
                        value=function.get_value(),
                        avg_learning_rate=avg_lr,
                        avg_step_size=avg_step,
                        elapsed_seconds=time.perf_counter() - start,
                    )
                )
            pass_count = max(pass_count, completed)

            if cfg.stop_by is not None:
                now = datetime.now(cfg.stop_by.tzinfo)
                if now > cfg.stop_by:
                    self.observer.on_deadline(now, cfg.stop_by)
                    break

        # We don't test for convergence.
        return False

    def _step(
        self, function: IDifferentiableBatchFunction, point: IVector, maximize: bool
    ) -> Tuple[Optional[float], Optional[float]]:
        """
        Run one step and return the average learning rate and absolute step
        over parameters with nonzero gradient (None if there are none).
        """
        batch = self._sampler.sample_batch()

        function.set_point(point)
        gradient = self._new_gradient(function.get_num_dimensions())
        self.last_batch_value = function.get_value(batch)
        function.get_gradient(gradient, batch)

        self.schedule.take_note_of_gradient(gradient)

        idx, g = gradient.indices_values()
        lr = self.schedule.get_learning_rates(self.iter_count, idx)
        steps = lr * g
        if not maximize:
            steps = -steps
        point.add_entries(idx, steps)

        nonzero = g != 0.0
        if not nonzero.any():
            return None, None
        return float(np.mean(lr[nonzero])), float(np.mean(np.abs(steps[nonzero])))

    def _new_gradient(self, num_dimensions: int) -> IVector:
        if self.config.sparse_gradients:
            return SparseVector(num_dimensions)
        return DenseVector.zeros(num_dimensions)
