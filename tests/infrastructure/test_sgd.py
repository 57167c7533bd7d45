import math
import unittest
from dataclasses import replace
from datetime import datetime, timedelta, timezone

import numpy as np

from keyopt.domain._errors import BatchSizeError, DimensionMismatchError
from keyopt.infrastructure.functions._adapters import FunctionAsBatchFunction
from keyopt.infrastructure.functions._combinators import NegateBatchFunction
from keyopt.infrastructure.functions._objectives import (
    LeastSquaresBatchFunction,
    QuadraticFunction,
)
from keyopt.infrastructure.observers._observers import RecordingObserver
from keyopt.infrastructure.optimizers._config import SGDConfig
from keyopt.infrastructure.optimizers._sgd import SGD
from keyopt.infrastructure.schedules._adadelta import AdaDeltaSchedule
from keyopt.infrastructure.schedules._adagrad import AdaGradConfig, AdaGradSchedule
from keyopt.infrastructure.schedules._bottou import BottouSchedule
from keyopt.infrastructure.vectors._dense import DenseVector


class TrajectoryRecorder:
    """Batch function wrapper that records every point it is evaluated at."""

    def __init__(self, function):
        self._function = function
        self.points = []

    def set_point(self, point):
        self.points.append(point.to_numpy())
        self._function.set_point(point)

    def get_value(self, batch=None):
        return self._function.get_value(batch)

    def get_gradient(self, gradient, batch=None):
        self._function.get_gradient(gradient, batch)

    def get_num_dimensions(self):
        return self._function.get_num_dimensions()

    def get_num_examples(self):
        return self._function.get_num_examples()


def _least_squares(seed: int = 0, n: int = 40, d: int = 3):
    rng = np.random.default_rng(seed)
    features = rng.normal(size=(n, d))
    w_true = np.array([1.0, -2.0, 0.5])[:d]
    return LeastSquaresBatchFunction(features, features @ w_true)


def _full_value(f, point) -> float:
    f.set_point(point)
    return f.get_value()


class TestSGDQuadratic(unittest.TestCase):
    def test_minimizes_one_dimensional_quadratic(self):
        f = FunctionAsBatchFunction(QuadraticFunction([0.0]), num_examples=1)
        point = DenseVector([5.0])
        rec = RecordingObserver()
        cfg = SGDConfig(initial_lr=0.1, lam=1.0, num_passes=200, batch_size=1, seed=0)
        sgd = SGD(cfg, observer=rec)

        self.assertFalse(sgd.minimize(f, point))
        self.assertEqual(sgd.iterations, 200)
        self.assertEqual(rec.num_iterations, 200)

        hist = rec.history
        self.assertEqual(len(hist), 201)
        self.assertEqual(hist.iterations[0], -1)
        self.assertAlmostEqual(hist.values[0], 25.0)
        for a, b in zip(hist.best_values, hist.best_values[1:]):
            self.assertLessEqual(b, a)
        self.assertLess(hist.best(), 1e-2)
        self.assertLess(abs(point.get(0)), 0.1)

    def test_maximizes_negated_quadratic(self):
        f = NegateBatchFunction(
            FunctionAsBatchFunction(QuadraticFunction([2.0]), num_examples=1)
        )
        point = DenseVector([-3.0])
        rec = RecordingObserver()
        SGD(SGDConfig(num_passes=200, batch_size=1), observer=rec).maximize(f, point)
        self.assertAlmostEqual(point.get(0), 2.0, places=1)
        for a, b in zip(rec.history.best_values, rec.history.best_values[1:]):
            self.assertGreaterEqual(b, a)


class TestSGDSymmetry(unittest.TestCase):
    def _trajectories(self, make_schedule, seed):
        f = _least_squares(seed=seed, n=20)
        cfg = SGDConfig(initial_lr=0.01, num_passes=3, batch_size=4, seed=seed)

        rec_min = TrajectoryRecorder(f)
        SGD(cfg, schedule=make_schedule(), observer=RecordingObserver()).minimize(
            rec_min, DenseVector.zeros(3)
        )
        rec_max = TrajectoryRecorder(f)
        SGD(cfg, schedule=make_schedule(), observer=RecordingObserver()).maximize(
            NegateBatchFunction(rec_max), DenseVector.zeros(3)
        )
        return np.array(rec_min.points), np.array(rec_max.points)

    def test_maximize_negation_matches_minimize(self):
        for make_schedule in (BottouSchedule, AdaDeltaSchedule, AdaGradSchedule):
            for seed in (0, 1, 7):
                mins, maxs = self._trajectories(make_schedule, seed)
                self.assertEqual(mins.shape, maxs.shape)
                np.testing.assert_array_equal(mins, maxs)


class TestSGDTermination(unittest.TestCase):
    def test_iteration_budget_rounds_up(self):
        f = _least_squares(n=10)
        for passes, batch, expected in ((1, 3, 4), (2.5, 4, 7), (1, 10, 1)):
            sgd = SGD(
                SGDConfig(num_passes=passes, batch_size=batch, seed=0),
                observer=RecordingObserver(),
            )
            sgd.minimize(f, DenseVector.zeros(3))
            self.assertEqual(sgd.iterations, expected)
            self.assertEqual(sgd.iterations, math.ceil(passes * 10 / batch))
            self.assertEqual(sgd.iter_count, expected - 1)

    def test_past_deadline_stops_after_first_step(self):
        f = _least_squares(n=20)
        rec = RecordingObserver()
        cfg = SGDConfig(
            num_passes=5,
            batch_size=4,
            seed=0,
            stop_by=datetime.now() - timedelta(seconds=1),
        )
        sgd = SGD(cfg, observer=rec)
        point = DenseVector.zeros(3)
        self.assertFalse(sgd.minimize(f, point))
        self.assertEqual(sgd.iter_count, 0)
        self.assertTrue(rec.stopped_early)
        self.assertIsNotNone(rec.stopped_at)
        self.assertTrue(np.any(point.to_numpy() != 0.0))

    def test_timezone_aware_deadline(self):
        f = _least_squares(n=20)
        rec = RecordingObserver()
        cfg = SGDConfig(
            num_passes=1,
            batch_size=4,
            seed=0,
            stop_by=datetime.now(timezone.utc) + timedelta(hours=1),
        )
        SGD(cfg, observer=rec).minimize(f, DenseVector.zeros(3))
        self.assertFalse(rec.stopped_early)

    def test_reports_at_pass_boundaries(self):
        f = _least_squares(n=10)
        rec = RecordingObserver()
        cfg = SGDConfig(num_passes=2, batch_size=5, seed=0)
        SGD(cfg, observer=rec).minimize(f, DenseVector.zeros(3))
        self.assertEqual(rec.history.iterations, [-1, 1, 3])
        np.testing.assert_allclose(rec.history.pass_counts, [0.0, 1.0, 2.0])

    def test_final_step_always_reported(self):
        f = _least_squares(n=10)
        rec = RecordingObserver()
        cfg = SGDConfig(num_passes=0.5, batch_size=2, seed=0)
        SGD(cfg, observer=rec).minimize(f, DenseVector.zeros(3))
        self.assertEqual(rec.history.iterations, [-1, 2])

    def test_value_on_iter_zero_is_optional(self):
        f = _least_squares(n=10)
        rec = RecordingObserver()
        cfg = SGDConfig(
            num_passes=2, batch_size=5, seed=0, compute_value_on_iter_zero=False
        )
        SGD(cfg, observer=rec).minimize(f, DenseVector.zeros(3))
        self.assertEqual(rec.history.iterations, [1, 3])


class TestSGDConfiguration(unittest.TestCase):
    def test_batch_larger_than_dataset_without_replacement(self):
        f = _least_squares(n=3)
        sgd = SGD(SGDConfig(batch_size=5), observer=RecordingObserver())
        with self.assertRaises(BatchSizeError):
            sgd.minimize(f, DenseVector.zeros(3))

    def test_batch_larger_than_dataset_with_replacement(self):
        f = _least_squares(n=3)
        sgd = SGD(
            SGDConfig(batch_size=5, with_replacement=True, num_passes=2, seed=0),
            observer=RecordingObserver(),
        )
        sgd.minimize(f, DenseVector.zeros(3))
        self.assertEqual(sgd.iterations, 2)

    def test_point_dimension_checked(self):
        sgd = SGD(observer=RecordingObserver())
        with self.assertRaises(DimensionMismatchError):
            sgd.minimize(_least_squares(), DenseVector.zeros(2))

    def test_invalid_config(self):
        for kwargs in (
            {"initial_lr": 0.0},
            {"lam": -1.0},
            {"num_passes": 0},
            {"batch_size": 0},
        ):
            with self.assertRaises(ValueError):
                SGDConfig(**kwargs)

    def test_seeded_runs_are_repeatable(self):
        f = _least_squares()
        cfg = SGDConfig(initial_lr=0.01, num_passes=2, batch_size=5, seed=11)
        sgd = SGD(cfg, observer=RecordingObserver())
        a = DenseVector.zeros(3)
        b = DenseVector.zeros(3)
        sgd.minimize(f, a)
        sgd.minimize(f, b)
        np.testing.assert_array_equal(a.to_numpy(), b.to_numpy())

    def test_default_schedule_uses_config(self):
        sgd = SGD(SGDConfig(initial_lr=0.3, lam=0.5))
        self.assertIsInstance(sgd.schedule, BottouSchedule)
        self.assertEqual(sgd.schedule.config.initial_lr, 0.3)
        self.assertEqual(sgd.schedule.config.lam, 0.5)


class TestSGDLeastSquares(unittest.TestCase):
    def test_fixed_decay_converges(self):
        f = _least_squares()
        point = DenseVector.zeros(3)
        initial = _full_value(f, point)
        cfg = SGDConfig(initial_lr=0.01, lam=1.0, num_passes=50, batch_size=5, seed=0)
        SGD(cfg, observer=RecordingObserver()).minimize(f, point)
        self.assertLess(_full_value(f, point), 1e-2 * initial)
        np.testing.assert_allclose(point.to_numpy(), [1.0, -2.0, 0.5], atol=0.05)

    def test_adaptive_schedules_decrease_objective(self):
        f = _least_squares()
        schedules = (AdaDeltaSchedule(), AdaGradSchedule(AdaGradConfig(eta=0.1)))
        for schedule in schedules:
            point = DenseVector.zeros(3)
            initial = _full_value(f, point)
            cfg = SGDConfig(num_passes=20, batch_size=5, seed=0)
            SGD(cfg, schedule=schedule, observer=RecordingObserver()).minimize(
                f, point
            )
            self.assertLess(_full_value(f, point), initial)

    def test_sparse_gradients_leave_untouched_parameters(self):
        rng = np.random.default_rng(5)
        features = np.zeros((30, 6))
        features[:, :3] = rng.normal(size=(30, 3))
        f = LeastSquaresBatchFunction(features, features[:, :3] @ [1.0, -1.0, 2.0])
        base = SGDConfig(initial_lr=0.01, num_passes=5, batch_size=3, seed=2)

        dense_point = DenseVector([0.0, 0.0, 0.0, 7.0, 8.0, 9.0])
        sparse_point = dense_point.copy()
        SGD(base, observer=RecordingObserver()).minimize(f, dense_point)
        SGD(
            replace(base, sparse_gradients=True), observer=RecordingObserver()
        ).minimize(f, sparse_point)

        np.testing.assert_array_equal(sparse_point.to_numpy()[3:], [7.0, 8.0, 9.0])
        np.testing.assert_allclose(
            sparse_point.to_numpy(), dense_point.to_numpy(), rtol=1e-12, atol=1e-12
        )

    def test_sparse_gradients_with_adagrad(self):
        features = np.zeros((8, 4))
        features[:, 0] = 1.0
        f = LeastSquaresBatchFunction(features, np.full(8, 3.0))
        schedule = AdaGradSchedule(AdaGradConfig(eta=0.5))
        cfg = SGDConfig(num_passes=10, batch_size=2, seed=0, sparse_gradients=True)
        point = DenseVector.zeros(4)
        SGD(cfg, schedule=schedule, observer=RecordingObserver()).minimize(f, point)
        np.testing.assert_array_equal(schedule.gradient_accumulator[1:], [0, 0, 0])
        self.assertGreater(point.get(0), 0.0)
        np.testing.assert_array_equal(point.to_numpy()[1:], [0, 0, 0])

    def test_last_batch_value_tracked(self):
        f = _least_squares(n=10)
        sgd = SGD(SGDConfig(num_passes=1, batch_size=5, seed=0), observer=RecordingObserver())
        self.assertIsNone(sgd.last_batch_value)
        sgd.minimize(f, DenseVector.zeros(3))
        self.assertIsNotNone(sgd.last_batch_value)
        self.assertGreaterEqual(sgd.last_batch_value, 0.0)


if __name__ == "__main__":
    unittest.main()
