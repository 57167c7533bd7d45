"""
scripts/bench_schedules_least_squares.py

Gain schedule comparison on a synthetic least-squares problem (NOT a unit test)
for keyopt.

Runs minibatch SGD with each gain schedule on the same dataset and seed and
reports, per schedule:
- final objective value over all examples
- distance to the generating weights
- wall-clock time of the run

Timing policy
-------------
- Dataset generation is excluded from the timed region.
- Each run uses a fresh schedule and starts from the zero vector.

Usage
-----
python scripts/bench_schedules_least_squares.py
python scripts/bench_schedules_least_squares.py --examples 5000 --dims 50 --passes 5
python scripts/bench_schedules_least_squares.py --density 0.05 --sparse-gradients
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
import time
from dataclasses import dataclass
from typing import Callable

import numpy as np

# -------------------------
# Make repo_root/src importable
# -------------------------
THIS_DIR = os.path.dirname(os.path.abspath(__file__))
ROOT_DIR = os.path.abspath(os.path.join(THIS_DIR, ".."))
SRC_DIR = os.path.join(ROOT_DIR, "src")
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

from keyopt.domain._gain_schedule import IGainSchedule
from keyopt.infrastructure.functions._objectives import LeastSquaresBatchFunction
from keyopt.infrastructure.observers._observers import (
    CompositeObserver,
    LoggingObserver,
    RecordingObserver,
)
from keyopt.infrastructure.optimizers._config import SGDConfig
from keyopt.infrastructure.optimizers._sgd import SGD
from keyopt.infrastructure.schedules._adadelta import AdaDeltaSchedule
from keyopt.infrastructure.schedules._adagrad import AdaGradConfig, AdaGradSchedule
from keyopt.infrastructure.schedules._bottou import BottouConfig, BottouSchedule
from keyopt.infrastructure.vectors._dense import DenseVector


def _fmt_seconds(x: float) -> str:
    if x < 1e-3:
        return f"{x*1e6:.2f} µs"
    if x < 1:
        return f"{x*1e3:.2f} ms"
    return f"{x:.3f} s"


@dataclass(frozen=True)
class Case:
    name: str
    make_schedule: Callable[[], IGainSchedule]


def _make_dataset(
    examples: int, dims: int, density: float, noise: float, seed: int
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    rng = np.random.default_rng(seed)
    features = rng.standard_normal((examples, dims))
    if density < 1.0:
        features *= rng.random((examples, dims)) < density
    w_true = rng.standard_normal(dims)
    targets = features @ w_true + noise * rng.standard_normal(examples)
    return features, targets, w_true


def _bench_case(
    case: Case,
    f: LeastSquaresBatchFunction,
    w_true: np.ndarray,
    cfg: SGDConfig,
) -> None:
    point = DenseVector.zeros(f.get_num_dimensions())
    rec = RecordingObserver()
    observer = CompositeObserver(LoggingObserver(), rec)
    sgd = SGD(cfg, schedule=case.make_schedule(), observer=observer)

    t0 = time.perf_counter()
    sgd.minimize(f, point)
    elapsed = time.perf_counter() - t0

    f.set_point(point)
    value = f.get_value()
    dist = float(np.linalg.norm(point.to_numpy() - w_true))
    print(
        f"{case.name:<10} steps={sgd.iterations:<7d} value={value:<12.6g} "
        f"best={rec.history.best():<12.6g} |x-w|={dist:<10.4g} "
        f"time={_fmt_seconds(elapsed)}"
    )


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Compare gain schedules on least squares."
    )
    parser.add_argument("--examples", type=int, default=2000)
    parser.add_argument("--dims", type=int, default=20)
    parser.add_argument("--density", type=float, default=1.0)
    parser.add_argument("--noise", type=float, default=0.01)
    parser.add_argument("--passes", type=float, default=10)
    parser.add_argument("--batch-size", type=int, default=15)
    parser.add_argument("--initial-lr", type=float, default=0.01)
    parser.add_argument("--sparse-gradients", action="store_true")
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    features, targets, w_true = _make_dataset(
        args.examples, args.dims, args.density, args.noise, args.seed
    )
    f = LeastSquaresBatchFunction(features, targets)

    cfg = SGDConfig(
        initial_lr=args.initial_lr,
        lam=1.0,
        num_passes=args.passes,
        batch_size=args.batch_size,
        sparse_gradients=args.sparse_gradients,
        seed=args.seed,
    )

    cases = [
        Case("bottou", lambda: BottouSchedule(BottouConfig(args.initial_lr, 1.0))),
        Case("adagrad", lambda: AdaGradSchedule(AdaGradConfig(eta=0.1))),
        Case("adadelta", AdaDeltaSchedule),
    ]

    print(
        f"examples={args.examples} dims={args.dims} density={args.density} "
        f"batch={args.batch_size} passes={args.passes} "
        f"sparse_gradients={args.sparse_gradients}"
    )
    for case in cases:
        _bench_case(case, f, w_true, cfg)


if __name__ == "__main__":
    main()
