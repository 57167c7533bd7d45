from ._errors import (
    AccumulatorInvariantError,
    BatchSizeError,
    DimensionMismatchError,
    ExampleCountMismatchError,
    InvalidHyperparameterError,
    NoGlobalLearningRateError,
    NonFiniteLearningRateError,
)
from ._function import (
    IBatchFunction,
    IDifferentiableBatchFunction,
    IDifferentiableFunction,
    IFunction,
)
from ._gain_schedule import IGainSchedule
from ._optimizers import IOptimizer, IOptimizerObserver, ProgressReport
from ._vector import IVector

__all__ = [
    "AccumulatorInvariantError",
    "BatchSizeError",
    "DimensionMismatchError",
    "ExampleCountMismatchError",
    "InvalidHyperparameterError",
    "NoGlobalLearningRateError",
    "NonFiniteLearningRateError",
    "IBatchFunction",
    "IDifferentiableBatchFunction",
    "IDifferentiableFunction",
    "IFunction",
    "IGainSchedule",
    "IOptimizer",
    "IOptimizerObserver",
    "ProgressReport",
    "IVector",
]
