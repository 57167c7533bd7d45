from .vectors import DenseVector, SparseVector
from .functions import (
    AbstractBatchFunction,
    AbstractDifferentiableBatchFunction,
    AddBatchFunctions,
    AddFunctions,
    FunctionAsBatchFunction,
    LeastSquaresBatchFunction,
    NegateBatchFunction,
    NegateFunction,
    QuadraticFunction,
    ScaleBatchFunction,
    ScaleFunction,
    ValueGradient,
    add,
    full_batch,
    l2_regularizer,
    negate,
    scale,
)
from .sampling import BatchSampler
from .schedules import (
    AdaDeltaConfig,
    AdaDeltaSchedule,
    AdaGradConfig,
    AdaGradSchedule,
    BottouConfig,
    BottouSchedule,
)
from .observers import (
    CompositeObserver,
    LoggingObserver,
    ProgressHistory,
    RecordingObserver,
)
from .optimizers import SGD, SGDConfig

__all__ = [
    "DenseVector",
    "SparseVector",
    "AbstractBatchFunction",
    "AbstractDifferentiableBatchFunction",
    "AddBatchFunctions",
    "AddFunctions",
    "FunctionAsBatchFunction",
    "LeastSquaresBatchFunction",
    "NegateBatchFunction",
    "NegateFunction",
    "QuadraticFunction",
    "ScaleBatchFunction",
    "ScaleFunction",
    "ValueGradient",
    "add",
    "full_batch",
    "l2_regularizer",
    "negate",
    "scale",
    "BatchSampler",
    "AdaDeltaConfig",
    "AdaDeltaSchedule",
    "AdaGradConfig",
    "AdaGradSchedule",
    "BottouConfig",
    "BottouSchedule",
    "CompositeObserver",
    "LoggingObserver",
    "ProgressHistory",
    "RecordingObserver",
    "SGD",
    "SGDConfig",
]
