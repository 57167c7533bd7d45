from ._base import (
    AbstractBatchFunction,
    AbstractDifferentiableBatchFunction,
    ValueGradient,
    full_batch,
)
from ._adapters import FunctionAsBatchFunction
from ._combinators import (
    AddBatchFunctions,
    AddFunctions,
    NegateBatchFunction,
    NegateFunction,
    ScaleBatchFunction,
    ScaleFunction,
    add,
    negate,
    scale,
)
from ._objectives import LeastSquaresBatchFunction, QuadraticFunction, l2_regularizer

__all__ = [
    "AbstractBatchFunction",
    "AbstractDifferentiableBatchFunction",
    "ValueGradient",
    "full_batch",
    "FunctionAsBatchFunction",
    "AddBatchFunctions",
    "AddFunctions",
    "NegateBatchFunction",
    "NegateFunction",
    "ScaleBatchFunction",
    "ScaleFunction",
    "add",
    "negate",
    "scale",
    "LeastSquaresBatchFunction",
    "QuadraticFunction",
    "l2_regularizer",
]
