import unittest

from keyopt.domain._function import (
    IBatchFunction,
    IDifferentiableBatchFunction,
    IDifferentiableFunction,
    IFunction,
)
from keyopt.domain._gain_schedule import IGainSchedule
from keyopt.domain._optimizers import IOptimizer, IOptimizerObserver
from keyopt.domain._vector import IVector
from keyopt.infrastructure.functions._adapters import FunctionAsBatchFunction
from keyopt.infrastructure.functions._combinators import (
    AddBatchFunctions,
    AddFunctions,
    NegateBatchFunction,
    NegateFunction,
    ScaleFunction,
)
from keyopt.infrastructure.functions._objectives import (
    LeastSquaresBatchFunction,
    QuadraticFunction,
)
from keyopt.infrastructure.observers._observers import (
    CompositeObserver,
    LoggingObserver,
    RecordingObserver,
)
from keyopt.infrastructure.optimizers._sgd import SGD
from keyopt.infrastructure.schedules._adadelta import AdaDeltaSchedule
from keyopt.infrastructure.schedules._adagrad import AdaGradSchedule
from keyopt.infrastructure.schedules._bottou import BottouSchedule
from keyopt.infrastructure.vectors._dense import DenseVector
from keyopt.infrastructure.vectors._sparse import SparseVector


def _least_squares() -> LeastSquaresBatchFunction:
    return LeastSquaresBatchFunction([[1.0, 0.0], [0.0, 2.0]], [1.0, 2.0])


class TestVectorProtocol(unittest.TestCase):
    def test_dense_vector_conforms_to_ivector(self):
        self.assertIsInstance(DenseVector.zeros(3), IVector)

    def test_sparse_vector_conforms_to_ivector(self):
        self.assertIsInstance(SparseVector(3), IVector)


class TestFunctionCapabilities(unittest.TestCase):
    def test_quadratic_is_differentiable_but_not_batched(self):
        f = QuadraticFunction([0.0, 0.0])
        self.assertIsInstance(f, IFunction)
        self.assertIsInstance(f, IDifferentiableFunction)
        self.assertNotIsInstance(f, IBatchFunction)
        self.assertNotIsInstance(f, IDifferentiableBatchFunction)

    def test_least_squares_is_differentiable_batch(self):
        f = _least_squares()
        self.assertIsInstance(f, IBatchFunction)
        self.assertIsInstance(f, IDifferentiableBatchFunction)

    def test_adapter_adds_batch_capability(self):
        f = FunctionAsBatchFunction(QuadraticFunction([0.0]), num_examples=4)
        self.assertIsInstance(f, IDifferentiableBatchFunction)

    def test_plain_combinators_are_not_batched(self):
        q = QuadraticFunction([1.0])
        for f in (ScaleFunction(q, 2.0), NegateFunction(q), AddFunctions(q, q)):
            self.assertIsInstance(f, IDifferentiableFunction)
            self.assertNotIsInstance(f, IBatchFunction)

    def test_batch_combinators_are_batched(self):
        f = _least_squares()
        for g in (NegateBatchFunction(f), AddBatchFunctions(f, f)):
            self.assertIsInstance(g, IDifferentiableBatchFunction)


class TestScheduleProtocol(unittest.TestCase):
    def test_schedules_conform_to_igainschedule(self):
        for s in (BottouSchedule(), AdaGradSchedule(), AdaDeltaSchedule()):
            self.assertIsInstance(s, IGainSchedule)


class TestOptimizerProtocol(unittest.TestCase):
    def test_sgd_conforms_to_ioptimizer(self):
        self.assertIsInstance(SGD(), IOptimizer)

    def test_observers_conform_to_ioptimizerobserver(self):
        for o in (LoggingObserver(), RecordingObserver(), CompositeObserver()):
            self.assertIsInstance(o, IOptimizerObserver)


if __name__ == "__main__":
    unittest.main()
