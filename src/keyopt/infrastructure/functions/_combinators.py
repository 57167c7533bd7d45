"""
Algebraic combinators over differentiable functions.

Composite objectives (e.g., a negative log-likelihood plus a regularizer)
are built by wrapping existing functions instead of modifying them:

- `ScaleFunction(f, m)`: `m * f`
- `NegateFunction(f)`: `-f`, i.e. `ScaleFunction(f, -1.0)`
- `AddFunctions(f1, ..., fn)`: `f1 + ... + fn`

Each has a batch counterpart (`ScaleBatchFunction`, `NegateBatchFunction`,
`AddBatchFunctions`) that forwards the batch argument and the example count.
The factories `scale`, `negate` and `add` choose the batch counterpart when
every child is a differentiable batch function.

Gradient semantics
------------------
Following the capability contract, every `get_gradient` adds into the
caller's storage. Children are evaluated into scratch storage of the same
kind as the caller's (dense or sparse) and then added, so a combinator never
disturbs entries that were already present in the caller's storage.
"""

from __future__ import annotations

from typing import Optional, Sequence, Union

from ...domain._errors import DimensionMismatchError, ExampleCountMismatchError
from ...domain._function import IDifferentiableBatchFunction, IDifferentiableFunction
from ...domain._vector import IVector


def _scratch_like(gradient: IVector) -> IVector:
    """Return zeroed storage with the same type and length as `gradient`."""
    tmp = gradient.copy()
    tmp.zero()
    return tmp


class ScaleFunction:
    """
    Wrapper which scales the input function by a constant multiplier.

    Parameters
    ----------
    function : IDifferentiableFunction
        The wrapped function.
    multiplier : float
        The constant `m` in `m * f`.
    """

    def __init__(self, function: IDifferentiableFunction, multiplier: float) -> None:
        self._function = function
        self._multiplier = float(multiplier)

    @property
    def multiplier(self) -> float:
        return self._multiplier

    def set_point(self, point: IVector) -> None:
        self._function.set_point(point)

    def get_value(self) -> float:
        return self._multiplier * self._function.get_value()

    def get_gradient(self, gradient: IVector) -> None:
        tmp = _scratch_like(gradient)
        self._function.get_gradient(tmp)
        tmp.scale(self._multiplier)
        gradient.add_vector(tmp)

    def get_num_dimensions(self) -> int:
        return self._function.get_num_dimensions()


class NegateFunction(ScaleFunction):
    """Wrapper which negates the input function."""

    def __init__(self, function: IDifferentiableFunction) -> None:
        super().__init__(function, -1.0)


class AddFunctions:
    """
    Wrapper which adds the input functions.

    Parameters
    ----------
    *functions : IDifferentiableFunction
        One or more functions of identical dimensionality.

    Raises
    ------
    ValueError
        If no function is given.
    DimensionMismatchError
        If the functions report different numbers of dimensions.
    """

    def __init__(self, *functions: IDifferentiableFunction) -> None:
        if not functions:
            raise ValueError("AddFunctions requires at least one function")
        num_dims = functions[0].get_num_dimensions()
        for f in functions[1:]:
            if f.get_num_dimensions() != num_dims:
                raise DimensionMismatchError(num_dims, f.get_num_dimensions())
        self._functions = tuple(functions)

    @property
    def functions(self) -> tuple:
        return self._functions

    def set_point(self, point: IVector) -> None:
        for f in self._functions:
            f.set_point(point)

    def get_value(self) -> float:
        total = 0.0
        for f in self._functions:
            total += f.get_value()
        return total

    def get_gradient(self, gradient: IVector) -> None:
        for f in self._functions:
            tmp = _scratch_like(gradient)
            f.get_gradient(tmp)
            gradient.add_vector(tmp)

    def get_num_dimensions(self) -> int:
        return self._functions[0].get_num_dimensions()


class ScaleBatchFunction:
    """
    Batch counterpart of `ScaleFunction`.

    Parameters
    ----------
    function : IDifferentiableBatchFunction
        The wrapped batch function.
    multiplier : float
        The constant `m` in `m * f`.
    """

    def __init__(
        self, function: IDifferentiableBatchFunction, multiplier: float
    ) -> None:
        self._function = function
        self._multiplier = float(multiplier)

    @property
    def multiplier(self) -> float:
        return self._multiplier

    def set_point(self, point: IVector) -> None:
        self._function.set_point(point)

    def get_value(self, batch: Optional[Sequence[int]] = None) -> float:
        return self._multiplier * self._function.get_value(batch)

    def get_gradient(
        self, gradient: IVector, batch: Optional[Sequence[int]] = None
    ) -> None:
        tmp = _scratch_like(gradient)
        self._function.get_gradient(tmp, batch)
        tmp.scale(self._multiplier)
        gradient.add_vector(tmp)

    def get_num_dimensions(self) -> int:
        return self._function.get_num_dimensions()

    def get_num_examples(self) -> int:
        return self._function.get_num_examples()


class NegateBatchFunction(ScaleBatchFunction):
    """Batch counterpart of `NegateFunction`."""

    def __init__(self, function: IDifferentiableBatchFunction) -> None:
        super().__init__(function, -1.0)


class AddBatchFunctions:
    """
    Batch counterpart of `AddFunctions`.

    All functions must agree on both the number of dimensions and the number
    of examples; a batch index refers to the same example in every function.

    Raises
    ------
    ValueError
        If no function is given.
    DimensionMismatchError
        If the functions report different numbers of dimensions.
    ExampleCountMismatchError
        If the functions report different numbers of examples.
    """

    def __init__(self, *functions: IDifferentiableBatchFunction) -> None:
        if not functions:
            raise ValueError("AddBatchFunctions requires at least one function")
        num_dims = functions[0].get_num_dimensions()
        num_examples = functions[0].get_num_examples()
        for f in functions[1:]:
            if f.get_num_dimensions() != num_dims:
                raise DimensionMismatchError(num_dims, f.get_num_dimensions())
            if f.get_num_examples() != num_examples:
                raise ExampleCountMismatchError(num_examples, f.get_num_examples())
        self._functions = tuple(functions)

    @property
    def functions(self) -> tuple:
        return self._functions

    def set_point(self, point: IVector) -> None:
        for f in self._functions:
            f.set_point(point)

    def get_value(self, batch: Optional[Sequence[int]] = None) -> float:
        total = 0.0
        for f in self._functions:
            total += f.get_value(batch)
        return total

    def get_gradient(
        self, gradient: IVector, batch: Optional[Sequence[int]] = None
    ) -> None:
        for f in self._functions:
            tmp = _scratch_like(gradient)
            f.get_gradient(tmp, batch)
            gradient.add_vector(tmp)

    def get_num_dimensions(self) -> int:
        return self._functions[0].get_num_dimensions()

    def get_num_examples(self) -> int:
        return self._functions[0].get_num_examples()


AnyDifferentiable = Union[IDifferentiableFunction, IDifferentiableBatchFunction]


def scale(
    function: AnyDifferentiable, multiplier: float
) -> Union[ScaleFunction, ScaleBatchFunction]:
    """Return `multiplier * function`, keeping the batch capability if present."""
    if isinstance(function, IDifferentiableBatchFunction):
        return ScaleBatchFunction(function, multiplier)
    return ScaleFunction(function, multiplier)


def negate(
    function: AnyDifferentiable,
) -> Union[NegateFunction, NegateBatchFunction]:
    """Return `-function`, keeping the batch capability if present."""
    if isinstance(function, IDifferentiableBatchFunction):
        return NegateBatchFunction(function)
    return NegateFunction(function)


def add(*functions: AnyDifferentiable) -> Union[AddFunctions, AddBatchFunctions]:
    """
    Return the sum of `functions`.

    The batch counterpart is used only when every function is a
    differentiable batch function.
    """
    if functions and all(
        isinstance(f, IDifferentiableBatchFunction) for f in functions
    ):
        return AddBatchFunctions(*functions)
    return AddFunctions(*functions)
