"""
Objective function capability contracts.

This module defines the capabilities an objective can declare:

- `IFunction`: evaluable at a bound point.
- `IDifferentiableFunction`: additionally writes its gradient.
- `IBatchFunction`: evaluable on a subset of examples; reports its example
  count.
- `IDifferentiableBatchFunction`: both differentiable and batched.

The capabilities are structural (`typing.Protocol`) rather than a class
tower: an object supports a capability by providing its members, and
adapters between capabilities (see `FunctionAsBatchFunction`) are explicit
wrapper types.

Conventions
-----------
- `set_point(point)` must be called before any evaluation; evaluations use
  the most recently bound point.
- Gradient methods add their contribution into caller-supplied storage and
  never allocate it; callers pass zeroed storage to obtain the gradient
  itself.
- For batch capabilities, `batch=None` means "all examples" and must give
  exactly what the explicit range `[0, num_examples)` gives.
"""

from __future__ import annotations

from typing import Optional, Protocol, Sequence, runtime_checkable

from ._vector import IVector


@runtime_checkable
class IFunction(Protocol):
    """
    A scalar-valued function of a point with a fixed number of dimensions.
    """

    def set_point(self, point: IVector) -> None:
        """Bind the point at which subsequent evaluations take place."""
        ...

    def get_value(self) -> float:
        """Return the value at the bound point."""
        ...

    def get_num_dimensions(self) -> int:
        """Return the dimensionality of the domain."""
        ...


@runtime_checkable
class IDifferentiableFunction(IFunction, Protocol):
    """
    A function that can also report its gradient.
    """

    def get_gradient(self, gradient: IVector) -> None:
        """
        Add the gradient at the bound point into `gradient`.
        """
        ...


@runtime_checkable
class IBatchFunction(IFunction, Protocol):
    """
    A function defined as an aggregate over a fixed set of examples.
    """

    def get_value(self, batch: Optional[Sequence[int]] = None) -> float:
        """
        Return the value restricted to the examples in `batch`.

        Parameters
        ----------
        batch : Optional[Sequence[int]]
            Example indices in `[0, num_examples)`; duplicates are permitted.
            `None` means every example.
        """
        ...

    def get_num_examples(self) -> int:
        """Return the number of examples."""
        ...


@runtime_checkable
class IDifferentiableBatchFunction(IBatchFunction, Protocol):
    """
    A batch function that can also report its gradient over a batch.
    """

    def get_gradient(
        self, gradient: IVector, batch: Optional[Sequence[int]] = None
    ) -> None:
        """
        Add the gradient restricted to the examples in `batch` into `gradient`.

        Parameters
        ----------
        gradient : IVector
            Caller-owned storage of length `get_num_dimensions()`.
        batch : Optional[Sequence[int]]
            Example indices; `None` means every example.
        """
        ...
