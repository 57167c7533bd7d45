"""
Configuration, invariant, and usage errors for keyopt.

This module defines the custom exceptions raised by the optimization core.
They fall into three groups:

- Configuration errors (subclasses of `ValueError`), raised eagerly when an
  object is constructed or initialized with inconsistent settings.
- Invariant violations (subclasses of `RuntimeError`), raised at the point of
  detection when numeric state has been corrupted upstream. They are never
  recovered from inside the optimizer.
- Usage errors (subclasses of `RuntimeError`), raised when a caller asks an
  object for something it cannot provide.

Reaching the step budget or a wall-clock deadline is normal termination and
is not represented here.
"""

from __future__ import annotations


class DimensionMismatchError(ValueError):
    """
    Raised when two dimension counts that must agree do not.

    Typical sources are `AddFunctions` over functions of different
    dimensionality and vector arithmetic between vectors of different length.

    Attributes
    ----------
    expected : int
        The dimension count that was required.
    actual : int
        The dimension count that was observed.
    """

    def __init__(self, expected: int, actual: int, what: str = "dimensions") -> None:
        """
        Initialize the DimensionMismatchError.

        Parameters
        ----------
        expected : int
            Required dimension count.
        actual : int
            Observed dimension count.
        what : str, optional
            Short description of the quantity being compared.
        """
        super().__init__(
            f"Mismatched {what}: expected {expected}, got {actual}."
        )
        self.expected = int(expected)
        self.actual = int(actual)


class ExampleCountMismatchError(ValueError):
    """
    Raised when batch functions combined together report different numbers
    of examples.
    """

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            f"Mismatched number of examples: expected {expected}, got {actual}."
        )
        self.expected = int(expected)
        self.actual = int(actual)


class BatchSizeError(ValueError):
    """
    Raised when a batch size cannot be served without replacement.

    Attributes
    ----------
    batch_size : int
        The requested batch size.
    num_examples : int
        The number of examples available to draw from.
    """

    def __init__(self, batch_size: int, num_examples: int) -> None:
        super().__init__(
            f"Batch size {batch_size} exceeds the number of examples "
            f"{num_examples}; sampling without replacement is impossible."
        )
        self.batch_size = int(batch_size)
        self.num_examples = int(num_examples)


class InvalidHyperparameterError(ValueError):
    """
    Raised when a configuration value lies outside its admissible range.

    Attributes
    ----------
    name : str
        Name of the offending hyperparameter.
    value : float
        The rejected value.
    """

    def __init__(self, name: str, value: float, requirement: str) -> None:
        """
        Initialize the InvalidHyperparameterError.

        Parameters
        ----------
        name : str
            Name of the hyperparameter (e.g., "constant_addend").
        value : float
            The rejected value.
        requirement : str
            Human-readable admissible range (e.g., "> 0").
        """
        super().__init__(f"{name} must be {requirement}, got {value}")
        self.name = name
        self.value = value


class AccumulatorInvariantError(RuntimeError):
    """
    Raised when an adaptive schedule observes a negative accumulator.

    Squared-gradient and squared-update accumulators are convex combinations
    of non-negative numbers; a negative entry means the state was corrupted.

    Attributes
    ----------
    accumulator : str
        Name of the accumulator ("gradient" or "update").
    index : int
        Parameter index of the first negative entry.
    value : float
        The negative value found.
    """

    def __init__(self, accumulator: str, index: int, value: float) -> None:
        super().__init__(
            f"{accumulator.capitalize()} accumulator is < 0 at index {index}: {value}"
        )
        self.accumulator = accumulator
        self.index = int(index)
        self.value = float(value)


class NonFiniteLearningRateError(RuntimeError):
    """
    Raised when a computed learning rate is NaN or infinite.

    Attributes
    ----------
    index : int
        Parameter index of the first non-finite rate.
    value : float
        The non-finite value.
    """

    def __init__(self, index: int, value: float) -> None:
        super().__init__(f"Non-finite learning rate at index {index}: {value}")
        self.index = int(index)
        self.value = float(value)


class NoGlobalLearningRateError(RuntimeError):
    """
    Raised when a single shared learning rate is requested from a schedule
    whose rates are strictly per-parameter.
    """

    def __init__(self, schedule: str) -> None:
        super().__init__(f"{schedule} has no eta0 parameter.")
        self.schedule = schedule
