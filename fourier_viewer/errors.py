"""Error kinds raised at the analysis boundary.

All value-related errors derive from :class:`ValueError` so that callers
catching the built-in keep working.
"""

from __future__ import annotations


class InvalidRangeError(ValueError):
    """A range, rate or step is not strictly positive and finite."""


class SizeMismatchError(ValueError):
    """Two sequences that must have equal length do not."""


class EmptySignalError(ValueError):
    """Too few samples for the requested step formula."""


class EvaluatorError(RuntimeError):
    """The evaluator could not produce a value."""


class ExpressionParseError(EvaluatorError):
    """The expression text could not be parsed."""


class NonFiniteResultError(ArithmeticError):
    """NaN or Inf found where the caller asked for finite values only."""


__all__ = [
    "InvalidRangeError",
    "SizeMismatchError",
    "EmptySignalError",
    "EvaluatorError",
    "ExpressionParseError",
    "NonFiniteResultError",
]
