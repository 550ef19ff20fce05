"""Evaluator capability and a sympy-backed expression evaluator.

The analysis engine only ever needs ``evaluate(x) -> float``. Any plain
callable ``f(x)`` satisfies that; :class:`ExpressionEvaluator` adds the
text front-end used by the GUI.

Values follow IEEE semantics: a pole gives ``inf``, overflow gives ``inf`` and
a domain error gives ``nan`` (``1/x`` at 0, ``exp(1000)``, ``sqrt(-1)``).
Only an evaluator that cannot produce a number at all raises
:class:`~fourier_viewer.errors.EvaluatorError`.

Notes
-----
``parse_expr`` evaluates Python code internally. It is meant for
expressions typed by the local notebook user, not for untrusted input.
"""

from __future__ import annotations

from tokenize import TokenError
from typing import Callable, Optional, Protocol, Union, runtime_checkable

import numpy as np
import sympy as sp
from sympy.core.function import AppliedUndef
from sympy.parsing.sympy_parser import (
    convert_xor,
    implicit_multiplication_application,
    parse_expr,
    standard_transformations,
)

from fourier_viewer.errors import EvaluatorError, ExpressionParseError


_TRANSFORMS = standard_transformations + (implicit_multiplication_application, convert_xor)
_X = sp.Symbol("x", real=True)


@runtime_checkable
class FunctionEvaluator(Protocol):
    def evaluate(self, x: float) -> float: ...

    def set_expression(self, expr: str) -> None: ...

    @property
    def last_error(self) -> Optional[str]: ...


EvaluatorLike = Union[FunctionEvaluator, Callable[[float], float]]


def as_callable(evaluator: EvaluatorLike) -> Callable[[float], float]:
    """Return a plain ``f(x)`` for either an evaluator object or a callable."""
    evaluate = getattr(evaluator, "evaluate", None)
    if callable(evaluate):
        return evaluate
    if callable(evaluator):
        return evaluator
    raise TypeError(f"Expected a callable or an object with evaluate(x), got {type(evaluator).__name__}")


class ExpressionEvaluator:
    """Parse ``f(x)`` once, then evaluate it at many points.

    A failed :meth:`set_expression` keeps the previously compiled function and
    records the message in :attr:`last_error`. The last bound ``x`` is kept in
    :attr:`last_x`.
    """

    def __init__(self, expr: Optional[str] = None) -> None:
        self._expr_text: Optional[str] = None
        self._expr: Optional[sp.Expr] = None
        self._func: Optional[Callable[[float], object]] = None
        self._last_error: Optional[str] = None
        self.last_x: Optional[float] = None
        if expr is not None:
            self.set_expression(expr)

    @property
    def expression(self) -> Optional[str]:
        return self._expr_text

    @property
    def last_error(self) -> Optional[str]:
        return self._last_error

    @property
    def has_error(self) -> bool:
        return self._last_error is not None

    def set_expression(self, expr: str) -> None:
        text = (expr or "").strip()
        if not text:
            self._last_error = "Empty expression"
            raise ExpressionParseError(self._last_error)
        try:
            parsed = parse_expr(text, local_dict={"x": _X}, transformations=_TRANSFORMS)
        except (SyntaxError, TokenError, TypeError, ValueError, AttributeError, NameError, sp.SympifyError) as exc:
            self._last_error = f"Cannot parse {text!r}: {exc}"
            raise ExpressionParseError(self._last_error) from exc

        if not isinstance(parsed, sp.Expr):
            self._last_error = f"Not a numeric expression: {text!r}"
            raise ExpressionParseError(self._last_error)
        unknown = sorted(str(s) for s in parsed.free_symbols if s != _X)
        if unknown:
            self._last_error = f"Unknown symbols in {text!r}: {', '.join(unknown)}"
            raise ExpressionParseError(self._last_error)
        undefined = sorted(str(f.func) for f in parsed.atoms(AppliedUndef))
        if undefined:
            self._last_error = f"Unknown functions in {text!r}: {', '.join(undefined)}"
            raise ExpressionParseError(self._last_error)

        self._expr_text = text
        self._expr = parsed
        self._func = sp.lambdify(_X, parsed, modules="numpy")
        self._last_error = None

    def evaluate(self, x: float) -> float:
        if self._func is None:
            raise EvaluatorError(self._last_error or "No expression set")
        self.last_x = float(x)
        try:
            with np.errstate(all="ignore"):
                value = self._func(np.float64(self.last_x))
        except (ArithmeticError, TypeError, ValueError) as exc:
            raise EvaluatorError(f"Cannot evaluate {self._expr_text!r} at x={x!r}: {exc}") from exc
        if isinstance(value, np.ndarray) and value.size == 1:
            value = value.item()
        if isinstance(value, complex):
            if value.imag != 0.0:
                raise EvaluatorError(f"Complex value at x={x!r}: {value!r}")
            value = value.real
        try:
            return float(value)
        except TypeError as exc:
            raise EvaluatorError(f"Non-numeric value at x={x!r}: {value!r}") from exc

    def __call__(self, x: float) -> float:
        return self.evaluate(x)

    def __repr__(self) -> str:
        return f"ExpressionEvaluator({self._expr_text!r})"
