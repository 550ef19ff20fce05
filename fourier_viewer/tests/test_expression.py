from __future__ import annotations

import math

import numpy as np
import pytest

from fourier_viewer.analysis.fourier import compute_transform
from fourier_viewer.analysis.sampling import generate_linear
from fourier_viewer.errors import EvaluatorError, ExpressionParseError
from fourier_viewer.expression import ExpressionEvaluator, FunctionEvaluator, as_callable


def test_basic_expressions() -> None:
    ev = ExpressionEvaluator("sin(x)")
    assert ev.evaluate(0.5) == pytest.approx(math.sin(0.5))
    ev.set_expression("exp(-x^2)")
    assert ev.evaluate(1.0) == pytest.approx(math.exp(-1.0))
    ev.set_expression("2x + 1")
    assert ev.evaluate(3.0) == pytest.approx(7.0)
    ev.set_expression("pi")
    assert ev.evaluate(123.0) == pytest.approx(math.pi)


def test_satisfies_protocol() -> None:
    assert isinstance(ExpressionEvaluator("x"), FunctionEvaluator)


def test_last_x_is_remembered() -> None:
    ev = ExpressionEvaluator("x*x")
    ev.evaluate(4.0)
    assert ev.last_x == 4.0


def test_parse_error_keeps_previous_function() -> None:
    ev = ExpressionEvaluator("cos(x)")
    with pytest.raises(ExpressionParseError):
        ev.set_expression("sin(")
    assert ev.has_error
    assert "sin(" in ev.last_error
    assert ev.expression == "cos(x)"
    assert ev.evaluate(0.0) == pytest.approx(1.0)

    ev.set_expression("x")
    assert ev.last_error is None


def test_unknown_symbols_rejected() -> None:
    ev = ExpressionEvaluator()
    with pytest.raises(ExpressionParseError, match="y"):
        ev.set_expression("x + y")


def test_empty_expression_rejected() -> None:
    with pytest.raises(ExpressionParseError):
        ExpressionEvaluator("   ")


def test_evaluate_without_expression() -> None:
    with pytest.raises(EvaluatorError):
        ExpressionEvaluator().evaluate(1.0)


def test_ieee_values_at_poles_and_domain_edges() -> None:
    assert ExpressionEvaluator("1/x").evaluate(0.0) == math.inf
    assert ExpressionEvaluator("exp(x)").evaluate(1000.0) == math.inf
    assert ExpressionEvaluator("log(x)").evaluate(0.0) == -math.inf
    assert math.isnan(ExpressionEvaluator("sqrt(x)").evaluate(-1.0))


def test_non_finite_samples_are_not_failures() -> None:
    ev = ExpressionEvaluator("1/x")
    sig = generate_linear(5, -1.0, 1.0, ev)
    assert sig.failed == ()
    assert np.isposinf(sig.y[2])
    assert sig.y[0] == pytest.approx(-1.0)
    assert any("non-finite" in m for m in sig.warnings)


def test_nan_reaches_the_spectrum() -> None:
    spec = compute_transform(ExpressionEvaluator("sqrt(x)"), 0.0, 1.0, 8)
    assert math.isnan(spec.max_amp)
    assert np.isnan(spec.magn).all()


def test_as_callable() -> None:
    ev = ExpressionEvaluator("x + 1")
    assert as_callable(ev)(1.0) == pytest.approx(2.0)
    f = lambda x: 3.0 * x
    assert as_callable(f) is f
    with pytest.raises(TypeError):
        as_callable(42)


def test_unknown_functions_rejected() -> None:
    with pytest.raises(ExpressionParseError, match="foo"):
        ExpressionEvaluator("foo(x)")
