from __future__ import annotations

import math

import numpy as np
import pytest

from fourier_viewer.analysis.sampling import ensure_finite, generate_linear, sample, zero_mean
from fourier_viewer.errors import EmptySignalError, EvaluatorError, InvalidRangeError, NonFiniteResultError


def test_sample_length_and_values() -> None:
    f = lambda x: math.sin(3.0 * x) + x * x
    for n, fs in [(2, 1.0), (17, 8.0), (100, 44.1)]:
        sig = sample(f, n, fs)
        assert len(sig) == n
        for k in range(n):
            assert sig.y[k] == f(k / fs)
        assert sig.ok
        assert sig.warnings == ()


def test_sample_calls_evaluator_once_per_index_in_order() -> None:
    calls = []

    def f(x: float) -> float:
        calls.append(x)
        return float(len(calls))

    sig = sample(f, 6, 2.0)
    assert calls == [k / 2.0 for k in range(6)]
    # stateful evaluator: value equals call position
    assert np.array_equal(sig.y, np.arange(1.0, 7.0))


def test_sample_rejects_non_positive_rate() -> None:
    with pytest.raises(InvalidRangeError):
        sample(lambda x: x, 8, 0.0)
    with pytest.raises(InvalidRangeError):
        sample(lambda x: x, 8, float("nan"))


def test_generate_linear_grid() -> None:
    sig = generate_linear(5, -1.0, 1.0, lambda x: 2.0 * x)
    assert np.allclose(sig.x, [-1.0, -0.5, 0.0, 0.5, 1.0])
    assert sig.x[0] == -1.0
    assert sig.x[-1] == 1.0
    assert np.allclose(sig.y, 2.0 * sig.x)


def test_generate_linear_requires_two_samples() -> None:
    with pytest.raises(EmptySignalError):
        generate_linear(1, 0.0, 1.0, lambda x: x)
    with pytest.raises(EmptySignalError):
        generate_linear(0, 0.0, 1.0, lambda x: x)


def test_evaluator_failure_substitutes_zero_and_continues() -> None:
    def f(x: float) -> float:
        if x == 0.0:
            raise EvaluatorError("bad point")
        return 1.0 / x

    sig = generate_linear(5, -2.0, 2.0, f)
    assert len(sig) == 5
    assert sig.failed == (2,)
    assert sig.y[2] == 0.0
    assert sig.y[0] == pytest.approx(-0.5)
    assert sig.y[4] == pytest.approx(0.5)
    assert len(sig.warnings) == 1
    assert "bad point" in sig.warnings[0]


def test_plain_callable_exceptions_propagate() -> None:
    with pytest.raises(ValueError):
        generate_linear(3, -1.0, 1.0, lambda x: math.sqrt(x))


def test_non_finite_values_propagate_with_warning() -> None:
    sig = sample(lambda x: float("inf") if x == 1.0 else x, 3, 1.0)
    assert np.isinf(sig.y[1])
    assert sig.failed == ()
    assert any("non-finite" in m for m in sig.warnings)


def test_zero_mean_in_place() -> None:
    x = np.array([1.0, 2.0, 3.0, 10.0])
    out = zero_mean(x)
    assert out is x
    assert abs(np.mean(x)) < 1e-12
    assert np.allclose(x, [-3.0, -2.0, -1.0, 6.0])


def test_zero_mean_random_signals() -> None:
    rng = np.random.default_rng(0)
    for n in (1, 2, 7, 128):
        x = rng.normal(5.0, 3.0, n)
        zero_mean(x)
        assert abs(np.mean(x)) < 1e-12


def test_zero_mean_rejects_empty() -> None:
    with pytest.raises(EmptySignalError):
        zero_mean(np.zeros(0))


def test_ensure_finite() -> None:
    x = np.array([0.0, 1.0])
    assert ensure_finite(x) is x
    with pytest.raises(NonFiniteResultError):
        ensure_finite(np.array([0.0, np.nan, 1.0]))
