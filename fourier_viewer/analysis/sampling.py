"""Turn an evaluator into discrete sample sequences.

Both samplers call the evaluator exactly once per index, strictly in
ascending index order; evaluators may hold state, so this ordering is part
of the contract.

An evaluation that raises :class:`~fourier_viewer.errors.EvaluatorError`
does not abort the pass: ``0.0`` is stored for that sample, its index is
recorded in ``SampledSignal.failed`` and a warning is added. Arithmetic
results are never substituted: NaN and Inf are kept as returned and
reported. Other exceptions from a plain callable propagate.
"""

from __future__ import annotations

from typing import Callable, Sequence

import numpy as np

from fourier_viewer.errors import EmptySignalError, EvaluatorError, InvalidRangeError, NonFiniteResultError
from fourier_viewer.expression import EvaluatorLike, as_callable
from fourier_viewer.models.signals import SampledSignal


# Only an explicit "no value for this x" from the evaluator becomes a failed sample.
EVALUATION_ERRORS = (EvaluatorError,)

FAILED_SAMPLE_VALUE = 0.0


def _summarize_indices(idx: Sequence[int], limit: int = 10) -> str:
    head = ", ".join(str(i) for i in idx[:limit])
    return head + (", ..." if len(idx) > limit else "")


def evaluate_grid(evaluate: EvaluatorLike, x: np.ndarray) -> SampledSignal:
    """Evaluate at each abscissa of ``x`` in order, once per index."""
    f: Callable[[float], float] = as_callable(evaluate)
    x = np.asarray(x, dtype=float)
    y = np.empty(x.size, dtype=float)

    failed: list[int] = []
    first_error = None
    for i in range(x.size):
        try:
            y[i] = float(f(float(x[i])))
        except EVALUATION_ERRORS as exc:
            y[i] = FAILED_SAMPLE_VALUE
            failed.append(i)
            if first_error is None:
                first_error = exc

    warnings: list[str] = []
    if failed:
        warnings.append(
            f"evaluator failed at {len(failed)}/{x.size} samples (indices {_summarize_indices(failed)}); "
            f"substituted {FAILED_SAMPLE_VALUE}: {first_error}"
        )
    bad = np.flatnonzero(~np.isfinite(y))
    if bad.size:
        warnings.append(f"non-finite samples at {bad.size}/{x.size} indices ({_summarize_indices(bad.tolist())})")

    return SampledSignal(x=x, y=y, failed=tuple(failed), warnings=tuple(warnings))


def sample(evaluate: EvaluatorLike, n: int, fs: float) -> SampledSignal:
    """Uniform-rate sampling: ``y[k] = evaluate(k/fs)`` for ``k = 0..n-1``."""
    n = int(n)
    if n < 0:
        raise EmptySignalError(f"n must be >= 0, got {n}")
    fs = float(fs)
    if not np.isfinite(fs) or fs <= 0.0:
        raise InvalidRangeError(f"fs must be finite and > 0, got {fs!r}")

    x = np.array([k / fs for k in range(n)], dtype=float)
    return evaluate_grid(evaluate, x)


def linear_grid(n: int, x_min: float, x_max: float) -> np.ndarray:
    """``x_min + (i/(n-1))*(x_max-x_min)`` for ``i = 0..n-1``."""
    n = int(n)
    if n < 2:
        raise EmptySignalError(f"n must be >= 2 for a linear grid, got {n}")
    x_min = float(x_min)
    x_max = float(x_max)
    t = np.arange(n, dtype=float) / float(n - 1)
    return x_min + t * (x_max - x_min)


def generate_linear(n: int, x_min: float, x_max: float, evaluate: EvaluatorLike) -> SampledSignal:
    """Sample ``evaluate`` at ``n`` linearly spaced points over ``[x_min, x_max]``."""
    return evaluate_grid(evaluate, linear_grid(n, x_min, x_max))


def zero_mean(signal: np.ndarray) -> np.ndarray:
    """Subtract the arithmetic mean from every sample, in place.

    ``signal`` must be a non-empty float array; it is also returned.
    """
    if not isinstance(signal, np.ndarray):
        raise TypeError(f"zero_mean works in place on a numpy array, got {type(signal).__name__}")
    if signal.size == 0:
        raise EmptySignalError("zero_mean requires a non-empty signal")
    if not np.issubdtype(signal.dtype, np.floating):
        raise TypeError(f"zero_mean requires a float array, got dtype {signal.dtype}")
    signal -= np.mean(signal)
    return signal


def ensure_finite(values: np.ndarray, *, what: str = "signal") -> np.ndarray:
    """Raise :class:`NonFiniteResultError` if ``values`` holds NaN or Inf."""
    arr = np.asarray(values)
    bad = np.flatnonzero(~np.isfinite(arr))
    if bad.size:
        raise NonFiniteResultError(
            f"{what} has {bad.size} non-finite values (indices {_summarize_indices(bad.tolist())})"
        )
    return arr
