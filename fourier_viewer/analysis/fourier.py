"""Direct discrete Fourier transform and the centred display spectrum.

Functions
---------
twiddle
    Elementary DFT coefficient ``exp(-i*2*pi*k*n/N)``.
dft
    Full transform ``X[k] = sum_n x[n]*twiddle(k, n, N)``. The direct O(N^2)
    sum is the reference; ``method="fft"`` (power-of-two N only) gives the
    same values within floating tolerance.
bin_freq
    Hz value of bin ``k`` for a given sample rate.
compute_transform
    Sample an evaluator over ``[center-range, center+range)``, transform,
    centre the bins and normalise by N.
"""

from __future__ import annotations

from typing import Literal

import numpy as np

from fourier_viewer.analysis.sampling import evaluate_grid
from fourier_viewer.errors import EmptySignalError, InvalidRangeError
from fourier_viewer.expression import EvaluatorLike
from fourier_viewer.models.spectrum import FourierSpectrum


DftMethod = Literal["direct", "fft", "auto"]

# Rows of the twiddle matrix built at once; bounds memory to _BLOCK_ROWS*N complex values.
_BLOCK_ROWS = 256


def is_power_of_two(n: int) -> bool:
    n = int(n)
    return n > 0 and (n & (n - 1)) == 0


def twiddle(k, n, N: int):
    """``cos(-2*pi*k*n/N) + i*sin(-2*pi*k*n/N)``; broadcasts over array ``k``/``n``."""
    ang = -2.0 * np.pi * k * n / N
    return np.cos(ang) + 1j * np.sin(ang)


def _dft_direct(x: np.ndarray) -> np.ndarray:
    N = x.size
    n = np.arange(N, dtype=np.int64)
    X = np.empty(N, dtype=complex)
    for k0 in range(0, N, _BLOCK_ROWS):
        k = np.arange(k0, min(k0 + _BLOCK_ROWS, N), dtype=np.int64)
        X[k0 : k0 + k.size] = twiddle(k[:, None], n[None, :], N) @ x
    return X


def dft(x: np.ndarray, *, method: DftMethod = "direct") -> np.ndarray:
    """Complex spectrum of ``x``, bin ``k`` at index ``k``.

    Parameters
    ----------
    x:
        1D sample array (real or complex).
    method:
        "direct" evaluates the defining sum. "fft" uses :func:`numpy.fft.fft` and
        requires a power-of-two length. "auto" picks "fft" for power-of-two lengths.
    """
    x = np.asarray(x)
    if x.ndim != 1:
        raise ValueError(f"x must be 1D, got shape {x.shape}")
    N = x.size
    if N == 0:
        return np.zeros(0, dtype=complex)

    if method == "auto":
        method = "fft" if is_power_of_two(N) else "direct"
    if method == "fft":
        if not is_power_of_two(N):
            raise ValueError(f"method='fft' requires a power-of-two length, got N={N}")
        return np.fft.fft(x).astype(complex, copy=False)
    if method != "direct":
        raise ValueError(f"method must be 'direct', 'fft' or 'auto', got {method!r}")
    return _dft_direct(x)


def bin_freq(k, n: int, fs: float):
    """Linear Hz mapping ``k*fs/n``."""
    return k * float(fs) / n


def centered_indices(n: int) -> np.ndarray:
    """Index map ``(i + n//2) % n`` that moves the most negative frequency to index 0."""
    return (np.arange(n) + n // 2) % n


def compute_transform(
    evaluate: EvaluatorLike,
    center: float,
    half_range: float,
    n: int,
    *,
    method: DftMethod = "direct",
) -> FourierSpectrum:
    r"""Centred magnitude spectrum of ``evaluate`` over ``[center-half_range, center+half_range)``.

    Steps: ``T = 2*half_range``, ``dt = T/n``, ``w_max = pi/dt``; sample at
    ``(center-half_range) + k*dt``; full DFT; circular shift
    ``Xs[i] = X[(i + n//2) % n]``; ``freqs[k] = -w_max + 2*w_max*k/n``;
    ``magn = |Xs|/n``; ``max_amp = max(magn)``.

    Raises
    ------
    InvalidRangeError
        ``half_range`` not finite and > 0, ``center`` not finite, or ``dt`` underflowing.
    EmptySignalError
        ``n < 2``.
    """
    n = int(n)
    if n < 2:
        raise EmptySignalError(f"n must be >= 2, got {n}")
    center = float(center)
    half_range = float(half_range)
    if not np.isfinite(half_range) or half_range <= 0.0:
        raise InvalidRangeError(f"range must be finite and > 0, got {half_range!r}")
    if not np.isfinite(center):
        raise InvalidRangeError(f"center must be finite, got {center!r}")

    T = 2.0 * half_range
    dt = T / n
    if dt <= 0.0:
        raise InvalidRangeError(f"sample spacing underflows to 0 (range={half_range!r}, n={n})")
    w_max = np.pi / dt
    if not np.isfinite(w_max):
        raise InvalidRangeError(f"w_max is not finite (dt={dt!r})")

    x = (center - half_range) + np.arange(n, dtype=float) * dt
    sig = evaluate_grid(evaluate, x)

    X = dft(sig.y, method=method)
    Xs = X[centered_indices(n)]

    k = np.arange(n, dtype=float)
    freqs = -w_max + 2.0 * w_max * k / n
    magn = np.abs(Xs) / n

    return FourierSpectrum(
        freqs=freqs,
        magn=magn,
        w_max=float(w_max),
        max_amp=float(np.max(magn)),
        warnings=sig.warnings,
    )
