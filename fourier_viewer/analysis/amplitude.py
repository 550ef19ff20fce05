from __future__ import annotations

import numpy as np

from fourier_viewer.errors import EmptySignalError


def single_sided(X: np.ndarray) -> np.ndarray:
    """Single-sided amplitude spectrum of a real signal's DFT.

    Returns ``A[0..N//2]`` with ``A[k] = scale*|X[k]|/N``. ``scale`` is 1 for
    DC and, for even N, for the Nyquist bin ``N/2``; 2 elsewhere, since only
    those bins fold a mirrored negative-frequency counterpart.
    """
    X = np.asarray(X)
    if X.ndim != 1:
        raise ValueError(f"X must be 1D, got shape {X.shape}")
    N = X.size
    if N == 0:
        raise EmptySignalError("single_sided requires a non-empty spectrum")

    K = N // 2
    scale = np.full(K + 1, 2.0)
    scale[0] = 1.0
    if N % 2 == 0:
        scale[K] = 1.0
    return scale * np.abs(X[: K + 1]) / N
