from __future__ import annotations

import numpy as np

from fourier_viewer.errors import EmptySignalError, SizeMismatchError


def hann(m: int) -> np.ndarray:
    """Symmetric Hann window ``w[n] = 0.5 - 0.5*cos(2*pi*n/(m-1))``.

    ``hann(1)`` is ``[1.0]``. The second half mirrors the first so that
    ``w[n] == w[m-1-n]`` holds exactly.
    """
    m = int(m)
    if m < 1:
        raise EmptySignalError(f"window length must be >= 1, got {m}")
    if m == 1:
        return np.ones(1, dtype=float)

    n = np.arange((m + 1) // 2, dtype=float)
    head = 0.5 - 0.5 * np.cos(2.0 * np.pi * n / (m - 1))
    w = np.empty(m, dtype=float)
    w[: head.size] = head
    w[m - head.size :] = head[::-1]
    return w


def apply_window(frame: np.ndarray, w: np.ndarray) -> np.ndarray:
    """Multiply ``frame`` by ``w`` elementwise, in place. Returns ``frame``."""
    w = np.asarray(w)
    if len(frame) != len(w):
        raise SizeMismatchError(f"window length {len(w)} does not match frame length {len(frame)}")
    frame *= w
    return frame
