"""Carrier-modulated view of a sampled signal.

The carrier is ``exp(-i*pi*n)`` for sample index ``n``, projected per mode:

- "real":      ``cos(pi*n)``, exactly ``(-1)**n``
- "imag":      ``sin(pi*n)``, exactly ``0`` for every integer ``n``
- "magnitude": ``|exp(-i*pi*n)| = 1`` (identity)

Notes
-----
The "imag" mode is degenerate: it always yields zeros (NaN/Inf samples
still propagate as NaN). This follows the per-sample pi-phase carrier
literally rather than a continuous-time phase.
"""

from __future__ import annotations

import numpy as np

from fourier_viewer.analysis.sampling import generate_linear
from fourier_viewer.expression import EvaluatorLike
from fourier_viewer.models.signals import MODULATION_MODES, ModulatedSignal, ModulationMode


def carrier(mode: ModulationMode, n: int) -> np.ndarray:
    """Projected carrier for indices ``0..n-1``."""
    idx = np.arange(int(n))
    if mode == "real":
        return np.where(idx % 2 == 0, 1.0, -1.0)
    if mode == "imag":
        return np.zeros(idx.size, dtype=float)
    if mode == "magnitude":
        return np.ones(idx.size, dtype=float)
    raise ValueError(f"mode must be one of {MODULATION_MODES}, got {mode!r}")


def modulate(signal: np.ndarray, mode: ModulationMode) -> np.ndarray:
    """``out[n] = signal[n] * carrier(mode, n)``; returns a new array."""
    x = np.asarray(signal, dtype=float)
    if x.ndim != 1:
        raise ValueError(f"signal must be 1D, got shape {x.shape}")
    return x * carrier(mode, x.size)


def generate_modulated(
    n: int,
    x_min: float,
    x_max: float,
    evaluate: EvaluatorLike,
    mode: ModulationMode,
) -> ModulatedSignal:
    """Sample ``n`` linearly spaced points over ``[x_min, x_max]`` and modulate them."""
    if mode not in MODULATION_MODES:
        raise ValueError(f"mode must be one of {MODULATION_MODES}, got {mode!r}")
    sig = generate_linear(n, x_min, x_max, evaluate)
    return ModulatedSignal(
        x=sig.x,
        y=modulate(sig.y, mode),
        mode=mode,
        failed=sig.failed,
        warnings=sig.warnings,
    )
