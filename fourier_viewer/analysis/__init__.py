"""Fourier analysis engine.

Design principle:
  - Every call is synchronous and works on explicit inputs; nothing is cached.
  - The evaluator is invoked once per sample, in ascending index order.
  - Degenerate configuration is rejected with the errors of
    :mod:`fourier_viewer.errors`; it is never turned into Inf/NaN.

Data flow: evaluator -> sampling -> {fourier + amplitude | stft | modulation}
-> result containers of :mod:`fourier_viewer.models` -> renderer.
"""

from .sampling import ensure_finite, generate_linear, sample, zero_mean
from .window import apply_window, hann
from .fourier import bin_freq, compute_transform, dft, twiddle
from .amplitude import single_sided
from .stft import iter_stft_frames, stft_magnitude
from .modulation import generate_modulated, modulate
from .view import ViewResult, compute_view

__all__ = [
    "sample",
    "generate_linear",
    "zero_mean",
    "ensure_finite",
    "hann",
    "apply_window",
    "twiddle",
    "dft",
    "bin_freq",
    "compute_transform",
    "single_sided",
    "stft_magnitude",
    "iter_stft_frames",
    "modulate",
    "generate_modulated",
    "ViewResult",
    "compute_view",
]
