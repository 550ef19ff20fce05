"""Short-time Fourier magnitude (spectrogram).

Frames of length ``M`` start at ``t = 0, H, 2H, ...`` while ``t + M <= len(x)``;
each is copied, windowed, transformed with :func:`~fourier_viewer.analysis.fourier.dft`
and reduced with :func:`~fourier_viewer.analysis.amplitude.single_sided`.
The frame count is ``(len(x) - M)//H + 1`` when ``len(x) >= M``, else 0.
There is no inverse or overlap-add path.
"""

from __future__ import annotations

from typing import Iterator, Optional

import numpy as np

from fourier_viewer.analysis.amplitude import single_sided
from fourier_viewer.analysis.fourier import DftMethod, dft
from fourier_viewer.analysis.window import apply_window, hann
from fourier_viewer.errors import InvalidRangeError, SizeMismatchError
from fourier_viewer.models.spectrum import Spectrogram


def frame_starts(n_samples: int, frame_size: int, hop: int) -> np.ndarray:
    """Start index of every complete frame."""
    n_samples, frame_size, hop = int(n_samples), int(frame_size), int(hop)
    if frame_size < 1:
        raise InvalidRangeError(f"frame_size must be >= 1, got {frame_size}")
    if hop < 1:
        raise InvalidRangeError(f"hop must be >= 1, got {hop}")
    if n_samples < frame_size:
        return np.zeros(0, dtype=int)
    n_frames = (n_samples - frame_size) // hop + 1
    return np.arange(n_frames, dtype=int) * hop


def _resolve_window(frame_size: int, window: Optional[np.ndarray]) -> np.ndarray:
    if window is None:
        return hann(frame_size)
    w = np.asarray(window, dtype=float)
    if w.ndim != 1 or w.size != frame_size:
        raise SizeMismatchError(f"window length {w.size} does not match frame_size {frame_size}")
    return w


def iter_stft_frames(
    signal: np.ndarray,
    frame_size: int,
    hop: int,
    window: Optional[np.ndarray] = None,
    *,
    method: DftMethod = "direct",
) -> Iterator[np.ndarray]:
    """Yield the single-sided amplitude spectrum of each frame, in order."""
    x = np.asarray(signal, dtype=float)
    if x.ndim != 1:
        raise ValueError(f"signal must be 1D, got shape {x.shape}")
    w = _resolve_window(int(frame_size), window)
    M = w.size

    for t in frame_starts(x.size, M, hop):
        frame = x[t : t + M].copy()
        apply_window(frame, w)
        yield single_sided(dft(frame, method=method))


def stft_magnitude(
    signal: np.ndarray,
    frame_size: int,
    hop: int,
    window: Optional[np.ndarray] = None,
    *,
    method: DftMethod = "direct",
) -> Spectrogram:
    """Spectrogram of ``signal``; ``window`` defaults to ``hann(frame_size)``."""
    frame_size = int(frame_size)
    hop = int(hop)
    x = np.asarray(signal, dtype=float)
    starts = frame_starts(x.size, frame_size, hop)

    frames = np.zeros((starts.size, frame_size // 2 + 1), dtype=float)
    for i, spec in enumerate(iter_stft_frames(x, frame_size, hop, window, method=method)):
        frames[i] = spec

    return Spectrogram(frames=frames, starts=starts, frame_size=frame_size, hop=hop)
