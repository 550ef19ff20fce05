"""Spectrum containers produced by the analysis engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import numpy as np
import pandas as pd


@dataclass(frozen=True)
class FourierSpectrum:
    """Centred, energy-normalised spectrum for interactive display.

    Attributes
    ----------
    freqs:
        Angular frequencies in rad/s, strictly ascending over ``[-w_max, w_max)``.
        ``freqs[0] == -w_max`` exactly.
    magn:
        ``|X|/N`` per bin, same length as ``freqs``.
    w_max:
        Radial Nyquist bound ``pi/dt``.
    max_amp:
        ``max(magn)``.
    warnings:
        Notes carried over from sampling.
    """

    freqs: np.ndarray
    magn: np.ndarray
    w_max: float
    max_amp: float
    warnings: tuple[str, ...] = ()

    def __len__(self) -> int:
        return int(self.freqs.size)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame({"w_rad_s": self.freqs, "magnitude": self.magn})


@dataclass(frozen=True)
class Spectrogram:
    """Sequence of single-sided amplitude spectra over sliding frames.

    ``frames`` has shape ``(n_frames, frame_size//2 + 1)``; row ``i`` is the
    spectrum of the frame starting at sample ``starts[i]``. Iterating yields
    the rows in order and can be repeated.
    """

    frames: np.ndarray
    starts: np.ndarray
    frame_size: int
    hop: int

    def __len__(self) -> int:
        return int(self.frames.shape[0])

    def __iter__(self) -> Iterator[np.ndarray]:
        for i in range(len(self)):
            yield self.frames[i]

    @property
    def n_bins(self) -> int:
        return self.frame_size // 2 + 1

    def freqs(self, sample_rate: float) -> np.ndarray:
        """Hz value of each single-sided bin for the given sample rate."""
        k = np.arange(self.n_bins, dtype=float)
        return k * float(sample_rate) / float(self.frame_size)

    def to_frame(self, sample_rate: float | None = None) -> pd.DataFrame:
        """Long-format table: one row per (frame, bin)."""
        n_frames, n_bins = len(self), self.n_bins
        frame_idx = np.repeat(np.arange(n_frames), n_bins)
        bins = np.tile(np.arange(n_bins), n_frames)
        data = {
            "frame": frame_idx,
            "start": np.repeat(self.starts, n_bins),
            "bin": bins,
            "amplitude": self.frames.reshape(-1),
        }
        if sample_rate is not None:
            data["f_hz"] = np.tile(self.freqs(sample_rate), n_frames)
        return pd.DataFrame(data)
