"""
Spectrum renderer.

Mapping law (the only contract consumers must reproduce):
- frequency maps linearly from ``[-w_max, w_max)`` to the horizontal extent
- amplitude maps linearly from ``[0, max_amp]`` to the vertical extent
  (bottom to top); a ``max_amp`` at or below ``1e-12`` is treated as ``1.0``

``map_spectrum`` and ``grid_ticks`` implement the law for pixel viewports;
the ``draw_*`` helpers reproduce it on Matplotlib axes by fixing the axis
limits to the same intervals.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from fourier_viewer.models.signals import ModulatedSignal, SampledSignal
from fourier_viewer.models.spectrum import FourierSpectrum, Spectrogram


AMP_FLOOR = 1e-12

_BG = "#191919"
_GRID = "#3c3c3c"
_TEXT = "#c8c8c8"


@dataclass(frozen=True)
class Viewport:
    """Plot area in pixel coordinates (y grows downwards)."""

    left: float
    top: float
    right: float
    bottom: float

    @classmethod
    def from_rect(
        cls,
        p0: Tuple[float, float],
        p1: Tuple[float, float],
        *,
        insets: Tuple[float, float, float, float] = (50.0, 10.0, 10.0, 25.0),
    ) -> Viewport:
        """Plot area inside the rectangle ``p0..p1`` leaving room for labels.

        ``insets`` are (left, top, right, bottom) margins in pixels.
        """
        il, it, ir, ib = insets
        return cls(left=p0[0] + il, top=p0[1] + it, right=p1[0] - ir, bottom=p1[1] - ib)

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top


@dataclass(frozen=True)
class GridTicks:
    x_values: np.ndarray
    x_labels: Tuple[str, ...]
    y_values: np.ndarray
    y_labels: Tuple[str, ...]


def amplitude_scale(spec: FourierSpectrum) -> float:
    return float(spec.max_amp) if spec.max_amp > AMP_FLOOR else 1.0


def map_spectrum(spec: FourierSpectrum, vp: Viewport) -> Tuple[np.ndarray, np.ndarray]:
    """Pixel coordinates of the polyline through ``(freqs[i], magn[i])``."""
    n = min(len(spec.freqs), len(spec.magn))
    w_min = -spec.w_max
    w_range = 2.0 * spec.w_max
    amp = amplitude_scale(spec)

    t = (np.asarray(spec.freqs[:n], dtype=float) - w_min) / w_range
    px = vp.left + t * vp.width
    py = vp.bottom - (np.asarray(spec.magn[:n], dtype=float) / amp) * vp.height
    return px, py


def grid_ticks(spec: FourierSpectrum, n_x: int = 6, n_y: int = 4) -> GridTicks:
    """Evenly spaced grid lines with their labels ("%.1f" frequency, "%.2f" amplitude)."""
    tx = np.arange(n_x + 1, dtype=float) / n_x
    ty = np.arange(n_y + 1, dtype=float) / n_y
    x_values = -spec.w_max + tx * 2.0 * spec.w_max
    y_values = ty * amplitude_scale(spec)
    return GridTicks(
        x_values=x_values,
        x_labels=tuple(f"{v:.1f}" for v in x_values),
        y_values=y_values,
        y_labels=tuple(f"{v:.2f}" for v in y_values),
    )


def _style_axes(ax) -> None:
    ax.set_facecolor(_BG)
    ax.grid(True, color=_GRID, linewidth=0.8)
    ax.tick_params(colors=_TEXT, labelcolor="#333333")


def draw_transform(ax, spec: FourierSpectrum, color: str = "#e0602a"):
    """Draw the centred spectrum on ``ax``; returns the Line2D."""
    ticks = grid_ticks(spec)
    _style_axes(ax)
    (line,) = ax.plot(spec.freqs, spec.magn, color=color, linewidth=2.0)
    ax.set_xlim(-spec.w_max, spec.w_max)
    ax.set_ylim(0.0, amplitude_scale(spec))
    ax.set_xticks(ticks.x_values, labels=list(ticks.x_labels))
    ax.set_yticks(ticks.y_values, labels=list(ticks.y_labels))
    ax.set_xlabel("w (rad/s)")
    ax.set_ylabel("|F(w)|")
    return line


def draw_curve(
    ax,
    signal: SampledSignal | ModulatedSignal,
    color: str = "#50a0ff",
    *,
    highlight: Optional[Sequence[float]] = None,
    highlight_color: str = "#ff00ff",
    label: Optional[str] = None,
):
    """Draw ``(x, y)`` as a polyline; ``highlight=(a, b)`` shades the analysed window."""
    (line,) = ax.plot(signal.x, signal.y, color=color, linewidth=2.0, label=label)
    ax.axhline(0.0, color="red", linewidth=0.8)
    ax.axvline(0.0, color="red", linewidth=0.8)
    if highlight is not None:
        a, b = highlight
        ax.axvspan(a, b, facecolor=highlight_color, alpha=0.25, edgecolor="blue")
    ax.grid(True, alpha=0.24)
    ax.set_xlabel("x")
    ax.set_ylabel("f(x)")
    return line


def draw_spectrogram(ax, sg: Spectrogram, sample_rate: float):
    """Amplitude image, time (frame centre, s) on x and frequency (Hz) on y."""
    if len(sg) == 0:
        ax.text(0.5, 0.5, "no complete frame", ha="center", va="center", transform=ax.transAxes)
        return None
    fs = float(sample_rate)
    t = (sg.starts + sg.frame_size / 2.0) / fs
    f = sg.freqs(fs)
    mesh = ax.pcolormesh(t, f, sg.frames.T, shading="nearest")
    ax.set_xlabel("t [s]")
    ax.set_ylabel("f [Hz]")
    return mesh
