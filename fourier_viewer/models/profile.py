"""Viewer profile -- bundles every parameter that affects one view refresh.

A ViewerProfile groups the analysis configuration into one frozen
dataclass. It can be:

- Validated at the boundary (``validate()``) before any sampling happens
- Overridden field-by-field via ``dataclasses.replace()``
- Serialized to/from a dict for JSON provenance
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
import math
from typing import Any, Dict, Literal

from fourier_viewer.errors import EmptySignalError, InvalidRangeError
from fourier_viewer.models.signals import MODULATION_MODES


DisplayMode = Literal["transform", "modulated"]
DISPLAY_MODES: tuple[str, ...] = ("transform", "modulated")
DFT_METHODS: tuple[str, ...] = ("direct", "fft", "auto")


def snap_to_power_of_two(n: int, minimum: int = 64) -> int:
    """Nearest power of two to ``n`` (ties go up), never below ``minimum``."""
    n = int(n)
    hi = 1
    while hi < n:
        hi <<= 1
    lo = hi >> 1
    snapped = lo if (lo > 0 and n - lo < hi - n) else hi
    return max(snapped, int(minimum))


def _require_positive(name: str, value: float) -> None:
    if not math.isfinite(value) or value <= 0.0:
        raise InvalidRangeError(f"{name} must be finite and > 0, got {value!r}")


@dataclass(frozen=True)
class ViewerProfile:
    """Frozen configuration for one analysis refresh.

    Signal
    ------
    expression : str
        Function of ``x`` typed by the user.
    n_samples : int
        N, number of samples for the curve, the transform and the STFT input.
    sample_rate : float
        Fs in Hz, used by the uniform-rate sampler and the STFT frequency axis.
    x_min, x_max : float
        Extent of the time-domain curve and of the modulated signal.

    Transform
    ---------
    center, range : float
        The transform analyses ``[center - range, center + range)``.
    dft_method : str
        "direct" (default), "fft" (power-of-two N only) or "auto".

    Display
    -------
    show_spectrum : bool
        Compute and draw the spectrum pane (transform or modulated signal).
    display_mode : str
        "transform" or "modulated".
    mode : str
        Carrier projection for the modulated display: "real", "imag" or "magnitude".
    show_range : bool
        Shade the analysed window ``[center - range, center + range]`` on the curve.
    show_spectrogram : bool
        Also compute the STFT of the uniformly sampled signal.
    frame_size, hop : int
        STFT frame length M and hop H.
    remove_dc : bool
        Subtract the mean before the STFT.
    func_color, spectrum_color, range_color : str
        Matplotlib colours for the curve, the spectrum and the window shading.
    """

    expression: str = "sin(x)"
    n_samples: int = 512
    sample_rate: float = 64.0
    x_min: float = -10.0
    x_max: float = 10.0

    center: float = 0.0
    range: float = 5.0
    dft_method: str = "direct"

    show_spectrum: bool = True
    display_mode: str = "transform"
    mode: str = "magnitude"
    show_range: bool = True
    show_spectrogram: bool = False
    frame_size: int = 64
    hop: int = 32
    remove_dc: bool = False

    func_color: str = "#50a0ff"
    spectrum_color: str = "#e0602a"
    range_color: str = "#ff00ff"

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate(self) -> "ViewerProfile":
        """Reject degenerate configuration; returns ``self`` for chaining."""
        if int(self.n_samples) < 2:
            raise EmptySignalError(f"n_samples must be >= 2, got {self.n_samples}")
        _require_positive("sample_rate", float(self.sample_rate))
        _require_positive("range", float(self.range))
        if not math.isfinite(float(self.center)):
            raise InvalidRangeError(f"center must be finite, got {self.center!r}")
        if not (math.isfinite(float(self.x_min)) and math.isfinite(float(self.x_max))):
            raise InvalidRangeError("x_min and x_max must be finite")
        if float(self.x_max) <= float(self.x_min):
            raise InvalidRangeError(f"x_max must be > x_min, got [{self.x_min}, {self.x_max}]")
        if int(self.frame_size) < 1:
            raise InvalidRangeError(f"frame_size must be >= 1, got {self.frame_size}")
        if int(self.hop) < 1:
            raise InvalidRangeError(f"hop must be >= 1, got {self.hop}")
        if self.mode not in MODULATION_MODES:
            raise ValueError(f"mode must be one of {MODULATION_MODES}, got {self.mode!r}")
        if self.display_mode not in DISPLAY_MODES:
            raise ValueError(f"display_mode must be one of {DISPLAY_MODES}, got {self.display_mode!r}")
        if self.dft_method not in DFT_METHODS:
            raise ValueError(f"dft_method must be one of {DFT_METHODS}, got {self.dft_method!r}")
        n = int(self.n_samples)
        if self.dft_method == "fft" and (n & (n - 1)) != 0:
            raise ValueError(f"dft_method='fft' needs a power-of-two n_samples, got {n}")
        return self

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-friendly dict."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> ViewerProfile:
        """Reconstruct from a dict (e.g. loaded from JSON). Unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in d.items() if k in known})
