"""One view refresh: validate the profile, then compute what the display needs.

The GUI calls :func:`compute_view` once per refresh. Everything is recomputed
from scratch on each call.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from fourier_viewer.analysis.fourier import compute_transform
from fourier_viewer.analysis.modulation import modulate
from fourier_viewer.analysis.sampling import generate_linear, sample, zero_mean
from fourier_viewer.analysis.stft import stft_magnitude
from fourier_viewer.analysis.window import hann
from fourier_viewer.expression import EvaluatorLike
from fourier_viewer.models.profile import ViewerProfile
from fourier_viewer.models.signals import ModulatedSignal, SampledSignal
from fourier_viewer.models.spectrum import FourierSpectrum, Spectrogram


@dataclass(frozen=True)
class ViewResult:
    """Everything one refresh produces.

    When ``profile.show_spectrum`` is set, only the member matching
    ``profile.display_mode`` is set among ``spectrum``/``modulated``;
    ``spectrogram`` is set when requested.
    """

    profile: ViewerProfile
    curve: SampledSignal
    spectrum: Optional[FourierSpectrum] = None
    modulated: Optional[ModulatedSignal] = None
    spectrogram: Optional[Spectrogram] = None
    warnings: tuple[str, ...] = ()


def _merge_warnings(*groups: tuple[str, ...]) -> tuple[str, ...]:
    out: list[str] = []
    for g in groups:
        for msg in g:
            if msg not in out:
                out.append(msg)
    return tuple(out)


def compute_view(profile: ViewerProfile, evaluator: EvaluatorLike) -> ViewResult:
    """Compute curve, spectrum or modulated signal, and optional spectrogram.

    If ``evaluator`` has ``set_expression``, ``profile.expression`` is bound first
    (an :class:`~fourier_viewer.errors.ExpressionParseError` propagates).
    """
    profile.validate()

    set_expression = getattr(evaluator, "set_expression", None)
    if callable(set_expression):
        set_expression(profile.expression)

    curve = generate_linear(profile.n_samples, profile.x_min, profile.x_max, evaluator)
    groups = [curve.warnings]

    spectrum = None
    modulated = None
    if profile.show_spectrum and profile.display_mode == "transform":
        spectrum = compute_transform(
            evaluator, profile.center, profile.range, profile.n_samples, method=profile.dft_method
        )
        groups.append(spectrum.warnings)
    elif profile.show_spectrum:
        # same grid as the curve, so the evaluator is not run a second time
        modulated = ModulatedSignal(
            x=curve.x,
            y=modulate(curve.y, profile.mode),
            mode=profile.mode,
            failed=curve.failed,
            warnings=curve.warnings,
        )

    spectrogram = None
    if profile.show_spectrogram:
        sig = sample(evaluator, profile.n_samples, profile.sample_rate)
        groups.append(sig.warnings)
        y = sig.y.copy()
        if profile.remove_dc:
            zero_mean(y)
        # frame_size need not be a power of two, so "fft" degrades to "auto" here
        method = "direct" if profile.dft_method == "direct" else "auto"
        spectrogram = stft_magnitude(y, profile.frame_size, profile.hop, hann(profile.frame_size), method=method)
        if len(spectrogram) == 0:
            groups.append(
                (f"spectrogram is empty: frame_size={profile.frame_size} > n_samples={profile.n_samples}",)
            )

    return ViewResult(
        profile=profile,
        curve=curve,
        spectrum=spectrum,
        modulated=modulated,
        spectrogram=spectrogram,
        warnings=_merge_warnings(*groups),
    )
