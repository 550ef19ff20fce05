"""Fourier Viewer -- interactive time/frequency views of a user-typed function.

A real-valued function of one variable is typed as an expression, sampled,
and shown both as a time-domain curve and as a frequency-domain spectrum.

This package provides tools for:
- Sampling an arbitrary evaluator on uniform-rate or linearly spaced grids
- Direct discrete Fourier transforms (full-signal and short-time/windowed)
- Centred, energy-normalised spectra for interactive display
- Single-sided amplitude spectra and Hann-windowed spectrograms
- A carrier-modulated variant of the sampled signal

Key principles:
- Forward analysis only: no inverse transform, no overlap-add synthesis
- The evaluator is called exactly once per sample, in ascending order
- Degenerate configuration is rejected at the boundary, never turned into Inf/NaN

Main subpackages:
- analysis: Sampling, windowing, DFT, amplitude, STFT, modulation, view refresh
- models: Result containers (FourierSpectrum, Spectrogram, ...) and ViewerProfile
- gui: ipywidgets front-end and the matplotlib spectrum renderer
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
