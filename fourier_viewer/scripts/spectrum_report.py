"""
Print the strongest bins of the centred spectrum of an expression.

Examples
--------
python -m fourier_viewer.scripts.spectrum_report "cos(4x)" --range 3.14159 -n 64
python -m fourier_viewer.scripts.spectrum_report "exp(-x^2)" --csv spectrum.csv
"""

from __future__ import annotations

from dataclasses import replace
from typing import Optional, Sequence

import numpy as np

from fourier_viewer.analysis.view import compute_view
from fourier_viewer.errors import EvaluatorError
from fourier_viewer.expression import ExpressionEvaluator
from fourier_viewer.models.profile import ViewerProfile
from fourier_viewer.models.spectrum import FourierSpectrum


def top_bins(spec: FourierSpectrum, count: int = 5) -> list[tuple[int, float, float]]:
    """``(index, w_rad_s, magnitude)`` of the ``count`` largest bins, strongest first."""
    order = np.argsort(-np.nan_to_num(spec.magn, nan=-np.inf), kind="stable")[: int(count)]
    return [(int(i), float(spec.freqs[i]), float(spec.magn[i])) for i in order]


def main(argv: Optional[Sequence[str]] = None) -> int:
    import argparse
    import textwrap

    p = argparse.ArgumentParser(
        prog="python -m fourier_viewer.scripts.spectrum_report",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=textwrap.dedent(
            """\
            Sample f(x) over [center-range, center+range), compute the centred
            magnitude spectrum |X|/N and print its strongest bins.
            """
        ),
    )
    p.add_argument("expression", help="Function of x, e.g. 'sin(3x) + 0.5'")
    p.add_argument("-n", "--n-samples", type=int, default=ViewerProfile.n_samples, help="Number of samples N")
    p.add_argument("--center", type=float, default=ViewerProfile.center, help="Window center")
    p.add_argument("--range", type=float, default=ViewerProfile.range, help="Window half-width (> 0)")
    p.add_argument("--method", choices=("direct", "fft", "auto"), default="direct", help="DFT method")
    p.add_argument("--top", type=int, default=5, help="Number of bins to print")
    p.add_argument("--csv", default=None, help="Optional path for the full spectrum table")
    ns = p.parse_args(argv)

    profile = replace(
        ViewerProfile(),
        expression=ns.expression,
        n_samples=ns.n_samples,
        center=ns.center,
        range=ns.range,
        dft_method=ns.method,
    )

    try:
        res = compute_view(profile, ExpressionEvaluator())
    except (ValueError, EvaluatorError) as exc:
        print(f"ERROR: {exc}")
        return 2

    spec = res.spectrum
    for msg in res.warnings:
        print(f"WARNING: {msg}")
    print(f"N={profile.n_samples}  w_max={spec.w_max:.6g} rad/s  max_amp={spec.max_amp:.6g}")
    for i, w, m in top_bins(spec, ns.top):
        print(f"  bin {i:6d}  w={w:+.6g} rad/s  |F|={m:.6g}")

    if ns.csv:
        spec.to_frame().to_csv(ns.csv, index=False)
        print(f"wrote: {ns.csv}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
