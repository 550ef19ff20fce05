from __future__ import annotations

import math

import numpy as np
import pytest

from fourier_viewer.analysis.fourier import (
    bin_freq,
    centered_indices,
    compute_transform,
    dft,
    is_power_of_two,
    twiddle,
)
from fourier_viewer.errors import EmptySignalError, InvalidRangeError


def test_twiddle_values() -> None:
    assert twiddle(0, 5, 8) == pytest.approx(1.0 + 0j)
    assert twiddle(1, 2, 8) == pytest.approx(-1j, abs=1e-15)
    assert twiddle(2, 2, 8) == pytest.approx(-1.0 + 0j, abs=1e-15)
    assert abs(twiddle(3, 7, 11)) == pytest.approx(1.0)


def test_dft_cosine_at_quarter_rate() -> None:
    x = np.array([1.0, 0.0, -1.0, 0.0, 1.0, 0.0, -1.0, 0.0])
    X = dft(x)
    mag = np.abs(X)
    assert mag[2] == pytest.approx(4.0)
    assert mag[6] == pytest.approx(4.0)
    for k in (0, 1, 3, 4, 5, 7):
        assert mag[k] < 1e-9


def test_dft_energy_concentration_n64() -> None:
    N = 64
    n = np.arange(N)
    x = np.cos(2.0 * np.pi * 5 * n / N)
    mag = np.abs(dft(x))
    peak = min(mag[5], mag[59])
    others = np.delete(mag, [5, 59])
    assert others.size == 62
    assert np.all(peak >= 10.0 * others)
    assert mag[5] == pytest.approx(32.0)


def test_dft_matches_definition_small() -> None:
    rng = np.random.default_rng(1)
    x = rng.normal(size=7)
    X = dft(x)
    N = x.size
    for k in range(N):
        s = sum(x[j] * complex(math.cos(-2 * math.pi * k * j / N), math.sin(-2 * math.pi * k * j / N)) for j in range(N))
        assert X[k] == pytest.approx(s, abs=1e-12)


def test_dft_larger_than_one_block() -> None:
    # crosses the internal row-block boundary
    rng = np.random.default_rng(2)
    x = rng.normal(size=300)
    assert np.allclose(dft(x), np.fft.fft(x), atol=1e-9)


def test_fft_method_equivalent_for_power_of_two() -> None:
    rng = np.random.default_rng(3)
    x = rng.normal(size=128)
    assert np.allclose(dft(x, method="fft"), dft(x, method="direct"), atol=1e-9)
    assert np.allclose(dft(x, method="auto"), dft(x), atol=1e-9)


def test_fft_method_rejects_other_sizes() -> None:
    with pytest.raises(ValueError):
        dft(np.ones(12), method="fft")
    with pytest.raises(ValueError):
        dft(np.ones(8), method="bogus")
    # auto falls back to the direct sum
    assert np.allclose(dft(np.ones(12), method="auto")[0], 12.0)


def test_is_power_of_two() -> None:
    assert [n for n in range(0, 20) if is_power_of_two(n)] == [1, 2, 4, 8, 16]


def test_bin_freq() -> None:
    assert bin_freq(0, 64, 1000.0) == 0.0
    assert bin_freq(16, 64, 1000.0) == 250.0
    assert np.allclose(bin_freq(np.arange(4), 4, 8.0), [0.0, 2.0, 4.0, 6.0])


def test_centered_indices() -> None:
    assert centered_indices(8).tolist() == [4, 5, 6, 7, 0, 1, 2, 3]
    assert centered_indices(5).tolist() == [2, 3, 4, 0, 1]


def test_compute_transform_invariants() -> None:
    spec = compute_transform(lambda x: math.cos(3.0 * x) + 0.5, 1.0, 4.0, 64)
    assert len(spec.freqs) == len(spec.magn) == 64
    assert np.all(np.diff(spec.freqs) > 0.0)
    assert spec.freqs[0] == -spec.w_max
    assert spec.freqs[-1] < spec.w_max
    assert spec.max_amp == np.max(spec.magn)
    assert np.all(spec.magn >= 0.0)
    # T = 8, dt = 1/8, w_max = pi/dt
    assert spec.w_max == pytest.approx(8.0 * np.pi)


def test_compute_transform_samples_window_in_order() -> None:
    calls = []

    def f(x: float) -> float:
        calls.append(x)
        return 0.0

    compute_transform(f, 2.0, 1.0, 4)
    assert np.allclose(calls, [1.0, 1.5, 2.0, 2.5])


def test_compute_transform_dc_lands_mid_spectrum() -> None:
    spec = compute_transform(lambda x: 3.0, 0.0, 1.0, 16)
    assert spec.freqs[8] == pytest.approx(0.0)
    assert spec.magn[8] == pytest.approx(3.0)
    assert spec.max_amp == pytest.approx(3.0)
    assert np.all(np.delete(spec.magn, 8) < 1e-12)


def test_compute_transform_matches_fftshift_for_even_n() -> None:
    N = 32
    f = lambda x: math.sin(2.0 * x) + 0.3 * math.cos(5.0 * x)
    spec = compute_transform(f, 0.0, 3.0, N)
    dt = 6.0 / N
    x = np.array([f(-3.0 + k * dt) for k in range(N)])
    ref = np.abs(np.fft.fftshift(np.fft.fft(x))) / N
    assert np.allclose(spec.magn, ref, atol=1e-12)


def test_compute_transform_rejects_zero_range() -> None:
    with pytest.raises(InvalidRangeError):
        compute_transform(lambda x: x, 0.0, 0.0, 16)
    with pytest.raises(InvalidRangeError):
        compute_transform(lambda x: x, 0.0, -1.0, 16)
    with pytest.raises(InvalidRangeError):
        compute_transform(lambda x: x, float("inf"), 1.0, 16)


def test_compute_transform_rejects_tiny_n() -> None:
    with pytest.raises(EmptySignalError):
        compute_transform(lambda x: x, 0.0, 1.0, 1)


def test_compute_transform_propagates_nan_with_warning() -> None:
    spec = compute_transform(lambda x: float("nan") if x == 0.0 else 1.0, 0.0, 1.0, 8)
    assert np.all(np.isnan(spec.magn))
    assert any("non-finite" in m for m in spec.warnings)


def test_spectrum_to_frame() -> None:
    spec = compute_transform(lambda x: 1.0, 0.0, 1.0, 8)
    df = spec.to_frame()
    assert list(df.columns) == ["w_rad_s", "magnitude"]
    assert len(df) == 8
