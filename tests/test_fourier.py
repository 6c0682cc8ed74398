import numpy as np
import pytest

from wavebank.catalog import WaveShape
from wavebank.dsp.fourier import rfft_norm, sigma, harmonic_amplitudes
from wavebank.dsp.transfers import LowPass1
from wavebank.synth import synthesize, BankConfig


def assert_close(a, b):
    assert len(a) == len(b)
    assert np.allclose(a, b)


pulse = [1, 0, 0, 0]
expected = [0.25] * 3


def test_rfft_norm():
    assert_close(rfft_norm(pulse), expected)


def test_sigma():
    assert sigma(0, 4) == 1
    assert sigma(1, 1) == pytest.approx(2 / np.pi)
    assert sigma(5, 4) == pytest.approx(0, abs=1e-15)

    # Monotonic taper from 1 to 0.
    taper = sigma(np.arange(6), 5)
    assert np.all(np.diff(taper) < 0)


def test_harmonic_amplitudes():
    t = np.arange(16) / 16
    wave = 0.25 + 0.5 * np.sin(2 * np.pi * 3 * t + 1) + 0.125 * np.cos(2 * np.pi * 8 * t)

    amplitudes = harmonic_amplitudes(wave)
    assert len(amplitudes) == 9
    expected = np.zeros(9)
    expected[[0, 3, 8]] = [0.25, 0.5, 0.125]
    np.testing.assert_allclose(amplitudes, expected, atol=1e-12)


def test_lowpass():
    lowpass = LowPass1(2, phase_delay=True)
    assert lowpass(0) == 1
    assert lowpass(2) == pytest.approx(1 / (1 + 1j))
    assert LowPass1(2)(2) == pytest.approx(2 ** -0.5)


@pytest.mark.parametrize('cutoff', [0.5, 2 ** 0.5, 10])
def test_filtered_square(cutoff):
    """ Each harmonic of the filtered square is the square's, scaled by |H(k)|. """
    cfg = BankConfig(nband=6)
    square = synthesize(WaveShape('Square', 'sqr', smooth=False), cfg)
    filtered = synthesize(WaveShape('Filtered', 'lpsqr', cutoff, smooth=False), cfg)

    lowpass = LowPass1(cutoff)
    for wave, expected in zip(square.bands, filtered.bands):
        amplitudes = harmonic_amplitudes(wave)
        gain = lowpass(np.arange(len(amplitudes)))
        np.testing.assert_allclose(harmonic_amplitudes(expected), amplitudes * gain, atol=1e-12)
