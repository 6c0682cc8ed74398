from typing import List, Union

import numpy as np


InputWave = Union[np.ndarray, List[float]]
SpectrumType = 'np.ndarray'


# Anti-Gibbs window

def sigma(k, n):
    """ Lanczos sigma factor of harmonic k, for a series truncated after harmonic n.

    sinc(pi k / (n+1)), where sinc(x) = sin(x)/x. Tapers to 0 one harmonic past n.
    """
    return np.sinc(k / (n + 1))


# Non-Nyquist-preserving FFT

def rfft_norm(signal: InputWave, *args, **kwargs) -> SpectrumType:
    """ Computes "normalized" FFT of signal. """
    return np.fft.rfft(signal, *args, **kwargs) / len(signal)


# Utility

def harmonic_amplitudes(wave: InputWave) -> np.ndarray:
    """ Peak amplitude of each harmonic of a single-cycle wave. [0] is the DC offset.

    A sine of amplitude A at harmonic k yields A at index k.
    """
    amplitudes = np.abs(rfft_norm(wave))
    amplitudes[1:] *= 2

    nsamp = len(wave)
    if nsamp % 2 == 0:
        # The Nyquist bin is not mirrored.
        amplitudes[-1] /= 2
    return amplitudes
