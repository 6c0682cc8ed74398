"""
Fourier series of the waveform catalog.

Every series has the signature `func(t, k, n, param)`:

- t: phase array in [0, 1)
- k: harmonic index. k=0 returns the DC offset.
- n: harmonic limit of the band being synthesized.
- param: shape parameter, already validated against the series' Domain.

For k >= 1, the returned value is harmonic k's unwindowed contribution at t.
The synthesizer applies the sigma window, so series never call it.
"""

import math
from typing import Callable, Dict, Optional, Union

import numpy as np
from dataclasses import dataclass
from scipy import special

from wavebank.dsp.transfers import LowPass1

PI = np.pi
TAU = 2 * np.pi

Phase = np.ndarray
Harmonic = Union[np.ndarray, float]
SeriesFunc = Callable[[Phase, int, int, Optional[float]], Harmonic]


@dataclass(frozen=True)
class Domain:
    """ Interval of valid parameter values, closed unless `open_lo`. """
    lo: float = -math.inf
    hi: float = math.inf
    integer: bool = False
    open_lo: bool = False

    def check(self, name: str, value: float) -> float:
        if value is None or isinstance(value, bool):
            raise ValueError(f'{name}: parameter required, got {value!r}')
        value = float(value)
        if not math.isfinite(value):
            raise ValueError(f'{name}: parameter {value} is not finite')

        below = value <= self.lo if self.open_lo else value < self.lo
        if below or value > self.hi:
            lbrace = '(' if self.open_lo else '['
            raise ValueError(
                f'{name}: parameter {value} outside {lbrace}{self.lo}, {self.hi}]')

        if self.integer:
            if not value.is_integer():
                raise ValueError(f'{name}: parameter {value} must be an integer')
            return int(value)
        return value


@dataclass(frozen=True)
class Series:
    name: str
    func: SeriesFunc
    default: Optional[float] = None
    domain: Optional[Domain] = None     # None: takes no parameter

    def __call__(self, t: Phase, k: int, n: int, param=None) -> Harmonic:
        return self.func(t, k, n, param)

    def validate(self, param: Optional[float]) -> Optional[float]:
        """ Returns `param` (or the named default) checked against the domain. """
        if self.domain is None:
            if param is not None:
                raise ValueError(f'{self.name}: takes no parameter, got {param!r}')
            return None

        if param is None:
            param = self.default
        return self.domain.check(self.name, param)


SERIES: Dict[str, Series] = {}


def series(name: str, default: float = None, domain: Domain = None):
    def register(func: SeriesFunc) -> SeriesFunc:
        if name in SERIES:
            raise ValueError(f'duplicate series {name}')
        SERIES[name] = Series(name, func, default, domain)
        return func
    return register


def get_series(name: str) -> Series:
    try:
        return SERIES[name]
    except KeyError:
        raise ValueError(f'invalid series {name} not in {sorted(SERIES)}')


def _odd(k: int) -> bool:
    return bool(k & 1)


UNIT = Domain(0, 1)


# Basic shapes

@series('sine')
def sine(t, k, n, _):
    return np.sin(TAU * t) if k == 1 else 0.0


@series('sqr')
def sqr(t, k, n, _):
    if not _odd(k):
        return 0.0
    return 4 / PI * np.sin(TAU * k * t) / k


@series('rect', default=0.5, domain=UNIT)
def rect(t, k, n, duty):
    if k == 0:
        return 2 * duty - 1
    return 4 / PI * math.sin(PI * k * duty) * np.cos(TAU * k * (t - 0.5 * duty)) / k


@series('saw')
def saw(t, k, n, _):
    if k == 0:
        return 0.0
    return -2 / PI * np.sin(TAU * k * t) / k


@series('tri')
def tri(t, k, n, _):
    if not _odd(k):
        return 0.0
    s = 8 / PI ** 2 * np.sin(TAU * k * t) / k ** 2
    return -s if k & 2 else s


# Variable-width shapes.
# np.sinc(x) = sin(pi x) / (pi x) is 1 at x=0, which removes the 0/0 at the
# degenerate end of each parameter range.

@series('tri2', default=0.5, domain=Domain(0, 1, open_lo=True))
def tri2(t, k, n, ratio):
    """ Asymmetric triangle. ratio=1 degenerates into a sawtooth. """
    if k == 0:
        return 0.0
    return -2 / (PI * k * ratio) * np.sinc(k * (1 - ratio)) * np.sin(TAU * k * (t + 0.5))


@series('sqr2', default=0.5, domain=UNIT)
def sqr2(t, k, n, width):
    """ Square with both edges moved towards each other. width=0.5 is a square. """
    if not _odd(k):
        return 0.0
    return (4 / PI * math.cos(PI * k * (0.5 - width))
            * np.sin(TAU * k * (t + 0.5 * width + 0.75)) / k)


@series('trap', default=0.25, domain=Domain(0, 0.5))
def trap(t, k, n, plateau):
    """ Trapezoid. plateau=0 is a triangle, plateau=0.5 is a square.

    2/(pi^2 (1/2-p)) * (sin 2pi k(t-p/2) + sin 2pi k(t+p/2)) / k^2, with the
    sign flipped when k & 2, reduces to 4/pi * sinc(k(1/2-p)) * sin(2pi k t) / k.
    """
    if not _odd(k):
        return 0.0
    return 4 / PI * np.sinc(k * (0.5 - plateau)) * np.sin(TAU * k * t) / k


@series('trip', default=0.5, domain=UNIT)
def trip(t, k, n, width):
    """ Triangular pulse rising from -1. width=0 is silent (constant -1). """
    if k == 0:
        return width - 1
    return 2 * width * np.sinc(0.5 * k * width) ** 2 * np.cos(TAU * k * (t - 0.5 * width))


@series('stairs', default=0.25, domain=Domain(0, 0.5))
def stairs(t, k, n, step):
    """ 2/3 square plus 1/3 pulse at twice the frequency. """
    if k == 0:
        return (4 * step - 1) / 3
    if _odd(k):
        return 8 / (3 * PI) * np.sin(TAU * k * t) / k

    j = k // 2
    return 4 / (3 * PI) * math.sin(TAU * j * step) * np.cos(TAU * k * (t - 0.5 * step)) / j


# Rectified sines

@series('full')
def full(t, k, n, _):
    if k == 0:
        return 4 / PI - 1
    return -8 / PI * np.cos(TAU * k * t) / (4 * k * k - 1)


@series('half')
def half(t, k, n, _):
    if k == 0:
        return 2 / PI - 1
    if k == 1:
        return np.sin(TAU * t)
    if _odd(k):
        return 0.0
    return -4 / PI * np.cos(TAU * k * t) / (k * k - 1)


# Filtered

@series('lpsqr', default=math.sqrt(2), domain=Domain(0, math.inf, open_lo=True))
def lpsqr(t, k, n, cutoff):
    """ Square through a one-pole low-pass filter, cutoff in harmonics. """
    if not _odd(k):
        return 0.0
    transfer = LowPass1(cutoff, phase_delay=True)(k)
    return 4 / PI * (transfer * np.exp(1j * TAU * k * t)).imag / k


# Organs

STOPS = Domain(1, 9, integer=True)


def combo_stop(k: int, stops: int) -> int:
    """ Returns the footage multiplier `m` sounding harmonic k, or 0.

    Stop i (< stops) contributes the odd harmonics of 2**i.
    """
    for i in range(stops):
        m = 1 << i
        if (k & (2 * m - 1)) == m:
            return m
    return 0


@series('combo', default=3, domain=STOPS)
def combo(t, k, n, stops):
    m = combo_stop(k, stops) if k else 0
    if not m:
        return 0.0
    return 4 / (stops * PI) * m * np.sin(TAU * k * t) / k


# Normalized drawbar gain, keyed by drawbar count.
DRAWBAR_GAIN = {
    1: 1.0,
    2: 0.568134086134179594473891938833,
    3: 0.4,
    4: 0.309382307569317671624986587631,
    5: 0.268382163704272314053156378577,
    6: 0.236287471015808936414259733283,
    7: 0.208586523765622755544058009036,
    8: 0.18534593451986317025337314135,
    9: 0.172410339992880773385408588183,
}


def drawbar_sounds(k: int, drawbars: int) -> bool:
    """ Whether harmonic k is sounded by the first `drawbars` drawbars. """
    if k <= 4:
        return k <= drawbars
    if k & 1:
        return False
    if drawbars <= 8:
        return k <= 4 + 2 * (drawbars - 4)
    return k <= 12 or k == 16


@series('ham', default=9, domain=STOPS)
def ham(t, k, n, drawbars):
    if k == 0 or not drawbar_sounds(k, drawbars):
        return 0.0
    return DRAWBAR_GAIN[drawbars] * np.sin(TAU * k * t)


# Bessel spectra

@series('circ')
def circ(t, k, n, _):
    if not _odd(k):
        return 0.0
    return 4 * special.j1(PI * (2 * k - 1)) * np.sin(TAU * k * t) / k


@series('cycloid')
def cycloid(t, k, n, _):
    """ Cycloid arches between cusps at t=0 and t=1, spanning [-1, 1].

    Solving 2 pi t = theta - sin(theta) for y = -cos(theta) gives the
    Kepler series (e=1): y = 1/2 - sum 2/k J'_k(k) cos(2 pi k t).
    """
    if k == 0:
        return 0.5
    return -2 / k * special.jvp(k, k) * np.cos(TAU * k * t)
