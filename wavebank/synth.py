import math
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional, Union

import numpy as np
from dataclasses import dataclass, field

from wavebank.catalog import WaveShape
from wavebank.dsp.fourier import sigma
from wavebank.dsp.wave_util import pcm_dtype
from wavebank.outputs.wave import WaveWriter
from wavebank.util.config import Alias, ConfigMixin
from wavebank.util.math import band_limits
from wavebank.util.parsing import safe_eval

NBAND = 8
GAIN = math.sqrt(0.5)


@dataclass
class BankConfig(ConfigMixin):
    nband: int = NBAND
    nsamp: Optional[int] = None     # Defaults to 4 samples per harmonic of the top band.
    length = Alias('nsamp')
    bits: int = 16
    bps = Alias('bits')
    gain: Union[float, str] = GAIN

    def __post_init__(self):
        for key in ['nband', 'nsamp', 'bits']:
            value = getattr(self, key)
            if key == 'nsamp' and value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise ValueError(f'invalid {key} {value!r}, must be an integer')

        if self.nband < 1:
            raise ValueError(f'invalid nband {self.nband}, must be >= 1')
        top = band_limits(self.nband)[-1]

        if self.nsamp is None:
            self.nsamp = 4 * top
        # The top band's highest harmonic must stay below Nyquist.
        if self.nsamp <= 2 * top:
            raise ValueError(
                f'invalid nsamp {self.nsamp}, must be > {2 * top} for nband={self.nband}')

        pcm_dtype(self.bits)
        self.gain = float(safe_eval(self.gain))

    @property
    def size(self) -> int:
        return self.nband * self.nsamp

    @property
    def nbyte(self) -> int:
        return self.size * self.bits // 8


@dataclass(eq=False)
class Bank:
    """ Every band of one shape, concatenated in order of increasing harmonic limit. """
    shape: WaveShape
    cfg: BankConfig
    samples: np.ndarray = field(repr=False)

    def __post_init__(self):
        assert self.samples.shape == (self.cfg.size,), self.samples.shape

    @property
    def bands(self) -> np.ndarray:
        """ View of samples, indexed [band][sample]. """
        return self.samples.reshape(self.cfg.nband, self.cfg.nsamp)

    @property
    def limits(self) -> List[int]:
        return band_limits(self.cfg.nband)


def phases(nsamp: int, phase: float = 0.0) -> np.ndarray:
    """ Sample positions across one cycle, shifted by `phase` cycles, wrapped to [0, 1). """
    t = np.arange(nsamp) / nsamp + phase
    return t - np.floor(t)


def synthesize_band(shape: WaveShape, n: int, t: np.ndarray, gain: float = GAIN) -> np.ndarray:
    """ Sums harmonics 0..n of `shape` at phases t. """
    func = shape.func
    param = shape.param

    acc = np.zeros(len(t))
    acc += func(t, 0, n, param)
    for k in range(1, n + 1):
        y = func(t, k, n, param)
        if shape.smooth:
            y = y * sigma(k, n)
        acc += y

    return gain * acc


def synthesize(shape: WaveShape, cfg: BankConfig = None, workers: int = 1) -> Bank:
    """ Synthesizes one band per harmonic limit into a single buffer.

    Bands are independent. If workers > 1, they are computed on a thread pool,
    each writing its own row of the buffer.
    """
    if cfg is None:
        cfg = BankConfig()

    samples = np.empty(cfg.size)
    bands = samples.reshape(cfg.nband, cfg.nsamp)
    t = phases(cfg.nsamp, shape.phase)

    def render(i: int) -> None:
        n = 1 << i
        bands[i] = synthesize_band(shape, n, t, cfg.gain)

    if workers > 1:
        with ThreadPoolExecutor(workers) as pool:
            # list() propagates exceptions from workers.
            list(pool.map(render, range(cfg.nband)))
    else:
        for i in range(cfg.nband):
            render(i)

    return Bank(shape, cfg, samples)


def write_bank(path: Union[Path, str], bank: Bank) -> bool:
    """ Writes bank to a mono WAV file whose sample rate is the band length.
    Returns False if the file cannot be written in full. """
    cfg = bank.cfg
    try:
        with WaveWriter.open(path, cfg.bits, rate=cfg.nsamp) as writer:
            nbyte = writer.write(bank.samples)
    except OSError:
        return False

    return nbyte == cfg.nbyte


def generate(path: Union[Path, str], shape: WaveShape, cfg: BankConfig = None,
             workers: int = 1) -> bool:
    """ Synthesizes and writes one bank. """
    bank = synthesize(shape, cfg, workers)
    return write_bank(path, bank)
