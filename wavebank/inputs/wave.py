import warnings
from pathlib import Path
from typing import Tuple, Union, Optional

import numpy as np
from scipy.io import wavfile

from wavebank.dsp.wave_util import from_pcm


def load_bank(wav_path: Union[Path, str], nsamp: Optional[int] = None
              ) -> Tuple[int, np.ndarray]:
    """ Loads a bank from file. Returns sr, bands[band][sample] in [-1, 1).

    Bank files carry no band metadata. By convention the sample rate holds the
    band length, which is used unless `nsamp` is given.
    """

    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        sr, data = wavfile.read(str(wav_path))  # type: int, np.ndarray

    if data.ndim != 1:
        raise ValueError(f'{wav_path}: bank must be mono, got {data.shape[1]} channels')

    if nsamp is None:
        nsamp = sr
    if nsamp <= 0 or len(data) % nsamp:
        raise ValueError(
            f'{wav_path}: {len(data)} samples is not a whole number of {nsamp}-sample bands')

    return sr, from_pcm(data).reshape(-1, nsamp)
