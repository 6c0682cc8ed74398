from typing import List, TypeVar

import numpy as np


def band_limits(nband: int) -> List[int]:
    """ Harmonic limit of each band: 1, 2, 4, ... """
    return [1 << i for i in range(nband)]


Numbers = TypeVar('Numbers', float, np.ndarray)


def freq2midi(freq: Numbers) -> Numbers:
    freq_ratio = freq / 440
    semitones = 12 * (np.log(freq_ratio) / np.log(2))
    return semitones + 69
